"""
core/base.py — Declarative Base and shared enums.

All ORM models import Base from here.
Enums used across more than one module live here to avoid circular
imports between domain modules.
"""

import uuid
from enum import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Primary key generator for string-keyed tables."""
    return str(uuid.uuid4())


class UserRole(str, Enum):
    ADMINISTRATOR = "administrator"
    OPERATOR = "operator"


class InstanceStatus(str, Enum):
    """Local connection status of a WhatsApp instance."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"

    @classmethod
    def from_remote(cls, remote_status) -> "InstanceStatus":
        """Map a gateway connection state to the local vocabulary.

        "open" is a live session, "connecting" is waiting for a QR scan,
        everything else (including "close" and missing values) is disconnected.
        """
        if remote_status == "open":
            return cls.CONNECTED
        if remote_status == "connecting":
            return cls.CONNECTING
        return cls.DISCONNECTED


# SQLAlchemy 2.x defaults to using enum member NAMES as DB values.
# We want member VALUES (lowercase strings) instead.
_ENUM_VALUES = lambda x: [e.value for e in x]
