"""
modules/instances/models.py — ORM models for the instances domain.

Owns tables: instances
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Boolean, Enum as SQLEnum

from core.base import Base, InstanceStatus, new_id, _ENUM_VALUES


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Instance(Base):
    """
    A WhatsApp session managed through the Evolution gateway.

    ``name`` is the key shared with the gateway. ``status`` and ``phone`` are
    overwritten by every sync; the webhook and alert fields are local only.
    """
    __tablename__ = "instances"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    status = Column(
        SQLEnum(InstanceStatus, values_callable=_ENUM_VALUES, native_enum=False),
        default=InstanceStatus.DISCONNECTED,
        nullable=False,
    )
    phone = Column(String(100))
    webhook_url = Column(String(500))
    alert_enabled = Column(Boolean, default=False, nullable=False)
    alert_email = Column(String(255))
    created_at = Column(DateTime, default=_utcnow, index=True)
