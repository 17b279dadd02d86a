"""
modules/llms/models.py — ORM models for AI provider credentials.

Owns tables: llm_configs
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Boolean, Text

from core.base import Base, new_id


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class LlmConfig(Base):
    """Credentials for one AI model. Any number may be active at once."""
    __tablename__ = "llm_configs"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    provider = Column(String(50), nullable=False)
    api_key = Column(Text, nullable=False)  # Fernet-encrypted
    model = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, index=True)
