"""
core/models.py — Core/system ORM models.

Owns tables: audit_logs
"""

from sqlalchemy import Column, String, DateTime, Integer, Text
from sqlalchemy.sql import func

from core.base import Base


class AuditLog(Base):
    """Append-only record of administrative actions."""
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36))
    username = Column(String(100))
    action = Column(String(50), nullable=False)  # e.g., "INSTANCE_CREATED", "LOGIN_FAILED"
    details = Column(Text)
    created_at = Column(DateTime, server_default=func.now(), index=True)
