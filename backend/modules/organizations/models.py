"""
modules/organizations/models.py — ORM models for accounts.

Owns tables: users
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from core.base import Base, UserRole, new_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.OPERATOR.value)
    created_at = Column(DateTime, server_default=func.now())
