"""
modules/system/schemas.py — Pydantic schemas for the system domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class HealthCheck(BaseModel):
    status: str = "ok"
    version: str
    database: str


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[str] = None
    username: Optional[str] = None
    action: str
    details: Optional[str] = None
    created_at: Optional[datetime] = None
