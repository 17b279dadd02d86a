"""
modules/instances/schemas.py — Pydantic schemas for the instances domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from core.base import InstanceStatus


class InstanceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    webhook_url: Optional[str] = None


class InstanceAlertsUpdate(BaseModel):
    alert_enabled: bool = False
    alert_email: Optional[str] = None


class InstanceSettingsUpdate(InstanceAlertsUpdate):
    phone: Optional[str] = None


class InstanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    status: InstanceStatus
    phone: Optional[str] = None
    webhook_url: Optional[str] = None
    alert_enabled: bool = False
    alert_email: Optional[str] = None
    created_at: Optional[datetime] = None


class QRCodeResponse(BaseModel):
    base64: str
