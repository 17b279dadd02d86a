"""
modules/llms/schemas.py — Pydantic schemas for AI provider credentials.

The API key is write-only: no response schema carries it.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LlmConfigCreate(BaseModel):
    name: str = Field(..., min_length=1)
    provider: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)


class LlmConfigCreated(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    provider: str
    model: str


class LlmConfigResponse(LlmConfigCreated):
    is_active: bool
    created_at: Optional[datetime] = None
