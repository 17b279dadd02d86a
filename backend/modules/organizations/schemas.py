"""
modules/organizations/schemas.py — Pydantic schemas for accounts and auth.
"""

from pydantic import BaseModel, ConfigDict, Field

from core.base import UserRole


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str
    role: UserRole = UserRole.OPERATOR


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
