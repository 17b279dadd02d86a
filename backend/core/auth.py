"""
Authentication utilities for Zap Manager.
Handles password hashing, JWT tokens, and role checks.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from passlib.context import CryptContext
import jwt
from jwt.exceptions import PyJWTError
from pydantic import BaseModel

from core.config import settings

# Configuration
SECRET_KEY = settings.jwt_secret_key
if not SECRET_KEY:
    raise RuntimeError("JWT_SECRET_KEY environment variable is required.")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = settings.access_token_expire_hours

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenData(BaseModel):
    id: str
    username: str
    role: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """Spend the same bcrypt work as verify_password when there is no hash to check."""
    pwd_context.dummy_verify()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token with a unique jti."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode.update({"exp": expire, "jti": str(uuid.uuid4())})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_user_token(user) -> str:
    """Token carrying the {id, username, role} claims for a user row."""
    return create_access_token(
        data={"sub": user.id, "id": user.id, "username": user.username, "role": user.role}
    )


def decode_token(token: str) -> Optional[TokenData]:
    """Decode and validate a JWT token. Returns None when invalid or expired."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except PyJWTError:
        return None
    user_id = payload.get("id") or payload.get("sub")
    username = payload.get("username")
    role = payload.get("role")
    if not user_id or not username or not role:
        return None
    return TokenData(id=user_id, username=username, role=role)
