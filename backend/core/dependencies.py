"""
Zap Manager — Core auth/request dependencies.

Provides the get_current_user FastAPI dependency (resolves the caller from
the JWT Bearer token), the get_gateway dependency (the Evolution client used
by route handlers), and the log_audit utility.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.auth import decode_token
from core.config import settings
from core.models import AuditLog

log = logging.getLogger("zap.api")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[dict]:
    """Resolve the caller from an ``Authorization: Bearer <JWT>`` header.

    Returns the token claims as ``{"id", "username", "role"}`` or None when the
    header is missing, malformed, expired, or signed with another key. The
    role is taken from the verified token, so authorization never needs a
    database round trip.
    """
    if not token:
        return None
    token_data = decode_token(token)
    if token_data is None:
        return None
    return token_data.model_dump()


def get_gateway():
    """Dependency returning the Evolution gateway client built from settings."""
    from modules.gateway.client import EvolutionClient

    return EvolutionClient(
        settings.evolution_api_url,
        settings.evolution_api_key,
        timeout=settings.evolution_timeout,
    )


def log_audit(
    db: Session,
    action: str,
    user: Optional[dict] = None,
    details: str = None,
    username: str = None,
):
    """Append an entry to the audit log.

    A failed audit write is logged and swallowed so it never fails the
    action being recorded.
    """
    entry = AuditLog(
        user_id=user["id"] if user else None,
        username=user["username"] if user else username,
        action=action,
        details=details,
    )
    try:
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        log.warning(f"Failed to record audit entry {action}", exc_info=True)
