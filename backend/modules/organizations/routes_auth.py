"""Organizations auth routes — login, registration, current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from core.auth import create_user_token
from core.auth_helpers import _validate_password
from core.config import settings
from core.db import get_db
from core.dependencies import log_audit
from core.rate_limit import limiter
from core.rbac import require_admin, require_user
from modules.organizations import services
from modules.organizations.schemas import LoginRequest, LoginResponse, UserCreate, UserResponse

log = logging.getLogger("zap.api")
router = APIRouter()


@router.post("/auth/login", response_model=LoginResponse, tags=["Auth"])
@limiter.limit(settings.login_rate_limit)
async def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)):
    user = services.authenticate(db, body.username, body.password)
    if not user:
        log.warning(f"Failed login for {body.username!r}")
        log_audit(db, "LOGIN_FAILED", username=body.username, details="Invalid login attempt")
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_user_token(user)
    account = UserResponse.model_validate(user)
    log_audit(db, "LOGIN_SUCCESS", account.model_dump())
    return {"token": token, "user": account}


@router.post("/auth/register", status_code=201, response_model=UserResponse, tags=["Auth"])
async def register(
    body: UserCreate,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create an account. Administrators only."""
    pw_valid, pw_msg = _validate_password(body.password)
    if not pw_valid:
        raise HTTPException(status_code=400, detail=pw_msg)

    try:
        user = services.create_user(db, body.username, body.password, body.role.value)
    except services.DuplicateUsername:
        raise HTTPException(status_code=400, detail="Username already exists")

    log_audit(db, "USER_REGISTERED", current_user, f"New user: {user.username} ({user.role})")
    return user


@router.get("/auth/me", response_model=UserResponse, tags=["Auth"])
async def read_me(current_user: dict = Depends(require_user)):
    return current_user
