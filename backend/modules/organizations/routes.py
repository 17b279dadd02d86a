"""Organizations routes package — assembles all sub-routers."""

from fastapi import APIRouter
from .routes_auth import router as auth_router
from .routes_users import router as users_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
