"""Organizations users routes — account listing."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from core.rbac import require_admin
from modules.organizations.models import User
from modules.organizations.schemas import UserResponse

router = APIRouter()


@router.get("/users", response_model=list[UserResponse], tags=["Users"])
async def list_users(current_user: dict = Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(User).order_by(User.username).all()
