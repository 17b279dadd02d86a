"""System audit routes — most recent administrative actions."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from core.models import AuditLog
from core.rbac import require_admin
from modules.system.schemas import AuditLogResponse

router = APIRouter()

AUDIT_LOG_LIMIT = 100


@router.get("/audit-logs", response_model=list[AuditLogResponse], tags=["Audit"])
async def list_audit_logs(current_user: dict = Depends(require_admin), db: Session = Depends(get_db)):
    return (
        db.query(AuditLog)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(AUDIT_LOG_LIMIT)
        .all()
    )
