"""AI provider credential routes — list, create, delete, toggle."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

import core.crypto as crypto
from core.db import get_db
from core.dependencies import log_audit
from core.rbac import require_admin, require_user
from modules.llms.models import LlmConfig
from modules.llms.schemas import LlmConfigCreate, LlmConfigCreated, LlmConfigResponse

log = logging.getLogger("zap.api")
router = APIRouter(prefix="/llms", tags=["LLMs"])


def _get_config(db: Session, config_id: str) -> LlmConfig:
    config = db.get(LlmConfig, config_id)
    if not config:
        raise HTTPException(status_code=404, detail="Config not found")
    return config


@router.get("", response_model=list[LlmConfigResponse])
async def list_llm_configs(current_user: dict = Depends(require_user), db: Session = Depends(get_db)):
    return db.query(LlmConfig).order_by(LlmConfig.created_at.desc()).all()


@router.post("", status_code=201, response_model=LlmConfigCreated)
async def create_llm_config(
    body: LlmConfigCreate,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        api_key = crypto.encrypt(body.api_key)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    config = LlmConfig(name=body.name, provider=body.provider, api_key=api_key, model=body.model)
    db.add(config)
    db.commit()
    db.refresh(config)

    log_audit(db, "LLM_CONFIG_CREATED", current_user, f"Created LLM config: {body.name} ({body.provider})")
    return config


@router.delete("/{config_id}")
async def delete_llm_config(
    config_id: str,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    config = _get_config(db, config_id)
    db.delete(config)
    db.commit()
    log_audit(db, "LLM_CONFIG_DELETED", current_user, f"Deleted LLM config ID: {config_id}")
    return {"success": True}


@router.post("/{config_id}/toggle")
async def toggle_llm_config(
    config_id: str,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Flip one config's active flag. Other configs are not affected."""
    config = _get_config(db, config_id)
    config.is_active = not config.is_active
    db.commit()
    is_active = config.is_active

    log_audit(
        db, "LLM_CONFIG_TOGGLED", current_user,
        f"Toggled LLM config {config_id} to {'active' if is_active else 'inactive'}",
    )
    return {"success": True, "is_active": is_active}
