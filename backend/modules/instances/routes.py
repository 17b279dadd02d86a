"""Instance routes — list/sync, create, delete, toggle, QR connect, restart, alerts, settings."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.config import settings
from core.db import get_db
from core.dependencies import get_gateway, log_audit
from core.rbac import require_admin, require_user
from core.webhook_utils import _validate_webhook_url
from modules.gateway.client import EvolutionClient
from modules.instances import services
from modules.instances.models import Instance
from modules.instances.schemas import (
    InstanceAlertsUpdate, InstanceCreate, InstanceResponse, InstanceSettingsUpdate, QRCodeResponse,
)
from modules.instances.sync import sync_instances

log = logging.getLogger("zap.api")
router = APIRouter(prefix="/instances", tags=["Instances"])


def _get_instance(db: Session, instance_id: str) -> Instance:
    instance = db.get(Instance, instance_id)
    if not instance:
        raise HTTPException(status_code=404, detail="Instance not found")
    return instance


@router.get("", response_model=list[InstanceResponse])
async def list_instances(
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Sync with the gateway, then list all instances, newest first."""
    return await sync_instances(db, gateway)


@router.post("", status_code=201)
async def create_instance(
    body: InstanceCreate,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Create an instance on the gateway (or adopt an existing one) and return it with a QR code."""
    name = body.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Instance name is required")
    if body.webhook_url:
        _validate_webhook_url(body.webhook_url)

    try:
        instance, qrcode = await services.create_instance(
            db, gateway, name, body.webhook_url, qr_delay=settings.qr_fetch_delay,
        )
    except services.GatewayError as e:
        log.error(f"Create instance {name} failed: {e.detail}")
        raise HTTPException(status_code=500, detail={"error": e.message, "details": e.detail})

    log_audit(db, "INSTANCE_CREATED", current_user, f"Instance: {name} ({instance.id})")

    payload = InstanceResponse.model_validate(instance).model_dump(mode="json")
    if qrcode:
        payload["qrcode"] = qrcode
    return JSONResponse(status_code=201, content=payload)


@router.delete("/{instance_id}", status_code=204)
async def delete_instance(
    instance_id: str,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    instance = _get_instance(db, instance_id)
    name = instance.name
    await services.delete_instance(db, gateway, instance)
    log_audit(db, "INSTANCE_DELETED", current_user, f"Instance: {name}")
    return Response(status_code=204)


@router.post("/{instance_id}/toggle", response_model=InstanceResponse)
async def toggle_instance(
    instance_id: str,
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Disconnect a connected instance, or mark any other instance as connecting."""
    instance = _get_instance(db, instance_id)
    instance = await services.toggle_instance(db, gateway, instance)
    log_audit(db, "INSTANCE_TOGGLED", current_user, f"Instance: {instance.name}, Status: {instance.status.value}")
    return instance


@router.get("/{instance_id}/connect", response_model=QRCodeResponse)
async def connect_instance(
    instance_id: str,
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Fetch a pairing QR code from the gateway."""
    instance = _get_instance(db, instance_id)
    qrcode = await services.fetch_qrcode(gateway, instance.name)
    if not qrcode:
        raise HTTPException(status_code=400, detail="Failed to get QR code")
    return {"base64": qrcode}


@router.post("/{instance_id}/restart")
async def restart_instance(
    instance_id: str,
    background_tasks: BackgroundTasks,
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Ask the gateway to restart the session; the outcome is not reported."""
    instance = _get_instance(db, instance_id)
    background_tasks.add_task(services.restart_instance, gateway, instance.name)
    log_audit(db, "INSTANCE_RESTART", current_user, f"Instance: {instance.name}")
    return {"message": "Restarting..."}


@router.post("/{instance_id}/alerts")
async def update_alerts(
    instance_id: str,
    body: InstanceAlertsUpdate,
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
):
    instance = _get_instance(db, instance_id)
    services.update_alerts(db, instance, body.alert_enabled, body.alert_email)
    log_audit(
        db, "INSTANCE_ALERTS_UPDATE", current_user,
        f"Instance: {instance.name}, Alerts: {'on' if body.alert_enabled else 'off'}",
    )
    return {"success": True}


@router.post("/{instance_id}/settings")
async def update_settings(
    instance_id: str,
    body: InstanceSettingsUpdate,
    current_user: dict = Depends(require_user),
    db: Session = Depends(get_db),
):
    instance = _get_instance(db, instance_id)
    services.update_settings(db, instance, body.phone, body.alert_enabled, body.alert_email)
    log_audit(
        db, "INSTANCE_SETTINGS_UPDATE", current_user,
        f"Instance: {instance.name}, Phone: {body.phone}, Alerts: {'on' if body.alert_enabled else 'off'}",
    )
    return {"success": True}
