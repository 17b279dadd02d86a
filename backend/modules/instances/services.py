"""Instance creation and lifecycle operations.

Route handlers look the instance up and translate errors to HTTP; these
functions own the gateway calls and the local write-back.
"""

import asyncio
import logging
import secrets
from typing import Optional

from sqlalchemy.orm import Session

from core.base import InstanceStatus
from modules.gateway.client import EvolutionClient, GatewayResult, extract_qrcode, remote_instances
from modules.instances.models import Instance

log = logging.getLogger("zap.api")


class GatewayError(Exception):
    """The gateway refused an operation the caller cannot proceed without."""

    def __init__(self, message: str, detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail


def _already_exists(result: GatewayResult) -> bool:
    return "already exists" in result.error_text().lower()


def _created_state(data) -> Optional[dict]:
    """Status/owner reported in a create response, if any."""
    if not isinstance(data, dict):
        return None
    inst = data.get("instance") if isinstance(data.get("instance"), dict) else data
    return {"status": inst.get("status"), "owner": inst.get("owner")}


async def _adopt_existing(gateway: EvolutionClient, name: str) -> Optional[dict]:
    fetched = await gateway.fetch_instances()
    if not fetched.ok:
        log.warning(f"Could not fetch existing instance {name!r}: {fetched.error}")
        return None
    for entry in remote_instances(fetched.data):
        if entry["instanceName"] == name:
            return entry
    return None


async def create_instance(
    db: Session,
    gateway: EvolutionClient,
    name: str,
    webhook_url: Optional[str] = None,
    qr_delay: float = 1.0,
) -> tuple[Instance, Optional[str]]:
    """Create an instance on the gateway and record it locally.

    An instance that already exists on the gateway is adopted instead of
    failing. Any other gateway refusal raises GatewayError before anything is
    written locally. Returns the local row and a pairing QR code when one was
    available.
    """
    result = await gateway.create_instance(name, secrets.token_urlsafe(12))

    if result.ok:
        remote = _created_state(result.data)
    elif _already_exists(result):
        log.info(f"Instance {name} already exists in Evolution API, adopting it")
        remote = await _adopt_existing(gateway, name)
    else:
        raise GatewayError("Failed to create instance in Evolution API", result.error or result.data)

    if webhook_url:
        hook = await gateway.set_webhook(name, webhook_url)
        if not hook.ok:
            log.warning(f"Failed to set webhook for {name}: {hook.error}")

    instance = db.query(Instance).filter(Instance.name == name).first()
    if instance is None:
        instance = Instance(name=name, status=InstanceStatus.DISCONNECTED)
        db.add(instance)
    instance.webhook_url = webhook_url or None
    if remote is not None:
        instance.status = InstanceStatus.from_remote(remote.get("status"))
        if remote.get("owner"):
            instance.phone = remote["owner"]
    db.commit()
    db.refresh(instance)

    qrcode = extract_qrcode(result.data) if result.ok else None
    if qrcode is None and instance.status != InstanceStatus.CONNECTED:
        await asyncio.sleep(qr_delay)
        qrcode = await fetch_qrcode(gateway, name)
    return instance, qrcode


async def fetch_qrcode(gateway: EvolutionClient, name: str) -> Optional[str]:
    result = await gateway.connect(name)
    if not result.ok:
        log.warning(f"QR code request for {name} failed: {result.error}")
        return None
    return extract_qrcode(result.data)


async def toggle_instance(db: Session, gateway: EvolutionClient, instance: Instance) -> Instance:
    """Log a connected instance out, or flag any other instance as connecting.

    Pairing is completed by the client fetching a QR code separately.
    """
    if instance.status == InstanceStatus.CONNECTED:
        result = await gateway.logout(instance.name)
        if not result.ok:
            log.warning(f"Logout of {instance.name} failed on the gateway: {result.error}")
        instance.status = InstanceStatus.DISCONNECTED
    else:
        instance.status = InstanceStatus.CONNECTING
    db.commit()
    db.refresh(instance)
    return instance


async def restart_instance(gateway: EvolutionClient, name: str) -> None:
    result = await gateway.restart(name)
    if not result.ok:
        log.warning(f"Restart of {name} failed on the gateway: {result.error}")


async def delete_instance(db: Session, gateway: EvolutionClient, instance: Instance) -> None:
    """Delete remotely (best effort), then always delete the local row."""
    result = await gateway.delete_instance(instance.name)
    if not result.ok:
        log.warning(f"Gateway delete of {instance.name} failed, removing local row anyway: {result.error}")
    db.delete(instance)
    db.commit()


def update_alerts(db: Session, instance: Instance, alert_enabled: bool, alert_email: Optional[str]) -> None:
    instance.alert_enabled = bool(alert_enabled)
    instance.alert_email = alert_email
    db.commit()


def update_settings(db: Session, instance: Instance, phone: Optional[str],
                    alert_enabled: bool, alert_email: Optional[str]) -> None:
    instance.phone = phone
    update_alerts(db, instance, alert_enabled, alert_email)
