"""
Evolution gateway client.

Thin async wrapper over the Evolution REST API. Every call returns a
GatewayResult instead of raising: non-JSON bodies and network failures are
folded into ``ok=False`` so call sites decide whether a failure is fatal.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

log = logging.getLogger("zap.gateway")

WEBHOOK_EVENTS = ["MESSAGES_UPSERT", "MESSAGES_UPDATE", "SEND_MESSAGE"]


@dataclass
class GatewayResult:
    ok: bool
    data: Any = None
    error: Any = None
    status_code: Optional[int] = None

    def error_text(self) -> str:
        """Error and body flattened to one string, for substring checks."""
        parts = []
        for value in (self.error, self.data):
            if value is None:
                continue
            if isinstance(value, str):
                parts.append(value)
            else:
                try:
                    parts.append(json.dumps(value))
                except (TypeError, ValueError):
                    parts.append(str(value))
        return " ".join(parts)


def join_url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def extract_qrcode(data) -> Optional[str]:
    """Pull a base64 pairing QR code out of a create/connect payload."""
    if not isinstance(data, dict):
        return None
    for key in ("base64", "qrcode"):
        value = data.get(key)
        if isinstance(value, dict):
            value = value.get("base64")
        if value:
            return value
    return None


def remote_instances(data) -> list[dict]:
    """Normalize a fetchInstances payload to ``[{instanceName, status, owner}]``.

    Older gateway versions wrap every entry in ``{"instance": {...}}``, newer
    ones return flat objects using ``name``/``connectionStatus``/``ownerJid``.
    Entries without a name are dropped.
    """
    if not isinstance(data, list):
        return []
    result = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        inst = entry.get("instance") if isinstance(entry.get("instance"), dict) else entry
        name = inst.get("instanceName") or inst.get("name")
        if not name:
            continue
        result.append({
            "instanceName": name,
            "status": inst.get("status") or inst.get("connectionStatus"),
            "owner": inst.get("owner") or inst.get("ownerJid"),
        })
    return result


class EvolutionClient:
    """Async client for a single Evolution gateway."""

    def __init__(self, base_url: str, api_key: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def call(self, endpoint: str, method: str = "GET", body: Optional[dict] = None) -> GatewayResult:
        url = join_url(self.base_url, endpoint)
        headers = {"Content-Type": "application/json", "apikey": self.api_key}

        log.info(f"Calling Evolution API: {method} {url}")
        if body is not None:
            log.debug(f"Request body: {body}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.request(method, url, json=body, headers=headers)
        except httpx.HTTPError as e:
            log.error(f"Evolution API network error ({endpoint}): {e!r}")
            return GatewayResult(ok=False, error=str(e) or e.__class__.__name__)

        log.info(f"Evolution API response: {resp.status_code} {method} {url}")

        content_type = resp.headers.get("content-type", "")
        if "application/json" not in content_type:
            text = resp.text
            log.error(f"Evolution API returned non-JSON ({resp.status_code}): {text[:500]}")
            return GatewayResult(
                ok=False,
                error=f"Invalid response format: {text[:50]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError:
            log.error(f"Evolution API sent malformed JSON ({resp.status_code})")
            return GatewayResult(ok=False, error="Malformed JSON response", status_code=resp.status_code)

        if not resp.is_success:
            log.error(f"Evolution API error ({resp.status_code}): {data}")
            return GatewayResult(ok=False, data=data, error=data, status_code=resp.status_code)

        log.debug(f"Response data: {data}")
        return GatewayResult(ok=True, data=data, status_code=resp.status_code)

    # ── Instance endpoints ────────────────────────────────────────────────────

    async def fetch_instances(self) -> GatewayResult:
        return await self.call("/instance/fetchInstances")

    async def create_instance(self, name: str, token: str) -> GatewayResult:
        return await self.call("/instance/create", "POST", {
            "instanceName": name,
            "token": token,
            "qrcode": True,
        })

    async def connect(self, name: str) -> GatewayResult:
        return await self.call(f"/instance/connect/{name}")

    async def restart(self, name: str) -> GatewayResult:
        return await self.call(f"/instance/restart/{name}", "POST")

    async def logout(self, name: str) -> GatewayResult:
        return await self.call(f"/instance/logout/{name}", "DELETE")

    async def delete_instance(self, name: str) -> GatewayResult:
        return await self.call(f"/instance/delete/{name}", "DELETE")

    async def set_webhook(self, name: str, url: str) -> GatewayResult:
        return await self.call(f"/webhook/set/{name}", "POST", {
            "webhook": url,
            "webhookByEvents": False,
            "events": WEBHOOK_EVENTS,
        })
