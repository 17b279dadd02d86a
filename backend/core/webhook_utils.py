"""
Zap Manager — Webhook URL validation helper.

Used before an instance webhook is registered on the gateway, so the gateway
is never pointed at loopback or link-local infrastructure.
"""

import ipaddress
import urllib.parse

from fastapi import HTTPException


def _validate_webhook_url(url: str) -> None:
    """Validate an instance webhook URL.

    Allows http:// and https:// schemes only.
    Rejects loopback and link-local hosts. Private (RFC-1918) ranges are
    allowed because the gateway usually runs next to the receiving service.
    Raises HTTPException 400 if the URL is invalid or targets a blocked host.
    """
    if not url:
        return

    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid webhook URL")

    if parsed.scheme not in ("http", "https"):
        raise HTTPException(status_code=400, detail="Webhook URL must use http:// or https:// scheme")

    host = parsed.hostname or ""
    if not host:
        raise HTTPException(status_code=400, detail="Invalid webhook URL")

    blocked_prefixes = ("localhost", "127.", "169.254.", "0.", "::1")
    if any(host.startswith(p) for p in blocked_prefixes):
        raise HTTPException(status_code=400, detail="Webhook URL targets a blocked host")

    try:
        addr = ipaddress.ip_address(host)
        if addr.is_loopback or addr.is_link_local or addr.is_unspecified:
            raise HTTPException(status_code=400, detail="Webhook URL targets a blocked host")
    except ValueError:
        pass  # hostname, resolved by the gateway
