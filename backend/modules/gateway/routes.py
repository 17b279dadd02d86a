"""Gateway connectivity check."""

from fastapi import APIRouter, Depends

from core.dependencies import get_gateway
from core.rbac import require_admin
from modules.gateway.client import EvolutionClient

router = APIRouter(tags=["Gateway"])


@router.get("/evolution/check")
async def check_gateway(
    current_user: dict = Depends(require_admin),
    gateway: EvolutionClient = Depends(get_gateway),
):
    """Check the gateway by listing its instances; returns the raw result."""
    result = await gateway.fetch_instances()
    return {"ok": result.ok, "data": result.data, "error": result.error}
