"""Zap Manager — System Routes (aggregator)

Sub-router responsibilities:
  routes_health.py — Health check
  routes_audit.py  — Audit log listing
"""

from fastapi import APIRouter

router = APIRouter()

from modules.system import routes_health, routes_audit  # noqa: E402

router.include_router(routes_health.router)
router.include_router(routes_audit.router)

# Re-export health_check so core/app.py can call system.health_check()
from modules.system.routes_health import health_check  # noqa: F401, E402
