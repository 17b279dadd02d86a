MODULE_ID = "system"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Health check and audit log"

ROUTES = [
    "system.routes",           # aggregator
    "system.routes_health",
    "system.routes_audit",
]

TABLES = [
    "audit_logs",
]


def register(app) -> None:
    """Register the system module routes."""
    from modules.system import routes

    app.include_router(routes.router, prefix="/api")
