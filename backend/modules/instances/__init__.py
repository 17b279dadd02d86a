MODULE_ID = "instances"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "WhatsApp instances: gateway sync, creation, lifecycle, alerts"

ROUTES = [
    "instances.routes",
]

TABLES = [
    "instances",
]


def register(app) -> None:
    """Register the instances module routes."""
    from modules.instances import routes

    app.include_router(routes.router, prefix="/api")
