MODULE_ID = "gateway"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Evolution gateway client and connectivity check"

ROUTES = [
    "gateway.routes",
]

TABLES = []


def register(app) -> None:
    """Register the gateway module routes."""
    from modules.gateway import routes

    app.include_router(routes.router, prefix="/api")
