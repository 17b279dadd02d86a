MODULE_ID = "organizations"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "User accounts, login, registration and the bootstrap administrator"

ROUTES = [
    "organizations.routes",         # aggregator
    "organizations.routes_auth",
    "organizations.routes_users",
]

TABLES = [
    "users",
]


def register(app) -> None:
    """Register the organizations module routes."""
    from modules.organizations import routes

    app.include_router(routes.router, prefix="/api")
