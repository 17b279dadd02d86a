MODULE_ID = "llms"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "AI provider credentials (LLM configurations)"

ROUTES = [
    "llms.routes",
]

TABLES = [
    "llm_configs",
]


def register(app) -> None:
    """Register the llms module routes."""
    from modules.llms import routes

    app.include_router(routes.router, prefix="/api")
