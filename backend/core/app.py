# core/app.py: App factory with dynamic module discovery
#
# Creates and configures the FastAPI application. Discovers all modules under
# backend/modules/ and calls each module's register(app) function.
#
# main.py is: from core.app import create_app; app = create_app()

import importlib
import logging
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.version import __version__

log = logging.getLogger("zap.api")


def configure_logging() -> None:
    """Root logging setup. A no-op when handlers are already installed."""
    from core.config import settings

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


# ---------------------------------------------------------------------------
# Module discovery
# ---------------------------------------------------------------------------

def _discover_modules() -> list[str]:
    """Return a list of module package names found under backend/modules/.

    A valid module directory contains an __init__.py with a MODULE_ID attribute.
    """
    modules_dir = pathlib.Path(__file__).parent.parent / "modules"
    found = []
    for entry in sorted(modules_dir.iterdir()):
        if not entry.is_dir():
            continue
        init_file = entry / "__init__.py"
        if not init_file.exists():
            continue
        pkg_name = f"modules.{entry.name}"
        mod = importlib.import_module(pkg_name)
        if hasattr(mod, "MODULE_ID"):
            found.append(pkg_name)
    return found


# ---------------------------------------------------------------------------
# Middleware and error handling
# ---------------------------------------------------------------------------

def _setup_middleware(app: FastAPI) -> None:
    """Attach CORS and rate limiting to the app."""
    from core.config import settings
    from core.rate_limit import limiter
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    _cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if "*" in _cors_origins:
        log.warning(
            "CORS origin '*' is incompatible with allow_credentials=True, "
            "falling back to empty origins list. Set explicit origins in CORS_ORIGINS."
        )
        _cors_origins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        """Missing or malformed request fields are a 400, not FastAPI's default 422."""
        missing = [".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()]
        return JSONResponse(
            status_code=400,
            content={"detail": "Missing or invalid fields", "fields": [m for m in missing if m]},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error", "error": str(exc)},
        )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    """Create and fully configure the Zap Manager FastAPI application.

    1. Discover all modules under backend/modules/ (importing their models).
    2. Create the FastAPI instance with a lifespan that creates tables and
       seeds the default administrator.
    3. Attach middleware, CORS, and error handlers.
    4. Call each module's register(app).

    Returns the fully configured app object. Uvicorn finds it via main:app.
    """
    from core.config import settings
    from core.db import engine, SessionLocal, Base

    configure_logging()

    pkg_names = _discover_modules()
    log.info(f"Modules: {[p.split('.')[-1] for p in pkg_names]}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from modules.organizations.services import seed_default_admin

        Base.metadata.create_all(bind=engine)

        db = SessionLocal()
        try:
            seed_default_admin(db, settings.default_admin_username, settings.default_admin_password)
        finally:
            db.close()

        if not settings.evolution_api_key:
            log.warning("EVOLUTION_API_KEY is not set, gateway calls will be rejected upstream.")
        yield

    app = FastAPI(
        title="Zap Manager",
        description="WhatsApp instance management over an Evolution gateway",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    _setup_middleware(app)
    _register_exception_handlers(app)

    @app.get("/health", tags=["System"], include_in_schema=False)
    async def health_root():
        """Root-level alias of the system health check."""
        from modules.system import routes as system
        return await system.health_check()

    for pkg in pkg_names:
        mod = importlib.import_module(pkg)
        mod.register(app)
        log.debug(f"Registered module: {pkg}")

    return app
