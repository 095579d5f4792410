"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount login and usuario routers
  - Expose health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and explicit RequestContext
  - interfaces.api.http.router: /api/login and /api/usuario endpoints

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - The storage backend is chosen once per process (STORAGE_BACKEND)

Notes:
  - Settings are validated in lifespan: a missing JWT_SECRET_KEY fails at
    startup, never per request
  - The connection pool (sql) or ORM engine (orm) opens in lifespan and
    closes on shutdown
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from ..container import get_token_service
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.orm import dispose_engine, init_engine
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and opens storage."""
    settings = get_settings()

    # R: Fail fast: sin clave de firma no arranca el servicio.
    get_token_service()

    backend = settings.storage_backend
    if backend == "sql":
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    elif backend == "orm":
        init_engine(settings.database_url, pool_size=settings.db_pool_max_size)

    try:
        logger.info(
            "Usuarios API starting up",
            extra={
                "app_env": settings.app_env,
                "storage_backend": backend,
                "require_token": settings.usuarios_require_token,
                "jwt_ttl_hours": settings.jwt_ttl_hours,
            },
        )

        yield

    finally:
        if backend == "sql":
            close_pool()
        elif backend == "orm":
            dispose_engine()
        logger.info("Usuarios API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback when settings are invalid."""
    try:
        return get_settings().get_allowed_origins_list()
    except ValidationError:
        # R: El lifespan reporta el error real de configuración.
        return ["http://localhost:3000"]


app = FastAPI(
    title="Usuarios API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "login", "description": "Autenticación por email (JWT)"},
        {"name": "usuarios", "description": "CRUD de usuarios"},
    ],
)

# R: Request context first so every log line carries request_id
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    expose_headers=["Location", "X-Request-Id"],
)

app.include_router(router)

register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """Liveness: el proceso responde (no verifica el backend de datos)."""
    return {
        "ok": True,
        "storage_backend": get_settings().storage_backend,
        "request_id": getattr(request.state, "request_id", None),
    }
