"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar las respuestas de error documentadas en OpenAPI.
  - Componer routers por feature (login / usuarios).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.login import router as login_router
from .routers.usuarios import router as usuarios_router


def build_router() -> APIRouter:
    """Construye el router raíz (sin efectos al importar)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(login_router)
    api_router.include_router(usuarios_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
