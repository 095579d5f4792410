"""
===============================================================================
TARJETA CRC — identity/auth.py (Guard opcional de Bearer JWT)
===============================================================================

Responsabilidades:
  - Extraer el token de `Authorization: Bearer <token>`.
  - Exponer la dependencia FastAPI require_token() para /api/usuario/*.
  - Ser un no-op cuando USUARIOS_REQUIRE_TOKEN=false (comportamiento por
    defecto: los endpoints de usuario quedan abiertos).

Colaboradores:
  - crosscutting.config.get_settings (flag usuarios_require_token)
  - container.get_token_service (decodifica y valida el JWT)
  - crosscutting.error_responses.unauthorized (401 con envoltura)
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from .token_service import TokenPayload


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def require_token() -> Callable:
    """Dependency FastAPI: exige JWT válido si el guard está habilitado."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> TokenPayload | None:
        if not get_settings().usuarios_require_token:
            return None

        token = _extract_bearer_token(authorization)
        if not token:
            raise unauthorized()

        # R: import diferido; container depende de identity.token_service.
        from ..container import get_token_service

        payload = get_token_service().decodificar_token(token)
        request.state.token_payload = payload
        return payload

    return dependency
