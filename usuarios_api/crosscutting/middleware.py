"""
===============================================================================
MÓDULO: Middleware HTTP de contexto de request
===============================================================================

Objetivo
--------
RequestContextMiddleware:
   - Generar/propagar request_id (X-Request-Id)
   - Construir el RequestContext explícito y dejarlo en request.state
   - Log de finalización con status y latencia

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  - RequestContextMiddleware

Responsabilidades:
  - Observabilidad (request_id + endpoint + logs por request)

Colaboradores:
  - usuarios_api/context.py (RequestContext)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import RequestContext
from .logger import logger


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      RequestContextMiddleware

    Responsabilidades:
      - Generar/aceptar X-Request-Id
      - Crear RequestContext(request_id, method, endpoint) por request
      - Emitir log por request y devolver X-Request-Id en la respuesta

    Colaboradores:
      - crosscutting.logger
      - interfaces.api.http.dependencies.get_request_context
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/healthz"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        ctx = RequestContext(
            request_id=request_id,
            method=request.method,
            endpoint=request.url.path,
        )
        request.state.request_id = request_id
        request.state.request_context = ctx

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            latency = time.perf_counter() - start
            logger.exception(
                "request falló",
                extra=ctx.as_log_extra(
                    status_code=500, latency_ms=round(latency * 1000, 2)
                ),
            )
            raise
        finally:
            latency = time.perf_counter() - start
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra=ctx.as_log_extra(
                        status_code=status_code,
                        latency_ms=round(latency * 1000, 2),
                    ),
                )

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        # Aceptamos UUIDs y también ids cortos razonables.
        if not value:
            return False
        if len(value) > 128:
            return False
        return True
