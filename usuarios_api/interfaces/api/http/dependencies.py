"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias comunes de routers)
===============================================================================

Responsabilidades:
  - Inyectar el RequestContext creado por el middleware.
  - Construir uno nuevo si el router corre sin middleware (tests).

Colaboradores:
  - crosscutting.middleware.RequestContextMiddleware
  - usuarios_api.context.RequestContext
===============================================================================
"""

from __future__ import annotations

from fastapi import Request

from usuarios_api.context import RequestContext


def get_request_context(request: Request) -> RequestContext:
    ctx = getattr(request.state, "request_context", None)
    if isinstance(ctx, RequestContext):
        return ctx
    ctx = RequestContext.nuevo(method=request.method, endpoint=request.url.path)
    request.state.request_context = ctx
    request.state.request_id = ctx.request_id
    return ctx
