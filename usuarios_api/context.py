"""
===============================================================================
TARJETA CRC — usuarios_api/context.py (Contexto explícito por request)
===============================================================================

Responsabilidades:
  - Representar los datos correlacionables de un request (request_id, método,
    endpoint) como un valor inmutable.
  - Viajar como parámetro: middleware -> router -> caso de uso -> logs.
  - Proveer as_log_extra() para enriquecer logs estructurados.

Colaboradores:
  - crosscutting.middleware: crea el contexto y lo deja en request.state.
  - interfaces.api.http.dependencies.get_request_context: lo inyecta (Depends).
  - application.usecases.*: lo reciben en execute() y lo usan al loguear.

Restricciones:
  - Sin estado ambiental (ni ContextVars ni thread-locals).
  - Solo tipos primitivos (str) para serialización segura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str
    method: str = ""
    endpoint: str = ""

    @classmethod
    def nuevo(cls, *, method: str = "", endpoint: str = "") -> "RequestContext":
        """Contexto con request_id nuevo (tests, tareas fuera de HTTP)."""
        return cls(request_id=str(uuid4()), method=method, endpoint=endpoint)

    def as_log_extra(self, **extra: object) -> dict[str, object]:
        """Dict para `logger.x(..., extra=...)`, omitiendo claves vacías."""
        ctx: dict[str, object] = {"request_id": self.request_id}
        if self.method:
            ctx["method"] = self.method
        if self.endpoint:
            ctx["endpoint"] = self.endpoint
        ctx.update(extra)
        return ctx
