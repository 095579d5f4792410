"""
===============================================================================
USE CASE: Eliminar Usuario (baja lógica)
===============================================================================

Responsibilities:
    - Marcar el usuario como inactivo (nunca se borra físicamente).
    - NOT_FOUND ("No se ha encontrado el registro.") si el id no existe.
    - Idempotente: eliminar un usuario ya inactivo devuelve el registro.

Collaborators:
    - UsuarioService.eliminar_usuario
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....application.usuario_service import UsuarioService
from ....context import RequestContext
from ....crosscutting.logger import logger
from .usuario_results import UsuarioError, UsuarioErrorCode, UsuarioResult

MSG_REGISTRO_NO_ENCONTRADO: Final[str] = "No se ha encontrado el registro."


class EliminarUsuarioUseCase:
    def __init__(self, service: UsuarioService) -> None:
        self._service = service

    def execute(self, id_usuario: str, *, ctx: RequestContext) -> UsuarioResult:
        extra = ctx.as_log_extra(id_usuario=id_usuario)

        eliminado = self._service.eliminar_usuario(id_usuario)
        if eliminado is None:
            logger.warning(MSG_REGISTRO_NO_ENCONTRADO, extra=extra)
            return UsuarioResult(
                error=UsuarioError(
                    UsuarioErrorCode.NOT_FOUND, MSG_REGISTRO_NO_ENCONTRADO
                )
            )

        logger.info("Usuario dado de baja", extra=extra)
        return UsuarioResult(usuario=eliminado)
