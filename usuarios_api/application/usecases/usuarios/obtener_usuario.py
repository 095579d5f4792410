"""
===============================================================================
USE CASE: Obtener Usuario por ID
===============================================================================

Responsibilities:
    - Buscar un usuario por id exacto.
    - Devolver NOT_FOUND ("No se ha encontrado el usuario.") si no existe.

Collaborators:
    - UsuarioService.obtener_usuario_por_id
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....application.usuario_service import UsuarioService
from ....context import RequestContext
from ....crosscutting.logger import logger
from .usuario_results import UsuarioError, UsuarioErrorCode, UsuarioResult

MSG_USUARIO_NO_ENCONTRADO: Final[str] = "No se ha encontrado el usuario."


class ObtenerUsuarioUseCase:
    def __init__(self, service: UsuarioService) -> None:
        self._service = service

    def execute(self, id_usuario: str, *, ctx: RequestContext) -> UsuarioResult:
        usuario = self._service.obtener_usuario_por_id(id_usuario)
        if usuario is None:
            logger.warning(
                MSG_USUARIO_NO_ENCONTRADO,
                extra=ctx.as_log_extra(id_usuario=id_usuario),
            )
            return self._not_found()
        return UsuarioResult(usuario=usuario)

    @staticmethod
    def _not_found() -> UsuarioResult:
        return UsuarioResult(
            error=UsuarioError(UsuarioErrorCode.NOT_FOUND, MSG_USUARIO_NO_ENCONTRADO)
        )
