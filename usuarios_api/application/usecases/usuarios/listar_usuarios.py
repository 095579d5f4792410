"""
===============================================================================
USE CASE: Listar Usuarios
===============================================================================

Responsibilities:
    - Devolver todos los usuarios del store, en el orden del backend.
    - Tratar la lista vacía como NOT_FOUND ("No se encontraron usuarios.").

Collaborators:
    - UsuarioService.listar_usuarios
    - RequestContext (logs correlacionados)
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....application.usuario_service import UsuarioService
from ....context import RequestContext
from ....crosscutting.logger import logger
from .usuario_results import UsuarioError, UsuarioErrorCode, UsuarioListResult

MSG_SIN_USUARIOS: Final[str] = "No se encontraron usuarios."


class ListarUsuariosUseCase:
    def __init__(self, service: UsuarioService) -> None:
        self._service = service

    def execute(self, *, ctx: RequestContext) -> UsuarioListResult:
        logger.info("Listando usuarios", extra=ctx.as_log_extra())

        usuarios = self._service.listar_usuarios()
        if not usuarios:
            logger.warning(MSG_SIN_USUARIOS, extra=ctx.as_log_extra())
            return UsuarioListResult(
                error=UsuarioError(UsuarioErrorCode.NOT_FOUND, MSG_SIN_USUARIOS)
            )

        logger.info(
            "Usuarios encontrados", extra=ctx.as_log_extra(total=len(usuarios))
        )
        return UsuarioListResult(usuarios=usuarios)
