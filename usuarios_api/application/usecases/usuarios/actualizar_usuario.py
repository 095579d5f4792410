"""
===============================================================================
USE CASE: Actualizar Usuario
===============================================================================

Responsibilities:
    - Exigir que el id de la ruta coincida con el del cuerpo (ID_MISMATCH).
    - Validar el usuario (todas las reglas).
    - Sobrescribir los campos mutables; NOT_FOUND si el id no existe.

Collaborators:
    - UsuarioValidator
    - UsuarioService.actualizar_usuario
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....application.usuario_service import UsuarioService
from ....application.validators import UsuarioValidator
from ....context import RequestContext
from ....crosscutting.exceptions import UsuarioDuplicadoError
from ....crosscutting.logger import logger
from ....domain.entities import Usuario
from .usuario_results import UsuarioError, UsuarioErrorCode, UsuarioResult

MSG_ID_NO_COINCIDE: Final[str] = "El ID del usuario no coincide con el de la URL."
MSG_USUARIO_NO_ENCONTRADO: Final[str] = "No se ha encontrado el usuario."


class ActualizarUsuarioUseCase:
    def __init__(
        self,
        service: UsuarioService,
        validator: UsuarioValidator | None = None,
    ) -> None:
        self._service = service
        self._validator = validator or UsuarioValidator()

    def execute(
        self, id_usuario: str, usuario: Usuario, *, ctx: RequestContext
    ) -> UsuarioResult:
        extra = ctx.as_log_extra(id_usuario=id_usuario)

        # 1) Ruta y cuerpo deben referirse al mismo usuario.
        if usuario.id_usuario != id_usuario:
            logger.warning(MSG_ID_NO_COINCIDE, extra=extra)
            return UsuarioResult(
                error=UsuarioError(UsuarioErrorCode.ID_MISMATCH, MSG_ID_NO_COINCIDE)
            )

        # 2) Validación.
        resultado = self._validator.validar(usuario)
        if not resultado.es_valido:
            logger.warning("Actualización de usuario rechazada", extra=extra)
            return UsuarioResult(
                error=UsuarioError(
                    UsuarioErrorCode.VALIDATION_ERROR,
                    resultado.mensaje,
                    resultado.errores,
                )
            )

        # 3) Persistir (None = no existe; email ajeno = CONFLICT).
        try:
            actualizado = self._service.actualizar_usuario(usuario)
        except UsuarioDuplicadoError as exc:
            logger.warning("Email ya usado por otro usuario", extra=extra)
            return UsuarioResult(
                error=UsuarioError(UsuarioErrorCode.CONFLICT, exc.message)
            )
        if actualizado is None:
            logger.warning(MSG_USUARIO_NO_ENCONTRADO, extra=extra)
            return UsuarioResult(
                error=UsuarioError(
                    UsuarioErrorCode.NOT_FOUND, MSG_USUARIO_NO_ENCONTRADO
                )
            )

        logger.info("Usuario actualizado", extra=extra)
        return UsuarioResult(usuario=actualizado)
