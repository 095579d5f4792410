"""
===============================================================================
USE CASE: Alta de Usuario
===============================================================================

Name:
    Alta Usuario Use Case

Business Goal:
    Registrar un usuario nuevo en el directorio, activo y con fechas de
    creación/actualización asignadas por el store.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AltaUsuarioUseCase

Responsibilities:
    - Asignar un id (uuid4 hex) cuando el request no trae UsuarioId.
    - Validar TODAS las reglas antes de tocar el store.
    - Registrar y devolver el usuario persistido.
    - Traducir id o email repetido a CONFLICT.

Collaborators:
    - UsuarioValidator (application.validators)
    - UsuarioService.registrar_usuario
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

from ....application.usuario_service import UsuarioService
from ....application.validators import UsuarioValidator
from ....context import RequestContext
from ....crosscutting.exceptions import UsuarioDuplicadoError
from ....crosscutting.logger import logger
from ....domain.entities import Usuario
from .usuario_results import UsuarioError, UsuarioErrorCode, UsuarioResult


def nuevo_id_usuario() -> str:
    return uuid4().hex


class AltaUsuarioUseCase:
    def __init__(
        self,
        service: UsuarioService,
        validator: UsuarioValidator | None = None,
    ) -> None:
        self._service = service
        self._validator = validator or UsuarioValidator()

    def execute(self, usuario: Usuario, *, ctx: RequestContext) -> UsuarioResult:
        # ---------------------------------------------------------------------
        # 1) Id asignado por el servidor si no vino en el request.
        # ---------------------------------------------------------------------
        if not (usuario.id_usuario or "").strip():
            usuario = replace(usuario, id_usuario=nuevo_id_usuario())

        # ---------------------------------------------------------------------
        # 2) Validación (todas las reglas, sin efectos).
        # ---------------------------------------------------------------------
        resultado = self._validator.validar(usuario)
        if not resultado.es_valido:
            logger.warning(
                "Alta de usuario rechazada",
                extra=ctx.as_log_extra(errores=list(resultado.errores)),
            )
            return UsuarioResult(
                error=UsuarioError(
                    UsuarioErrorCode.VALIDATION_ERROR,
                    resultado.mensaje,
                    resultado.errores,
                )
            )

        # ---------------------------------------------------------------------
        # 3) Persistir.
        # ---------------------------------------------------------------------
        try:
            creado = self._service.registrar_usuario(usuario)
        except UsuarioDuplicadoError as exc:
            logger.warning(
                "Alta de usuario duplicada",
                extra=ctx.as_log_extra(id_usuario=usuario.id_usuario),
            )
            return UsuarioResult(
                error=UsuarioError(UsuarioErrorCode.CONFLICT, exc.message)
            )
        logger.info(
            "Usuario creado", extra=ctx.as_log_extra(id_usuario=creado.id_usuario)
        )
        return UsuarioResult(usuario=creado)
