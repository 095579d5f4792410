"""
===============================================================================
USE CASE: Autenticar Usuario (login por email)
===============================================================================

Name:
    Autenticar Usuario Use Case

Business Goal:
    Resolver el acceso de un usuario a partir de su email: perfil, token JWT
    y menú de navegación aplanado.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AutenticarUsuarioUseCase

Responsibilities:
    - Validar el email (obligatorio + formato).
    - Buscar el perfil de acceso; inexistente o inactivo => UNAUTHORIZED.
    - Emitir el token (vacío => TOKEN_ERROR).
    - Obtener y aplanar los módulos (sin módulos => warning, modulos=None).

Collaborators:
    - LoginValidator
    - UsuarioService (obtener_usuario_por_email, obtener_modulos_aplanados)
    - TokenIssuer (domain.services)
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ....application.usuario_service import UsuarioService
from ....application.validators import LoginValidator
from ....context import RequestContext
from ....crosscutting.logger import logger
from ....domain.services import TokenIssuer
from ..usuarios.usuario_results import LoginResult, UsuarioError, UsuarioErrorCode

MSG_NO_AUTORIZADO: Final[str] = "Usuario no encontrado o inactivo."
MSG_ERROR_TOKEN: Final[str] = "Error al generar el token."


class AutenticarUsuarioUseCase:
    def __init__(
        self,
        service: UsuarioService,
        token_issuer: TokenIssuer,
        validator: LoginValidator | None = None,
    ) -> None:
        self._service = service
        self._tokens = token_issuer
        self._validator = validator or LoginValidator()

    def execute(self, email: str, *, ctx: RequestContext) -> LoginResult:
        # ---------------------------------------------------------------------
        # 1) Validar email.
        # ---------------------------------------------------------------------
        resultado = self._validator.validar(email)
        if not resultado.es_valido:
            return LoginResult(
                error=UsuarioError(
                    UsuarioErrorCode.VALIDATION_ERROR,
                    resultado.mensaje,
                    resultado.errores,
                )
            )

        # ---------------------------------------------------------------------
        # 2) Perfil de acceso (debe existir y estar activo).
        # ---------------------------------------------------------------------
        perfil = self._service.obtener_usuario_por_email(email.strip())
        if perfil is None or not perfil.estado:
            logger.warning(MSG_NO_AUTORIZADO, extra=ctx.as_log_extra())
            return LoginResult(
                error=UsuarioError(UsuarioErrorCode.UNAUTHORIZED, MSG_NO_AUTORIZADO)
            )

        extra = ctx.as_log_extra(id_usuario=perfil.id_usuario)

        # ---------------------------------------------------------------------
        # 3) Token.
        # ---------------------------------------------------------------------
        token = self._tokens.emitir_token(
            perfil.id_usuario, perfil.correo_electronico
        )
        if not token:
            logger.error(MSG_ERROR_TOKEN, extra=extra)
            return LoginResult(
                error=UsuarioError(UsuarioErrorCode.TOKEN_ERROR, MSG_ERROR_TOKEN)
            )

        # ---------------------------------------------------------------------
        # 4) Menú aplanado (opcional).
        # ---------------------------------------------------------------------
        modulos = self._service.obtener_modulos_aplanados(perfil.id_usuario)
        if not modulos:
            logger.warning("El usuario no tiene módulos asignados", extra=extra)

        logger.info("Inicio de sesión exitoso", extra=extra)
        return LoginResult(token=token, perfil=perfil, modulos=modulos or None)
