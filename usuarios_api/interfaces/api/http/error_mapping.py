"""
===============================================================================
TARJETA CRC — error_mapping.py (UsuarioError -> HTTP con envoltura)
===============================================================================

Responsabilidades:
  - Traducir UsuarioErrorCode a AppHTTPException (status + Estatus).
  - Centralizar el mapeo para evitar duplicación en routers.

Reglas:
  - NOT_FOUND => 404, Estatus "W".
  - VALIDATION_ERROR / ID_MISMATCH => 400, Estatus "E".
  - UNAUTHORIZED => 401, Estatus "E".
  - CONFLICT => 409, Estatus "E".
  - TOKEN_ERROR (o código desconocido) => 500, Estatus "E".

Colaboradores:
  - application.usecases (UsuarioError, UsuarioErrorCode)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from usuarios_api.application.usecases import UsuarioError, UsuarioErrorCode
from usuarios_api.crosscutting.error_responses import (
    conflict,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_usuario_error(error: UsuarioError) -> None:
    if error.code == UsuarioErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, list(error.errores) or None)
    if error.code == UsuarioErrorCode.ID_MISMATCH:
        raise validation_error(error.message)
    if error.code == UsuarioErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == UsuarioErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == UsuarioErrorCode.CONFLICT:
        raise conflict(error.message)
    raise internal_error(error.message)
