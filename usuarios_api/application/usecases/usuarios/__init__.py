"""
===============================================================================
USUARIO USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso CRUD de Usuario.
    - Re-exportar resultados/errores compartidos (usuario_results).
===============================================================================
"""

from __future__ import annotations

from .actualizar_usuario import ActualizarUsuarioUseCase
from .alta_usuario import AltaUsuarioUseCase
from .eliminar_usuario import EliminarUsuarioUseCase
from .listar_usuarios import ListarUsuariosUseCase
from .obtener_usuario import ObtenerUsuarioUseCase
from .usuario_results import (
    LoginResult,
    UsuarioError,
    UsuarioErrorCode,
    UsuarioListResult,
    UsuarioResult,
)

__all__ = [
    "ActualizarUsuarioUseCase",
    "AltaUsuarioUseCase",
    "EliminarUsuarioUseCase",
    "ListarUsuariosUseCase",
    "LoginResult",
    "ObtenerUsuarioUseCase",
    "UsuarioError",
    "UsuarioErrorCode",
    "UsuarioListResult",
    "UsuarioResult",
]
