"""
===============================================================================
USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso de usuarios y login.
    - Re-exportar resultados/errores compartidos.

Collaborators:
    - usecases.usuarios, usecases.login
===============================================================================
"""

from __future__ import annotations

from .login import AutenticarUsuarioUseCase
from .usuarios import (
    ActualizarUsuarioUseCase,
    AltaUsuarioUseCase,
    EliminarUsuarioUseCase,
    ListarUsuariosUseCase,
    LoginResult,
    ObtenerUsuarioUseCase,
    UsuarioError,
    UsuarioErrorCode,
    UsuarioListResult,
    UsuarioResult,
)

__all__ = [
    "ActualizarUsuarioUseCase",
    "AltaUsuarioUseCase",
    "AutenticarUsuarioUseCase",
    "EliminarUsuarioUseCase",
    "ListarUsuariosUseCase",
    "LoginResult",
    "ObtenerUsuarioUseCase",
    "UsuarioError",
    "UsuarioErrorCode",
    "UsuarioListResult",
    "UsuarioResult",
]
