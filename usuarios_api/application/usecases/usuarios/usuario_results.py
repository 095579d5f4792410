"""
===============================================================================
USUARIO USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Usuario Use Case Results

Business Goal:
    Proveer tipos consistentes de resultados y errores para los casos de uso
    de usuarios y de login.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de levantar errores
      HTTP: el router decide status code y Estatus de la envoltura.
    - Los errores de persistencia NO se modelan acá: se propagan como
      PersistenceError y los traduce el handler global.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    usuario_results models (module)

Responsibilities:
    - Definir UsuarioErrorCode como conjunto estable de categorías de error.
    - Definir UsuarioError (code, message, errores[]).
    - Definir UsuarioResult, UsuarioListResult y LoginResult.

Collaborators:
    - domain.entities: Usuario, AccesoUsuario, Modulo
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import AccesoUsuario, Modulo, Usuario


class UsuarioErrorCode(str, Enum):
    """
    Categorías de error de los casos de uso.

    Códigos:
      - VALIDATION_ERROR: input inválido/incompleto (lista de mensajes).
      - NOT_FOUND: usuario inexistente (o lista vacía).
      - UNAUTHORIZED: login con email inexistente o usuario inactivo.
      - ID_MISMATCH: id de la ruta distinto al del cuerpo.
      - TOKEN_ERROR: no se pudo emitir el token.
      - CONFLICT: id o email ya registrados en el store.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    ID_MISMATCH = "ID_MISMATCH"
    TOKEN_ERROR = "TOKEN_ERROR"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UsuarioError:
    """
    Error de caso de uso.

    Campos:
      - code: categoría estable
      - message: texto para la envoltura (Mensaje)
      - errores: mensajes individuales de validación (si aplica)
    """

    code: UsuarioErrorCode
    message: str
    errores: tuple[str, ...] = field(default_factory=tuple)


@dataclass
class UsuarioResult:
    """
    Resultado para operaciones sobre un usuario.

    Contrato:
      - Éxito: usuario != None y error == None
      - Falla: usuario == None y error != None
    """

    usuario: Usuario | None = None
    error: UsuarioError | None = None


@dataclass
class UsuarioListResult:
    usuarios: List[Usuario] = field(default_factory=list)
    error: UsuarioError | None = None


@dataclass
class LoginResult:
    """
    Resultado del login.

    Campos:
      - token: JWT emitido
      - perfil: proyección AccesoUsuario
      - modulos: menú aplanado; None cuando el usuario no tiene módulos
    """

    token: str | None = None
    perfil: AccesoUsuario | None = None
    modulos: List[Modulo] | None = None
    error: UsuarioError | None = None
