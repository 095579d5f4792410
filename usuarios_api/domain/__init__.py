"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    AccesoUsuario,
    EstatusProcedimiento,
    Modulo,
    ModuloGeneral,
    Pais,
    RespuestaProcedimiento,
    Rol,
    Usuario,
)
from .repositories import UsuarioRepository

__all__ = [
    "AccesoUsuario",
    "EstatusProcedimiento",
    "Modulo",
    "ModuloGeneral",
    "Pais",
    "RespuestaProcedimiento",
    "Rol",
    "Usuario",
    "UsuarioRepository",
]
