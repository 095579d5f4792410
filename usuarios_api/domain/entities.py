"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Usuario, Pais, Rol, AccesoUsuario, ModuloGeneral,
    Modulo, RespuestaProcedimiento)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes de ciclo de vida
      (alta activa, baja lógica, refresco de fecha_actualizacion).
    - Proyectar Usuario -> AccesoUsuario (perfil de login).

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan/retornan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Un Usuario nunca se borra físicamente: baja = estado False.
===============================================================================
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Asignaciones (país / rol)
# ---------------------------------------------------------------------------


@dataclass
class Pais:
    """Asignación de país a un usuario (el estado es de la asignación, no del país)."""

    pais_id: str
    estado: bool = True


@dataclass
class Rol:
    """Asignación de rol a un usuario."""

    rol_id: str
    estado: bool = True


# ---------------------------------------------------------------------------
# Usuario
# ---------------------------------------------------------------------------


@dataclass
class Usuario:
    """
    Usuario del directorio.

    Notas:
      - Los datos del superior están desnormalizados (lectura cómoda); no se
        resuelven dinámicamente.
      - paises / roles conservan el orden de asignación.
    """

    id_usuario: str
    correo_electronico: str
    nombre_completo: str
    id_superior: Optional[str] = None
    nombre_superior: Optional[str] = None
    correo_electronico_superior: Optional[str] = None
    paises: List[Pais] = field(default_factory=list)
    roles: List[Rol] = field(default_factory=list)
    fecha_creacion: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None
    estado: bool = True

    def copia(self) -> "Usuario":
        """Copia profunda (los stores nunca comparten listas mutables)."""
        return copy.deepcopy(self)

    def marcar_alta(self, ahora: datetime | None = None) -> None:
        """Alta: ambas fechas = ahora y estado forzado a activo."""
        now = ahora or _utcnow()
        self.fecha_creacion = now
        self.fecha_actualizacion = now
        self.estado = True

    def marcar_baja(self, ahora: datetime | None = None) -> None:
        """Baja lógica (idempotente)."""
        self.estado = False
        self.fecha_actualizacion = ahora or _utcnow()

    def aplicar_cambios(self, cambios: "Usuario", ahora: datetime | None = None) -> None:
        """
        Sobrescribe los campos mutables con los de `cambios`.

        id_usuario y fecha_creacion no cambian.
        """
        self.correo_electronico = cambios.correo_electronico
        self.nombre_completo = cambios.nombre_completo
        self.id_superior = cambios.id_superior
        self.nombre_superior = cambios.nombre_superior
        self.correo_electronico_superior = cambios.correo_electronico_superior
        self.paises = [Pais(p.pais_id, p.estado) for p in cambios.paises]
        self.roles = [Rol(r.rol_id, r.estado) for r in cambios.roles]
        self.estado = cambios.estado
        self.fecha_actualizacion = ahora or _utcnow()


# ---------------------------------------------------------------------------
# Perfil de acceso (login)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccesoUsuario:
    """
    Proyección aplanada que devuelve el camino de autenticación.

    pais / rol: primera asignación activa (o None si no hay).
    """

    id_usuario: str
    nombre_completo: str
    correo_electronico: str
    pais: Optional[str] = None
    rol: Optional[str] = None
    estado: bool = True

    @classmethod
    def desde_usuario(cls, usuario: Usuario) -> "AccesoUsuario":
        pais = next((p.pais_id for p in usuario.paises if p.estado), None)
        rol = next((r.rol_id for r in usuario.roles if r.estado), None)
        return cls(
            id_usuario=usuario.id_usuario,
            nombre_completo=usuario.nombre_completo,
            correo_electronico=usuario.correo_electronico,
            pais=pais,
            rol=rol,
            estado=usuario.estado,
        )


# ---------------------------------------------------------------------------
# Menú
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModuloGeneral:
    """
    Fila cruda de menú.

    id_menu_catalogo: referencia al padre como string (None/"" = nivel superior).
    """

    id_menu: int
    menu: str
    icono: str = ""
    ruta: str = ""
    id_menu_catalogo: Optional[str] = None

    @property
    def es_raiz(self) -> bool:
        return not (self.id_menu_catalogo or "").strip()


@dataclass
class Modulo:
    """Entrada de menú aplanada. submodulos None = sin hijos (no lista vacía)."""

    label: str
    icono: str
    ruta: str
    submodulos: Optional[List["Modulo"]] = None


# ---------------------------------------------------------------------------
# Envoltura de procedimientos almacenados
# ---------------------------------------------------------------------------


class EstatusProcedimiento(str, Enum):
    EXITO = "S"
    ADVERTENCIA = "W"
    ERROR = "E"


@dataclass(frozen=True)
class RespuestaProcedimiento:
    """
    Fila (estatus, mensaje, objeto) que devuelve cada función SQL.

    objeto: JSON serializado; opaco hasta que el caller lo decodifica.
    """

    estatus: str
    mensaje: str = ""
    objeto: Optional[str] = None

    @property
    def es_exito(self) -> bool:
        return self.estatus == EstatusProcedimiento.EXITO.value

    @property
    def es_error(self) -> bool:
        return self.estatus == EstatusProcedimiento.ERROR.value
