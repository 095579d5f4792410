"""
============================================================
TARJETA CRC — infrastructure/repositories/records.py
============================================================
Module: Registros serializados (PascalCase) <-> entidades

Responsibilities:
  - Traducir el formato de registro compartido por el archivo JSON y por el
    payload `objeto` de los procedimientos almacenados.
  - Normalizar fechas ISO 8601 a datetime con zona (UTC si viene naive).
  - Detectar un email ya tomado (stores sin restricción UNIQUE en el motor).

Collaborators:
  - json_file.usuario.JsonFileUsuarioRepository
  - postgres.usuario.PostgresUsuarioRepository
  - in_memory.usuario.InMemoryUsuarioRepository (correo_en_uso)
  - domain.entities

Constraints / Notes:
  - Claves: IdUsuario, CorreoElectronico, NombreCompleto, IdSuperior,
    NombreSuperior, CorreoElectronicoSuperior, Pais[{PaisId, Estado}],
    Rol[{RolId, Estado}], FechaCreacion, FechaActualizacion, Estado.
  - Un registro mal formado levanta ValueError/KeyError; el store lo envuelve
    en PersistenceError.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from ...domain.entities import AccesoUsuario, ModuloGeneral, Pais, Rol, Usuario


def parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def usuario_from_record(record: Dict[str, Any]) -> Usuario:
    return Usuario(
        id_usuario=str(record.get("IdUsuario") or ""),
        correo_electronico=record.get("CorreoElectronico") or "",
        nombre_completo=record.get("NombreCompleto") or "",
        id_superior=_optional_str(record.get("IdSuperior")),
        nombre_superior=record.get("NombreSuperior"),
        correo_electronico_superior=record.get("CorreoElectronicoSuperior"),
        paises=[
            Pais(pais_id=str(p["PaisId"]), estado=bool(p.get("Estado", True)))
            for p in record.get("Pais") or []
        ],
        roles=[
            Rol(rol_id=str(r["RolId"]), estado=bool(r.get("Estado", True)))
            for r in record.get("Rol") or []
        ],
        fecha_creacion=parse_datetime(record.get("FechaCreacion")),
        fecha_actualizacion=parse_datetime(record.get("FechaActualizacion")),
        estado=bool(record.get("Estado", True)),
    )


def usuario_to_record(usuario: Usuario) -> Dict[str, Any]:
    return {
        "IdUsuario": usuario.id_usuario,
        "CorreoElectronico": usuario.correo_electronico,
        "NombreCompleto": usuario.nombre_completo,
        "IdSuperior": usuario.id_superior,
        "NombreSuperior": usuario.nombre_superior,
        "CorreoElectronicoSuperior": usuario.correo_electronico_superior,
        "Pais": [{"PaisId": p.pais_id, "Estado": p.estado} for p in usuario.paises],
        "Rol": [{"RolId": r.rol_id, "Estado": r.estado} for r in usuario.roles],
        "FechaCreacion": format_datetime(usuario.fecha_creacion),
        "FechaActualizacion": format_datetime(usuario.fecha_actualizacion),
        "Estado": usuario.estado,
    }


def acceso_from_record(record: Dict[str, Any]) -> AccesoUsuario:
    return AccesoUsuario(
        id_usuario=str(record["IdUsuario"]),
        nombre_completo=record.get("NombreCompleto") or "",
        correo_electronico=record.get("CorreoElectronico") or "",
        pais=_optional_str(record.get("Pais")),
        rol=_optional_str(record.get("Rol")),
        estado=bool(record.get("Estado", False)),
    )


def modulo_from_record(record: Dict[str, Any]) -> ModuloGeneral:
    return ModuloGeneral(
        id_menu=int(record["IdMenu"]),
        id_menu_catalogo=_optional_str(record.get("IdMenuCatalogo")),
        menu=record.get("Menu") or "",
        icono=record.get("Icono") or "",
        ruta=record.get("Ruta") or "",
    )


def correo_en_uso(
    usuarios: Iterable[Usuario], correo: str, *, excepto: Optional[str] = None
) -> bool:
    """True si otro usuario (id != excepto) ya tiene ese email."""
    return any(
        u.correo_electronico == correo and u.id_usuario != excepto for u in usuarios
    )
