"""
===============================================================================
TARJETA CRC — schemas/usuarios.py
===============================================================================

Módulo:
    Schemas HTTP de Usuario (DTO con claves PascalCase)

Responsabilidades:
    - Definir UsuarioDto (request y response) con los nombres de campo que
      consume el frontend (UsuarioId, Email, Nombre, ...).
    - Convertir DTO <-> entidad de dominio.

Notas:
    - Todos los campos son opcionales en la entrada: las reglas de negocio
      las aplica UsuarioValidator para devolver TODOS los mensajes juntos.
    - Email es str (no EmailStr) por el mismo motivo.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from usuarios_api.domain.entities import Pais, Rol, Usuario


class _PascalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PaisDto(_PascalModel):
    pais_id: str = Field(default="", alias="PaisId")
    estado: bool = Field(default=True, alias="Estado")


class RolDto(_PascalModel):
    rol_id: str = Field(default="", alias="RolId")
    estado: bool = Field(default=True, alias="Estado")


class UsuarioDto(_PascalModel):
    usuario_id: str | None = Field(default=None, alias="UsuarioId")
    email: str | None = Field(default=None, alias="Email")
    nombre: str | None = Field(default=None, alias="Nombre")
    usuario_superior_id: str | None = Field(default=None, alias="UsuarioSuperiorId")
    nombre_superior: str | None = Field(default=None, alias="NombreSuperior")
    email_superior: str | None = Field(default=None, alias="EmailSuperior")
    paises: list[PaisDto] = Field(default_factory=list, alias="Paises")
    roles: list[RolDto] = Field(default_factory=list, alias="Roles")
    fecha_creacion: datetime | None = Field(default=None, alias="FechaCreacion")
    fecha_actualizacion: datetime | None = Field(
        default=None, alias="FechaActualizacion"
    )
    estatus: bool = Field(default=True, alias="Estatus")

    def to_entity(self) -> Usuario:
        return Usuario(
            id_usuario=(self.usuario_id or "").strip(),
            correo_electronico=(self.email or "").strip(),
            nombre_completo=(self.nombre or "").strip(),
            id_superior=self.usuario_superior_id,
            nombre_superior=self.nombre_superior,
            correo_electronico_superior=self.email_superior,
            paises=[Pais(p.pais_id, p.estado) for p in self.paises],
            roles=[Rol(r.rol_id, r.estado) for r in self.roles],
            fecha_creacion=self.fecha_creacion,
            fecha_actualizacion=self.fecha_actualizacion,
            estado=self.estatus,
        )

    @classmethod
    def from_entity(cls, usuario: Usuario) -> "UsuarioDto":
        return cls(
            usuario_id=usuario.id_usuario,
            email=usuario.correo_electronico,
            nombre=usuario.nombre_completo,
            usuario_superior_id=usuario.id_superior,
            nombre_superior=usuario.nombre_superior,
            email_superior=usuario.correo_electronico_superior,
            paises=[PaisDto(pais_id=p.pais_id, estado=p.estado) for p in usuario.paises],
            roles=[RolDto(rol_id=r.rol_id, estado=r.estado) for r in usuario.roles],
            fecha_creacion=usuario.fecha_creacion,
            fecha_actualizacion=usuario.fecha_actualizacion,
            estatus=usuario.estado,
        )
