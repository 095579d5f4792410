"""
===============================================================================
TARJETA CRC — schemas/login.py
===============================================================================

Responsabilidades:
    - LoginReq {Email}
    - LoginRes {Token, Perfil, Modulos} con claves PascalCase.
    - Mapear AccesoUsuario / Modulo (dominio) -> DTOs.
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from usuarios_api.domain.entities import AccesoUsuario, Modulo


class LoginReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(default=None, alias="Email")


class PerfilDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id_usuario: str = Field(alias="IdUsuario")
    nombre_completo: str = Field(alias="NombreCompleto")
    correo_electronico: str = Field(alias="CorreoElectronico")
    pais: str | None = Field(default=None, alias="Pais")
    rol: str | None = Field(default=None, alias="Rol")
    estado: bool = Field(default=True, alias="Estado")

    @classmethod
    def from_entity(cls, perfil: AccesoUsuario) -> "PerfilDto":
        return cls(
            id_usuario=perfil.id_usuario,
            nombre_completo=perfil.nombre_completo,
            correo_electronico=perfil.correo_electronico,
            pais=perfil.pais,
            rol=perfil.rol,
            estado=perfil.estado,
        )


class ModuloDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str = Field(alias="Label")
    icono: str = Field(default="", alias="Icono")
    ruta: str = Field(default="", alias="Ruta")
    submodulos: Optional[list["ModuloDto"]] = Field(default=None, alias="Submodulos")

    @classmethod
    def from_entity(cls, modulo: Modulo) -> "ModuloDto":
        hijos = modulo.submodulos
        return cls(
            label=modulo.label,
            icono=modulo.icono,
            ruta=modulo.ruta,
            submodulos=[cls.from_entity(h) for h in hijos] if hijos else None,
        )


class LoginRes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(alias="Token")
    perfil: PerfilDto = Field(alias="Perfil")
    modulos: Optional[list[ModuloDto]] = Field(default=None, alias="Modulos")
