"""
============================================================
TARJETA CRC — infrastructure/db/models.py
============================================================
Module: Modelos ORM (SQLAlchemy 2.0, declarative + Mapped[])

Responsibilities:
  - Mapear las tablas usuarios / usuario_paises / usuario_roles / menus /
    usuario_menus (contrato con alembic/versions/001_usuarios.py).
  - Exponer Base.metadata con naming convention estable (autogenerate).

Collaborators:
  - repositories.orm.usuario.OrmUsuarioRepository
  - alembic/env.py (target_metadata)

Notes:
  - Las asignaciones (país / rol) conservan su orden con la columna `posicion`.
  - delete-orphan: reemplazar la colección en un update borra las filas viejas.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s__%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


usuario_menus = Table(
    "usuario_menus",
    Base.metadata,
    Column(
        "id_usuario",
        String(64),
        ForeignKey("usuarios.id_usuario", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "id_menu",
        Integer,
        ForeignKey("menus.id_menu", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class UsuarioModel(Base):
    __tablename__ = "usuarios"

    id_usuario: Mapped[str] = mapped_column(String(64), primary_key=True)
    correo_electronico: Mapped[str] = mapped_column(String(320), unique=True)
    nombre_completo: Mapped[str] = mapped_column(String(200))
    id_superior: Mapped[Optional[str]] = mapped_column(String(64))
    nombre_superior: Mapped[Optional[str]] = mapped_column(String(200))
    correo_electronico_superior: Mapped[Optional[str]] = mapped_column(String(320))
    fecha_creacion: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    fecha_actualizacion: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    estado: Mapped[bool] = mapped_column(Boolean, default=True)

    paises: Mapped[List["UsuarioPaisModel"]] = relationship(
        order_by="UsuarioPaisModel.posicion",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    roles: Mapped[List["UsuarioRolModel"]] = relationship(
        order_by="UsuarioRolModel.posicion",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class UsuarioPaisModel(Base):
    __tablename__ = "usuario_paises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_usuario: Mapped[str] = mapped_column(
        String(64), ForeignKey("usuarios.id_usuario", ondelete="CASCADE"), index=True
    )
    posicion: Mapped[int] = mapped_column(Integer, default=0)
    pais_id: Mapped[str] = mapped_column(String(32))
    estado: Mapped[bool] = mapped_column(Boolean, default=True)


class UsuarioRolModel(Base):
    __tablename__ = "usuario_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_usuario: Mapped[str] = mapped_column(
        String(64), ForeignKey("usuarios.id_usuario", ondelete="CASCADE"), index=True
    )
    posicion: Mapped[int] = mapped_column(Integer, default=0)
    rol_id: Mapped[str] = mapped_column(String(32))
    estado: Mapped[bool] = mapped_column(Boolean, default=True)


class MenuModel(Base):
    __tablename__ = "menus"

    id_menu: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    id_menu_catalogo: Mapped[Optional[str]] = mapped_column(String(32))
    menu: Mapped[str] = mapped_column(String(120))
    icono: Mapped[str] = mapped_column(String(120), default="")
    ruta: Mapped[str] = mapped_column(String(250), default="")
    orden: Mapped[int] = mapped_column(Integer, default=0)
