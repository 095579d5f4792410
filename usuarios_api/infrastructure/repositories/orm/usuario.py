"""
============================================================
TARJETA CRC — infrastructure/repositories/orm/usuario.py
============================================================
Class: OrmUsuarioRepository

Responsibilities:
  - Implementar UsuarioRepository con SQLAlchemy ORM.
  - find-or-null con Session.get (sin excepción por "not found").
  - Cada mutación = una sesión y un commit (unidad de trabajo por llamada).
  - Proyectar AccesoUsuario (perfil de login) desde el modelo completo.
  - Envolver SQLAlchemyError en PersistenceError.

Collaborators:
  - infrastructure.db.models (UsuarioModel, MenuModel, usuario_menus)
  - infrastructure.db.orm.get_session_factory
  - domain.entities

Constraints / Notes:
  - El mapping a entidad ocurre con la sesión abierta (colecciones cargadas).
  - Fechas naive (p.ej. SQLite) se interpretan como UTC.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ....crosscutting.exceptions import (
    MSG_CORREO_DUPLICADO,
    MSG_USUARIO_DUPLICADO,
    PersistenceError,
    UsuarioDuplicadoError,
)
from ....crosscutting.logger import logger
from ....domain.entities import AccesoUsuario, ModuloGeneral, Pais, Rol, Usuario
from ....domain.repositories import UsuarioRepository
from ...db.errors import DatabasePoolError
from ...db.models import (
    MenuModel,
    UsuarioModel,
    UsuarioPaisModel,
    UsuarioRolModel,
    usuario_menus,
)

T = TypeVar("T")


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _model_to_usuario(model: UsuarioModel) -> Usuario:
    return Usuario(
        id_usuario=model.id_usuario,
        correo_electronico=model.correo_electronico,
        nombre_completo=model.nombre_completo,
        id_superior=model.id_superior,
        nombre_superior=model.nombre_superior,
        correo_electronico_superior=model.correo_electronico_superior,
        paises=[Pais(pais_id=p.pais_id, estado=p.estado) for p in model.paises],
        roles=[Rol(rol_id=r.rol_id, estado=r.estado) for r in model.roles],
        fecha_creacion=_aware(model.fecha_creacion),
        fecha_actualizacion=_aware(model.fecha_actualizacion),
        estado=model.estado,
    )


def _copy_into_model(model: UsuarioModel, usuario: Usuario) -> None:
    """Campos mutables + colecciones (reemplazo completo, delete-orphan)."""
    model.correo_electronico = usuario.correo_electronico
    model.nombre_completo = usuario.nombre_completo
    model.id_superior = usuario.id_superior
    model.nombre_superior = usuario.nombre_superior
    model.correo_electronico_superior = usuario.correo_electronico_superior
    model.paises = [
        UsuarioPaisModel(posicion=i, pais_id=p.pais_id, estado=p.estado)
        for i, p in enumerate(usuario.paises)
    ]
    model.roles = [
        UsuarioRolModel(posicion=i, rol_id=r.rol_id, estado=r.estado)
        for i, r in enumerate(usuario.roles)
    ]
    model.estado = usuario.estado
    model.fecha_actualizacion = usuario.fecha_actualizacion


def _model_to_modulo(model: MenuModel) -> ModuloGeneral:
    return ModuloGeneral(
        id_menu=model.id_menu,
        id_menu_catalogo=model.id_menu_catalogo or None,
        menu=model.menu,
        icono=model.icono or "",
        ruta=model.ruta or "",
    )


class OrmUsuarioRepository(UsuarioRepository):
    """
    Store de usuarios sobre SQLAlchemy ORM.

    session_factory: inyectable (tests con SQLite); si es None se usa la
    fábrica global creada por init_engine().
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _factory(self) -> sessionmaker[Session]:
        if self._session_factory is not None:
            return self._session_factory
        from ...db.orm import get_session_factory

        return get_session_factory()

    def _run(
        self,
        operacion: str,
        fn: Callable[[Session], T],
        *,
        commit: bool = False,
        duplicado: str | None = None,
    ) -> T:
        """
        Abre una sesión, ejecuta fn y (opcional) confirma.

        IntegrityError con `duplicado` -> UsuarioDuplicadoError(duplicado);
        cualquier otro error de SQLAlchemy -> PersistenceError.
        """
        try:
            with self._factory()() as session:
                result = fn(session)
                if commit:
                    session.commit()
                return result
        except IntegrityError as exc:
            if duplicado is None:
                raise self._persistence_error(operacion, exc) from exc
            logger.warning(
                "OrmUsuarioRepository: violación de unicidad",
                extra={"operacion": operacion, "error": str(exc)},
            )
            raise UsuarioDuplicadoError(duplicado, original_error=exc) from exc
        except (SQLAlchemyError, DatabasePoolError) as exc:
            raise self._persistence_error(operacion, exc) from exc

    @staticmethod
    def _persistence_error(operacion: str, exc: Exception) -> PersistenceError:
        logger.exception(
            "OrmUsuarioRepository: operación falló",
            extra={"operacion": operacion, "error": str(exc)},
        )
        return PersistenceError(
            f"Error al {operacion}: {exc}", original_error=exc, operacion=operacion
        )

    # =========================================================
    # Lectura
    # =========================================================
    def listar_usuarios(self) -> List[Usuario]:
        def _op(session: Session) -> List[Usuario]:
            stmt = select(UsuarioModel).order_by(
                UsuarioModel.fecha_creacion, UsuarioModel.id_usuario
            )
            return [_model_to_usuario(m) for m in session.scalars(stmt)]

        return self._run("obtener los usuarios", _op)

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        def _op(session: Session) -> Optional[Usuario]:
            model = session.get(UsuarioModel, id_usuario)
            return _model_to_usuario(model) if model else None

        return self._run("obtener el usuario", _op)

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        def _op(session: Session) -> Optional[AccesoUsuario]:
            stmt = select(UsuarioModel).where(UsuarioModel.correo_electronico == correo)
            model = session.scalars(stmt).first()
            if model is None:
                return None
            return AccesoUsuario.desde_usuario(_model_to_usuario(model))

        return self._run("obtener el usuario por email", _op)

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        def _op(session: Session) -> List[ModuloGeneral]:
            stmt = (
                select(MenuModel)
                .join(usuario_menus, usuario_menus.c.id_menu == MenuModel.id_menu)
                .where(usuario_menus.c.id_usuario == id_usuario)
                .order_by(MenuModel.orden, MenuModel.id_menu)
            )
            return [_model_to_modulo(m) for m in session.scalars(stmt)]

        return self._run("obtener los módulos del usuario", _op)

    # =========================================================
    # Escritura (una unidad de trabajo por llamada)
    # =========================================================
    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        nuevo = usuario.copia()
        nuevo.marcar_alta(self._now())

        def _op(session: Session) -> Usuario:
            model = UsuarioModel(
                id_usuario=nuevo.id_usuario,
                fecha_creacion=nuevo.fecha_creacion,
            )
            _copy_into_model(model, nuevo)
            session.add(model)
            session.flush()
            return _model_to_usuario(model)

        return self._run(
            "registrar el usuario", _op, commit=True, duplicado=MSG_USUARIO_DUPLICADO
        )

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        def _op(session: Session) -> Optional[Usuario]:
            model = session.get(UsuarioModel, usuario.id_usuario)
            if model is None:
                return None
            actual = _model_to_usuario(model)
            actual.aplicar_cambios(usuario, self._now())
            _copy_into_model(model, actual)
            session.flush()
            return _model_to_usuario(model)

        return self._run(
            "actualizar el usuario", _op, commit=True, duplicado=MSG_CORREO_DUPLICADO
        )

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        def _op(session: Session) -> Optional[Usuario]:
            model = session.get(UsuarioModel, id_usuario)
            if model is None:
                return None
            model.estado = False
            model.fecha_actualizacion = self._now()
            session.flush()
            return _model_to_usuario(model)

        return self._run("eliminar el usuario", _op, commit=True)
