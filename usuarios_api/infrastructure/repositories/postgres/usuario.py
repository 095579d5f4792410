"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/usuario.py
============================================================
Class: PostgresUsuarioRepository

Responsibilities:
  - Implementar UsuarioRepository invocando funciones almacenadas de
    PostgreSQL (sp_*), cada una devuelve UNA fila (estatus, mensaje, objeto).
  - Convertir la fila en RespuestaProcedimiento y decidir éxito/falla:
      * lecturas: sólo Estatus "S" es éxito
      * escrituras: Estatus "E" es falla ("W" se acepta)
  - Decodificar `objeto` (JSON serializado) al tipo esperado.
  - Envolver errores del driver / pool y envelopes fallidos en PersistenceError
    con el contexto de la operación.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (pool global)
  - repositories.records (payload PascalCase -> entidades)
  - crosscutting.logger.logger / crosscutting.exceptions.PersistenceError

Constraints / Notes:
  - SQL parametrizado siempre (los nombres de función son constantes).
  - `objeto` null con Estatus "S" = recurso inexistente (None, no excepción).
  - Una conexión por llamada: se toma y se devuelve dentro del método.
  - Contrato de funciones definido en alembic/versions/001_usuarios.py.
============================================================
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

import psycopg
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import (
    MSG_CORREO_DUPLICADO,
    MSG_USUARIO_DUPLICADO,
    PersistenceError,
    UsuarioDuplicadoError,
)
from ....crosscutting.logger import logger
from ....domain.entities import (
    AccesoUsuario,
    ModuloGeneral,
    RespuestaProcedimiento,
    Usuario,
)
from ....domain.repositories import UsuarioRepository
from ...db.errors import DatabasePoolError
from ..records import (
    acceso_from_record,
    modulo_from_record,
    usuario_from_record,
    usuario_to_record,
)

# ============================================================
# Contrato con la base (nombres de funciones almacenadas)
# ============================================================
SP_VALIDAR_USUARIO = "sp_validar_usuario"
SP_USUARIO_COMPLETO = "sp_usuario_completo"
SP_OBTENER_USUARIO = "sp_obtener_usuario"
SP_OBTENER_MENUS_SUBMENUS = "sp_obtener_menus_submenus"
SP_INSERTAR_USUARIO = "sp_insertar_usuario"
SP_ACTUALIZAR_USUARIO = "sp_actualizar_usuario"
SP_ELIMINAR_USUARIO = "sp_eliminar_usuario"

# R: Mensajes con los que las funciones reportan violación de unicidad.
_MENSAJES_DUPLICADO = frozenset({MSG_USUARIO_DUPLICADO, MSG_CORREO_DUPLICADO})


def _row_to_respuesta(row: Sequence[Any] | None) -> RespuestaProcedimiento:
    if not row:
        return RespuestaProcedimiento(
            estatus="E", mensaje="El procedimiento no devolvió resultado."
        )
    return RespuestaProcedimiento(
        estatus=str(row[0] or "").strip().upper(),
        mensaje=row[1] or "",
        objeto=row[2],
    )


def _decode_objeto(objeto: Any) -> Any:
    """R: `objeto` llega como texto JSON; si el driver ya lo decodificó, se usa tal cual."""
    if objeto is None:
        return None
    if isinstance(objeto, (str, bytes, bytearray)):
        return json.loads(objeto) if objeto else None
    return objeto


class PostgresUsuarioRepository(UsuarioRepository):
    """
    Store de usuarios basado en funciones almacenadas.

    pool: inyectable (tests); si es None se usa el pool global.
    """

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Invocación + política de Estatus
    # =========================================================
    def _call(
        self,
        procedimiento: str,
        params: Sequence[object],
        *,
        operacion: str,
        lectura: bool,
    ) -> RespuestaProcedimiento:
        placeholders = ", ".join(["%s"] * len(params))
        query = f"SELECT estatus, mensaje, objeto FROM {procedimiento}({placeholders})"
        log_extra = {"procedimiento": procedimiento, "operacion": operacion}

        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(query, tuple(params)).fetchone()
        except (psycopg.Error, DatabasePoolError) as exc:
            logger.exception(
                "PostgresUsuarioRepository: error de base de datos",
                extra={**log_extra, "error": str(exc)},
            )
            raise PersistenceError(
                f"Error al {operacion} a nivel BD: {exc}",
                original_error=exc,
                operacion=operacion,
            ) from exc

        respuesta = _row_to_respuesta(row)
        fallo = not respuesta.es_exito if lectura else respuesta.es_error
        if fallo:
            logger.error(
                "PostgresUsuarioRepository: el procedimiento reportó error",
                extra={
                    **log_extra,
                    "estatus": respuesta.estatus,
                    "mensaje_sp": respuesta.mensaje,
                },
            )
            if respuesta.mensaje in _MENSAJES_DUPLICADO:
                raise UsuarioDuplicadoError(respuesta.mensaje)
            raise PersistenceError(
                f"Error al {operacion}: {respuesta.mensaje or 'error desconocido'}",
                operacion=operacion,
            )
        return respuesta

    def _payload(self, respuesta: RespuestaProcedimiento, *, operacion: str) -> Any:
        try:
            return _decode_objeto(respuesta.objeto)
        except ValueError as exc:
            raise PersistenceError(
                f"Error al {operacion}: payload inválido ({exc})",
                original_error=exc,
                operacion=operacion,
            ) from exc

    def _map(self, fn, payload: Any, *, operacion: str):
        try:
            return fn(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Error al {operacion}: payload inválido ({exc})",
                original_error=exc,
                operacion=operacion,
            ) from exc

    # =========================================================
    # Lectura
    # =========================================================
    def listar_usuarios(self) -> List[Usuario]:
        operacion = "obtener los usuarios"
        respuesta = self._call(SP_USUARIO_COMPLETO, (), operacion=operacion, lectura=True)
        payload = self._payload(respuesta, operacion=operacion) or []
        return self._map(
            lambda rows: [usuario_from_record(r) for r in rows],
            payload,
            operacion=operacion,
        )

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        operacion = "obtener el usuario"
        respuesta = self._call(
            SP_OBTENER_USUARIO, (id_usuario,), operacion=operacion, lectura=True
        )
        payload = self._payload(respuesta, operacion=operacion)
        if not payload:
            return None
        return self._map(usuario_from_record, payload, operacion=operacion)

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        operacion = "obtener el usuario por email"
        respuesta = self._call(
            SP_VALIDAR_USUARIO, (correo,), operacion=operacion, lectura=True
        )
        payload = self._payload(respuesta, operacion=operacion)
        if not payload:
            return None
        return self._map(acceso_from_record, payload, operacion=operacion)

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        operacion = "obtener los módulos del usuario"
        respuesta = self._call(
            SP_OBTENER_MENUS_SUBMENUS, (id_usuario,), operacion=operacion, lectura=True
        )
        payload = self._payload(respuesta, operacion=operacion) or []
        return self._map(
            lambda rows: [modulo_from_record(r) for r in rows],
            payload,
            operacion=operacion,
        )

    # =========================================================
    # Escritura
    # =========================================================
    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        operacion = "registrar el usuario"
        respuesta = self._call(
            SP_INSERTAR_USUARIO,
            (json.dumps(usuario_to_record(usuario), ensure_ascii=False),),
            operacion=operacion,
            lectura=False,
        )
        payload = self._payload(respuesta, operacion=operacion)
        if not payload:
            raise PersistenceError(
                f"Error al {operacion}: el procedimiento no devolvió el registro",
                operacion=operacion,
            )
        return self._map(usuario_from_record, payload, operacion=operacion)

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        operacion = "actualizar el usuario"
        respuesta = self._call(
            SP_ACTUALIZAR_USUARIO,
            (json.dumps(usuario_to_record(usuario), ensure_ascii=False),),
            operacion=operacion,
            lectura=False,
        )
        payload = self._payload(respuesta, operacion=operacion)
        if not payload:
            return None
        return self._map(usuario_from_record, payload, operacion=operacion)

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        operacion = "eliminar el usuario"
        respuesta = self._call(
            SP_ELIMINAR_USUARIO, (id_usuario,), operacion=operacion, lectura=False
        )
        payload = self._payload(respuesta, operacion=operacion)
        if not payload:
            return None
        return self._map(usuario_from_record, payload, operacion=operacion)
