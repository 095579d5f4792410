"""
============================================================
TARJETA CRC — infrastructure/repositories/json_file/usuario.py
============================================================
Class: JsonFileUsuarioRepository

Responsibilities:
  - Persistir usuarios como un arreglo JSON en `usuarios.json`.
  - Leer filas de menú por usuario desde `modulos.json` (objeto id -> filas).
  - Serializar read-modify-write por ruta de archivo (lock por path) para no
    perder actualizaciones concurrentes.
  - Escribir de forma atómica (archivo temporal + os.replace).
  - Envolver fallas de disco / JSON corrupto en PersistenceError.

Collaborators:
  - repositories.records (mapping PascalCase <-> entidades)
  - crosscutting.exceptions.PersistenceError
  - crosscutting.logger.logger

Constraints / Notes:
  - Archivo inexistente = store vacío (no es error).
  - Sin versionado ni migraciones del archivo.
============================================================
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ....crosscutting.exceptions import (
    MSG_CORREO_DUPLICADO,
    MSG_USUARIO_DUPLICADO,
    PersistenceError,
    UsuarioDuplicadoError,
)
from ....crosscutting.logger import logger
from ....domain.entities import AccesoUsuario, ModuloGeneral, Usuario
from ....domain.repositories import UsuarioRepository
from ..records import (
    correo_en_uso,
    modulo_from_record,
    usuario_from_record,
    usuario_to_record,
)

USUARIOS_FILE = "usuarios.json"
MODULOS_FILE = "modulos.json"

T = TypeVar("T")

# ============================================================
# Locks por ruta (compartidos entre instancias del proceso)
# ============================================================
_path_locks: Dict[str, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = str(path.resolve())
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _path_locks[key] = lock
        return lock


class JsonFileUsuarioRepository(UsuarioRepository):
    """
    Store de usuarios sobre un archivo JSON local.

    Modelo mental:
    - Cada escritura = cargar todo, mutar, guardar todo, bajo el lock de la ruta.
    - Las lecturas también toman el lock: nunca ven un estado intermedio.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir)
        self._usuarios_path = self._data_dir / USUARIOS_FILE
        self._modulos_path = self._data_dir / MODULOS_FILE
        self._lock = _lock_for(self._usuarios_path)

    @property
    def usuarios_path(self) -> Path:
        return self._usuarios_path

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # =========================================================
    # I/O de bajo nivel
    # =========================================================
    def _guarded(self, operacion: str, fn: Callable[[], T]) -> T:
        """Ejecuta fn bajo el lock y envuelve fallas de I/O / formato."""
        try:
            with self._lock:
                return fn()
        except (OSError, ValueError, TypeError, KeyError) as exc:
            logger.exception(
                "JsonFileUsuarioRepository: operación falló",
                extra={
                    "operacion": operacion,
                    "path": str(self._usuarios_path),
                    "error": str(exc),
                },
            )
            raise PersistenceError(
                f"Error al {operacion}: {exc}",
                original_error=exc,
                operacion=operacion,
            ) from exc

    @staticmethod
    def _read_json(path: Path, default: Any) -> Any:
        if not path.exists():
            return default
        content = path.read_text(encoding="utf-8")
        if not content.strip():
            return default
        return json.loads(content)

    def _cargar(self) -> List[Usuario]:
        data = self._read_json(self._usuarios_path, [])
        if not isinstance(data, list):
            raise ValueError(f"{self._usuarios_path.name} no contiene un arreglo JSON")
        return [usuario_from_record(r) for r in data]

    def _guardar(self, usuarios: List[Usuario]) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        payload = [usuario_to_record(u) for u in usuarios]
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self._data_dir), prefix=".usuarios-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._usuarios_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @staticmethod
    def _buscar(usuarios: List[Usuario], id_usuario: str) -> Optional[Usuario]:
        return next((u for u in usuarios if u.id_usuario == id_usuario), None)

    # =========================================================
    # Lectura
    # =========================================================
    def listar_usuarios(self) -> List[Usuario]:
        return self._guarded("obtener los usuarios", self._cargar)

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        return self._guarded(
            "obtener el usuario", lambda: self._buscar(self._cargar(), id_usuario)
        )

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        def _op() -> Optional[AccesoUsuario]:
            for usuario in self._cargar():
                if usuario.correo_electronico == correo:
                    return AccesoUsuario.desde_usuario(usuario)
            return None

        return self._guarded("obtener el usuario por email", _op)

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        def _op() -> List[ModuloGeneral]:
            data = self._read_json(self._modulos_path, {})
            if not isinstance(data, dict):
                raise ValueError(f"{self._modulos_path.name} no contiene un objeto JSON")
            return [modulo_from_record(r) for r in data.get(id_usuario) or []]

        return self._guarded("obtener los módulos del usuario", _op)

    # =========================================================
    # Escritura
    # =========================================================
    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        def _op() -> Usuario:
            usuarios = self._cargar()
            existente = self._buscar(usuarios, usuario.id_usuario)
            if existente is not None or correo_en_uso(
                usuarios, usuario.correo_electronico
            ):
                raise UsuarioDuplicadoError(MSG_USUARIO_DUPLICADO)
            nuevo = usuario.copia()
            nuevo.marcar_alta(self._now())
            usuarios.append(nuevo)
            self._guardar(usuarios)
            return nuevo

        return self._guarded("registrar el usuario", _op)

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        def _op() -> Optional[Usuario]:
            usuarios = self._cargar()
            existente = self._buscar(usuarios, usuario.id_usuario)
            if existente is None:
                return None
            if correo_en_uso(
                usuarios, usuario.correo_electronico, excepto=usuario.id_usuario
            ):
                raise UsuarioDuplicadoError(MSG_CORREO_DUPLICADO)
            existente.aplicar_cambios(usuario, self._now())
            self._guardar(usuarios)
            return existente

        return self._guarded("actualizar el usuario", _op)

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        def _op() -> Optional[Usuario]:
            usuarios = self._cargar()
            existente = self._buscar(usuarios, id_usuario)
            if existente is None:
                return None
            existente.marcar_baja(self._now())
            self._guardar(usuarios)
            return existente

        return self._guarded("eliminar el usuario", _op)
