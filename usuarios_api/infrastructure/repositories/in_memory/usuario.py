"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/usuario.py
============================================================
Class: InMemoryUsuarioRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev).
  - Implementar el contrato UsuarioRepository completo, con baja lógica.
  - Rechazar id o email repetidos (UsuarioDuplicadoError); nunca reemplazar.
  - Mantener el orden de inserción (equivalente al orden del archivo JSON).
  - Guardar filas de menú por usuario (seed manual en tests).

Collaborators:
  - domain.entities.Usuario, AccesoUsuario, ModuloGeneral
  - domain.repositories.UsuarioRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: evita compartir listas mutables entre callers.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional

from ....crosscutting.exceptions import (
    MSG_CORREO_DUPLICADO,
    MSG_USUARIO_DUPLICADO,
    UsuarioDuplicadoError,
)
from ....domain.entities import AccesoUsuario, ModuloGeneral, Usuario
from ....domain.repositories import UsuarioRepository
from ..records import correo_en_uso


class InMemoryUsuarioRepository(UsuarioRepository):
    """
    Repositorio in-memory, thread-safe, para Usuarios.

    Modelo mental:
    - _usuarios es la "tabla" en memoria (id_usuario -> Usuario); dict
      conserva el orden de inserción.
    - _modulos asocia id_usuario -> filas crudas de menú.
    """

    def __init__(
        self,
        usuarios: Iterable[Usuario] | None = None,
        modulos: Dict[str, List[ModuloGeneral]] | None = None,
    ) -> None:
        self._lock = Lock()
        self._usuarios: Dict[str, Usuario] = {
            u.id_usuario: u.copia() for u in (usuarios or [])
        }
        self._modulos: Dict[str, List[ModuloGeneral]] = {
            k: list(v) for k, v in (modulos or {}).items()
        }

    @staticmethod
    def _now() -> datetime:
        """R: Fuente única de tiempo (UTC) para consistencia en tests."""
        return datetime.now(timezone.utc)

    # =========================================================
    # Lectura
    # =========================================================
    def listar_usuarios(self) -> List[Usuario]:
        with self._lock:
            return [u.copia() for u in self._usuarios.values()]

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        with self._lock:
            usuario = self._usuarios.get(id_usuario)
            return usuario.copia() if usuario else None

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        with self._lock:
            for usuario in self._usuarios.values():
                if usuario.correo_electronico == correo:
                    return AccesoUsuario.desde_usuario(usuario)
        return None

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        with self._lock:
            return list(self._modulos.get(id_usuario, []))

    # =========================================================
    # Escritura
    # =========================================================
    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        nuevo = usuario.copia()
        nuevo.marcar_alta(self._now())
        with self._lock:
            if nuevo.id_usuario in self._usuarios or correo_en_uso(
                self._usuarios.values(), nuevo.correo_electronico
            ):
                raise UsuarioDuplicadoError(MSG_USUARIO_DUPLICADO)
            self._usuarios[nuevo.id_usuario] = nuevo
            return nuevo.copia()

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        with self._lock:
            existente = self._usuarios.get(usuario.id_usuario)
            if existente is None:
                return None
            if correo_en_uso(
                self._usuarios.values(),
                usuario.correo_electronico,
                excepto=usuario.id_usuario,
            ):
                raise UsuarioDuplicadoError(MSG_CORREO_DUPLICADO)
            existente.aplicar_cambios(usuario, self._now())
            return existente.copia()

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        with self._lock:
            existente = self._usuarios.get(id_usuario)
            if existente is None:
                return None
            existente.marcar_baja(self._now())
            return existente.copia()

    # =========================================================
    # Seed (tests / dev)
    # =========================================================
    def asignar_modulos(self, id_usuario: str, modulos: Iterable[ModuloGeneral]) -> None:
        with self._lock:
            self._modulos[id_usuario] = list(modulos)
