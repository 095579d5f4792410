"""
===============================================================================
TARJETA CRC — application/usuario_service.py (Directorio de usuarios)
===============================================================================

Responsabilidades:
  - Exponer una operación por método del store, desacoplando a los casos de
    uso del backend elegido (JSON / SQL / ORM / memoria).
  - Aplanar el menú del usuario (ModuloGeneral -> Modulo).

Colaboradores:
  - domain.repositories.UsuarioRepository
  - application.modulos.aplanar_modulos

Reglas:
  - Pass-through: sin reglas de negocio extra, sin reintentos.
  - Propaga lo que el store levante (PersistenceError).
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ..domain.entities import AccesoUsuario, Modulo, ModuloGeneral, Usuario
from ..domain.repositories import UsuarioRepository
from .modulos import aplanar_modulos


class UsuarioService:
    def __init__(self, repository: UsuarioRepository) -> None:
        self._repository = repository

    def listar_usuarios(self) -> List[Usuario]:
        return self._repository.listar_usuarios()

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        return self._repository.obtener_usuario_por_id(id_usuario)

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        return self._repository.obtener_usuario_por_email(correo)

    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        return self._repository.registrar_usuario(usuario)

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        return self._repository.actualizar_usuario(usuario)

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        return self._repository.eliminar_usuario(id_usuario)

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        return self._repository.obtener_modulos_por_usuario(id_usuario)

    def obtener_modulos_aplanados(self, id_usuario: str) -> List[Modulo]:
        """Menú del usuario listo para la UI ([] si no tiene módulos)."""
        return aplanar_modulos(self._repository.obtener_modulos_por_usuario(id_usuario))
