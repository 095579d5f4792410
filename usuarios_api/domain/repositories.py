"""
CRC — domain/repositories.py

Name
- Domain Repository Interface (Protocol)

Responsibilities
- Define the persistence contract for Usuario records (port).
- Keep application/domain independent from the storage backend
  (JSON file, stored functions, ORM, in-memory).

Collaborators
- domain.entities: Usuario, AccesoUsuario, ModuloGeneral
- infrastructure.repositories: json_file, postgres, orm, in_memory

Constraints
- Pure interface only: no side effects, no infrastructure imports, no SQL.
- "Not found" is None, never an exception.
- Backend failures surface as crosscutting.exceptions.PersistenceError.

Notes
- typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists (never None) for predictable iteration.
"""

from typing import List, Optional, Protocol

from .entities import AccesoUsuario, ModuloGeneral, Usuario


class UsuarioRepository(Protocol):
    """
    R: Interface for Usuario persistence.

    Implementations must provide:
      - Full listing and exact lookups (id, email projection)
      - Alta with timestamps + forced active status
      - Update / soft-delete returning None when the id does not exist
      - Raw menu rows per user
    """

    def listar_usuarios(self) -> List[Usuario]:
        """R: All records in backend order; [] if none."""
        ...

    def obtener_usuario_por_id(self, id_usuario: str) -> Optional[Usuario]:
        """R: Exact-match lookup; None when absent."""
        ...

    def obtener_usuario_por_email(self, correo: str) -> Optional[AccesoUsuario]:
        """R: Login projection; None when absent."""
        ...

    def registrar_usuario(self, usuario: Usuario) -> Usuario:
        """R: Persist a new user (fecha_creacion = fecha_actualizacion, estado=True)."""
        ...

    def actualizar_usuario(self, usuario: Usuario) -> Optional[Usuario]:
        """R: Overwrite mutable fields; None (and no write) when absent."""
        ...

    def eliminar_usuario(self, id_usuario: str) -> Optional[Usuario]:
        """R: Soft delete (estado=False); None when absent."""
        ...

    def obtener_modulos_por_usuario(self, id_usuario: str) -> List[ModuloGeneral]:
        """R: Raw two-level menu rows the user may access; [] if none."""
        ...
