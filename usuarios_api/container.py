"""
===============================================================================
TARJETA CRC — usuarios_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (store, servicio de directorio, emisor de tokens).
  - Elegir el backend de almacenamiento UNA vez por proceso (Settings).
  - Exponer factories para FastAPI (Depends).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.UsuarioRepository (puerto)
  - infrastructure.repositories.* (implementaciones)
  - identity.token_service.TokenService
  - application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    ActualizarUsuarioUseCase,
    AltaUsuarioUseCase,
    AutenticarUsuarioUseCase,
    EliminarUsuarioUseCase,
    ListarUsuariosUseCase,
    ObtenerUsuarioUseCase,
)
from .application.usuario_service import UsuarioService
from .crosscutting.config import get_settings
from .domain.repositories import UsuarioRepository
from .identity.token_service import TokenService, get_token_settings
from .infrastructure.repositories import (
    InMemoryUsuarioRepository,
    JsonFileUsuarioRepository,
    OrmUsuarioRepository,
    PostgresUsuarioRepository,
)

# =============================================================================
# Repositorio / servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_usuario_repository() -> UsuarioRepository:
    """
    Store de usuarios según STORAGE_BACKEND.

    - json: archivo usuarios.json en JSON_DATA_DIR
    - sql: funciones PostgreSQL (pool psycopg inicializado en lifespan)
    - orm: SQLAlchemy (engine inicializado en lifespan)
    - memory: dict en memoria (tests / desarrollo)
    """
    settings = get_settings()
    backend = settings.storage_backend
    if backend == "sql":
        return PostgresUsuarioRepository()
    if backend == "orm":
        return OrmUsuarioRepository()
    if backend == "memory":
        return InMemoryUsuarioRepository()
    return JsonFileUsuarioRepository(settings.json_data_dir)


@lru_cache(maxsize=1)
def get_usuario_service() -> UsuarioService:
    return UsuarioService(get_usuario_repository())


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Emisor de JWT (falla si falta JWT_SECRET_KEY)."""
    return TokenService(get_token_settings())


# =============================================================================
# Casos de uso (factories para Depends)
# =============================================================================


def get_listar_usuarios_use_case() -> ListarUsuariosUseCase:
    return ListarUsuariosUseCase(get_usuario_service())


def get_obtener_usuario_use_case() -> ObtenerUsuarioUseCase:
    return ObtenerUsuarioUseCase(get_usuario_service())


def get_alta_usuario_use_case() -> AltaUsuarioUseCase:
    return AltaUsuarioUseCase(get_usuario_service())


def get_actualizar_usuario_use_case() -> ActualizarUsuarioUseCase:
    return ActualizarUsuarioUseCase(get_usuario_service())


def get_eliminar_usuario_use_case() -> EliminarUsuarioUseCase:
    return EliminarUsuarioUseCase(get_usuario_service())


def get_autenticar_usuario_use_case() -> AutenticarUsuarioUseCase:
    return AutenticarUsuarioUseCase(get_usuario_service(), get_token_service())


def reset_container() -> None:
    """Limpia singletons (tests / cambio de settings)."""
    get_usuario_repository.cache_clear()
    get_usuario_service.cache_clear()
    get_token_service.cache_clear()
