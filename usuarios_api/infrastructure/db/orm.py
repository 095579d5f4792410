"""
===============================================================================
CRC CARD — infrastructure/db/orm.py
===============================================================================

Componente:
  Engine + sessionmaker SQLAlchemy (singleton) para el store ORM

Responsabilidades:
  - Normalizar DATABASE_URL al driver psycopg (postgresql+psycopg://).
  - Inicializar, exponer y liberar el engine y la fábrica de sesiones.

Colaboradores:
  - sqlalchemy.create_engine / sessionmaker
  - repositories.orm.usuario.OrmUsuarioRepository

Principios:
  - Una sesión (unidad de trabajo) por llamada al store.
  - expire_on_commit=False: las entidades mapeadas siguen legibles tras commit.
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from ...crosscutting.logger import logger
from .errors import EngineNotInitializedError, PoolAlreadyInitializedError

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker[Session]] = None
_engine_lock = threading.Lock()


def sqlalchemy_url(raw_url: str) -> str:
    if raw_url.startswith("postgresql://"):
        return raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+psycopg://", 1)
    return raw_url


def init_engine(database_url: str, *, pool_size: int = 5) -> sessionmaker[Session]:
    """Crea engine + sessionmaker (una vez por proceso)."""
    global _engine, _session_factory

    with _engine_lock:
        if _engine is not None:
            raise PoolAlreadyInitializedError("El engine ORM ya fue inicializado.")

        logger.info("Inicializando engine ORM", extra={"pool_size": pool_size})
        _engine = create_engine(
            sqlalchemy_url(database_url),
            pool_size=pool_size,
            pool_pre_ping=True,
        )
        _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
        return _session_factory


def get_session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        raise EngineNotInitializedError(
            "Engine ORM no inicializado. Llamar init_engine() primero."
        )
    return _session_factory


def dispose_engine() -> None:
    """Libera el engine (idempotente)."""
    global _engine, _session_factory

    with _engine_lock:
        if _engine is not None:
            logger.info("Cerrando engine ORM")
            try:
                _engine.dispose()
            finally:
                _engine = None
                _session_factory = None
