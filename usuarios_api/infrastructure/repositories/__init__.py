"""
============================================================
TARJETA CRC
============================================================
Class: usuarios_api.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer las implementaciones concretas de UsuarioRepository en un único
  punto de importación.
- Mantener una API estable para el composition root (container).

Collaborators:
- JSON file (archivo local), Postgres (funciones almacenadas),
  ORM (SQLAlchemy), InMemory (testing)
============================================================
"""

# ---------------------------
# In-memory / archivo local
# Tests unitarios, desarrollo local y despliegues sin base de datos.
# ---------------------------
from .in_memory.usuario import InMemoryUsuarioRepository
from .json_file.usuario import JsonFileUsuarioRepository

# ---------------------------
# Base de datos
# Funciones almacenadas (psycopg) u ORM (SQLAlchemy), elegidos por Settings.
# ---------------------------
from .orm.usuario import OrmUsuarioRepository
from .postgres.usuario import PostgresUsuarioRepository

__all__ = [
    "InMemoryUsuarioRepository",
    "JsonFileUsuarioRepository",
    "OrmUsuarioRepository",
    "PostgresUsuarioRepository",
]
