"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, memory backend, JWT key)
  - Provide reusable domain fixtures
  - Reset cached singletons between tests

Collaborators:
  - pytest: Test framework
  - usuarios_api.crosscutting.config: Settings singleton
  - usuarios_api.container: lru_cache composition root

Notes:
  - Environment variables are set BEFORE importing usuarios_api so the
    module-level logger can read Settings
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-123")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_JSON", "false")

import pytest  # noqa: E402

from usuarios_api.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from usuarios_api.container import reset_container  # noqa: E402
from usuarios_api.context import RequestContext  # noqa: E402
from usuarios_api.domain.entities import Pais, Rol, Usuario  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Each test starts with fresh settings and container singletons."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext.nuevo(method="TEST", endpoint="/tests")


@pytest.fixture
def sample_usuario() -> Usuario:
    """R: Usuario completo con superior, países y roles."""
    return Usuario(
        id_usuario="u-001",
        correo_electronico="ana@empresa.com",
        nombre_completo="Ana Pérez",
        id_superior="u-000",
        nombre_superior="Jefa",
        correo_electronico_superior="jefa@empresa.com",
        paises=[Pais("MX", False), Pais("AR", True)],
        roles=[Rol("ADMIN", True), Rol("LECTOR", True)],
    )
