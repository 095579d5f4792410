"""
Name: Login Use Case Tests

Responsibilities:
  - Verify validate -> lookup -> token -> modules sequence
"""

import pytest

from usuarios_api.application.usecases import (
    AutenticarUsuarioUseCase,
    UsuarioErrorCode,
)
from usuarios_api.application.usuario_service import UsuarioService
from usuarios_api.domain.entities import ModuloGeneral
from usuarios_api.infrastructure.repositories import InMemoryUsuarioRepository

pytestmark = pytest.mark.unit


class _FakeTokens:
    def __init__(self, token: str = "jwt-token"):
        self.token = token
        self.calls = []

    def emitir_token(self, id_usuario: str, email: str) -> str:
        self.calls.append((id_usuario, email))
        return self.token


@pytest.fixture
def repo(sample_usuario) -> InMemoryUsuarioRepository:
    repo = InMemoryUsuarioRepository()
    repo.registrar_usuario(sample_usuario)
    return repo


def test_login_success_with_modules(repo, ctx):
    repo.asignar_modulos(
        "u-001",
        [
            ModuloGeneral(id_menu=1, menu="Inicio"),
            ModuloGeneral(id_menu=2, menu="Catálogos", id_menu_catalogo="1"),
        ],
    )
    tokens = _FakeTokens()

    result = AutenticarUsuarioUseCase(UsuarioService(repo), tokens).execute(
        "ana@empresa.com", ctx=ctx
    )

    assert result.error is None
    assert result.token == "jwt-token"
    assert tokens.calls == [("u-001", "ana@empresa.com")]
    assert result.perfil.pais == "AR"
    assert result.perfil.rol == "ADMIN"
    assert result.modulos[0].label == "Inicio"
    assert result.modulos[0].submodulos[0].label == "Catálogos"


def test_login_without_modules_returns_none(repo, ctx):
    result = AutenticarUsuarioUseCase(UsuarioService(repo), _FakeTokens()).execute(
        "ana@empresa.com", ctx=ctx
    )

    assert result.error is None
    assert result.modulos is None


def test_login_unknown_email_is_unauthorized(repo, ctx):
    tokens = _FakeTokens()

    result = AutenticarUsuarioUseCase(UsuarioService(repo), tokens).execute(
        "nadie@empresa.com", ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.UNAUTHORIZED
    assert result.error.message == "Usuario no encontrado o inactivo."
    assert tokens.calls == []


def test_login_inactive_user_is_unauthorized(repo, ctx):
    repo.eliminar_usuario("u-001")

    result = AutenticarUsuarioUseCase(UsuarioService(repo), _FakeTokens()).execute(
        "ana@empresa.com", ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.UNAUTHORIZED


def test_login_invalid_email_is_validation_error(repo, ctx):
    result = AutenticarUsuarioUseCase(UsuarioService(repo), _FakeTokens()).execute(
        "not-an-email", ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.VALIDATION_ERROR
    assert len(result.error.errores) == 1


def test_login_empty_token_is_token_error(repo, ctx):
    result = AutenticarUsuarioUseCase(UsuarioService(repo), _FakeTokens("")).execute(
        "ana@empresa.com", ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.TOKEN_ERROR
    assert result.error.message == "Error al generar el token."
