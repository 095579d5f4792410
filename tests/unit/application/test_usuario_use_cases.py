"""
Name: Usuario Use Case Tests

Responsibilities:
  - Verify CRUD use cases against the in-memory store
  - Verify typed errors (VALIDATION_ERROR, NOT_FOUND, ID_MISMATCH, CONFLICT)
"""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from usuarios_api.application.usecases import (
    ActualizarUsuarioUseCase,
    AltaUsuarioUseCase,
    EliminarUsuarioUseCase,
    ListarUsuariosUseCase,
    ObtenerUsuarioUseCase,
    UsuarioErrorCode,
)
from usuarios_api.application.usuario_service import UsuarioService
from usuarios_api.crosscutting.exceptions import PersistenceError
from usuarios_api.domain.entities import Pais, Usuario
from usuarios_api.infrastructure.repositories import InMemoryUsuarioRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def service() -> UsuarioService:
    return UsuarioService(InMemoryUsuarioRepository())


def test_alta_assigns_id_and_forces_active(service, ctx):
    nuevo = Usuario(
        id_usuario="",
        correo_electronico="a@b.com",
        nombre_completo="A",
        estado=False,
    )

    result = AltaUsuarioUseCase(service).execute(nuevo, ctx=ctx)

    assert result.error is None
    assert result.usuario.id_usuario
    assert result.usuario.estado is True
    assert result.usuario.fecha_creacion == result.usuario.fecha_actualizacion


def test_alta_then_get_returns_same_fields(service, ctx, sample_usuario):
    AltaUsuarioUseCase(service).execute(sample_usuario, ctx=ctx)

    result = ObtenerUsuarioUseCase(service).execute("u-001", ctx=ctx)

    assert result.error is None
    stored = result.usuario
    assert stored.correo_electronico == sample_usuario.correo_electronico
    assert stored.nombre_completo == sample_usuario.nombre_completo
    assert stored.nombre_superior == "Jefa"
    assert stored.paises == sample_usuario.paises
    assert stored.roles == sample_usuario.roles
    assert stored.fecha_creacion is not None
    assert stored.fecha_actualizacion == stored.fecha_creacion


def test_alta_validation_error_does_not_touch_store(ctx):
    repo = Mock()
    nuevo = Usuario(id_usuario="", correo_electronico="not-an-email", nombre_completo="")

    result = AltaUsuarioUseCase(UsuarioService(repo)).execute(nuevo, ctx=ctx)

    assert result.usuario is None
    assert result.error.code == UsuarioErrorCode.VALIDATION_ERROR
    assert len(result.error.errores) == 2
    assert result.error.message == ", ".join(result.error.errores)
    repo.registrar_usuario.assert_not_called()


def test_alta_propagates_persistence_error(ctx):
    repo = Mock()
    repo.registrar_usuario.side_effect = PersistenceError("Error al registrar el usuario")
    nuevo = Usuario(id_usuario="x", correo_electronico="a@b.com", nombre_completo="A")

    with pytest.raises(PersistenceError):
        AltaUsuarioUseCase(UsuarioService(repo)).execute(nuevo, ctx=ctx)


def test_listar_empty_is_not_found(service, ctx):
    result = ListarUsuariosUseCase(service).execute(ctx=ctx)

    assert result.usuarios == []
    assert result.error.code == UsuarioErrorCode.NOT_FOUND
    assert result.error.message == "No se encontraron usuarios."


def test_listar_returns_all(service, ctx, sample_usuario):
    service.registrar_usuario(sample_usuario)
    service.registrar_usuario(replace(sample_usuario, id_usuario="u-002", correo_electronico="b@empresa.com"))

    result = ListarUsuariosUseCase(service).execute(ctx=ctx)

    assert result.error is None
    assert [u.id_usuario for u in result.usuarios] == ["u-001", "u-002"]


def test_obtener_missing_is_not_found(service, ctx):
    result = ObtenerUsuarioUseCase(service).execute("nope", ctx=ctx)

    assert result.error.code == UsuarioErrorCode.NOT_FOUND
    assert result.error.message == "No se ha encontrado el usuario."


def test_actualizar_id_mismatch(service, ctx, sample_usuario):
    result = ActualizarUsuarioUseCase(service).execute("otro", sample_usuario, ctx=ctx)

    assert result.error.code == UsuarioErrorCode.ID_MISMATCH
    assert result.error.message == "El ID del usuario no coincide con el de la URL."


def test_actualizar_missing_is_not_found_without_write(ctx, sample_usuario):
    repo = InMemoryUsuarioRepository()

    result = ActualizarUsuarioUseCase(UsuarioService(repo)).execute(
        "u-001", sample_usuario, ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.NOT_FOUND
    assert repo.listar_usuarios() == []


def test_actualizar_overwrites_mutable_fields(service, ctx, sample_usuario):
    creado = service.registrar_usuario(sample_usuario)
    cambios = replace(
        sample_usuario,
        nombre_completo="Ana María",
        paises=[Pais("CL", True)],
        fecha_creacion=None,
    )

    result = ActualizarUsuarioUseCase(service).execute("u-001", cambios, ctx=ctx)

    assert result.error is None
    assert result.usuario.nombre_completo == "Ana María"
    assert result.usuario.paises == [Pais("CL", True)]
    assert result.usuario.fecha_creacion == creado.fecha_creacion
    assert result.usuario.fecha_actualizacion >= creado.fecha_actualizacion


def test_eliminar_is_idempotent(service, ctx, sample_usuario):
    service.registrar_usuario(sample_usuario)
    use_case = EliminarUsuarioUseCase(service)

    primero = use_case.execute("u-001", ctx=ctx)
    segundo = use_case.execute("u-001", ctx=ctx)

    assert primero.usuario.estado is False
    assert segundo.error is None
    assert segundo.usuario.estado is False
    assert service.obtener_usuario_por_id("u-001") is not None


def test_eliminar_missing_is_not_found(service, ctx):
    result = EliminarUsuarioUseCase(service).execute("nope", ctx=ctx)

    assert result.error.code == UsuarioErrorCode.NOT_FOUND
    assert result.error.message == "No se ha encontrado el registro."


def test_alta_duplicate_id_is_conflict(service, ctx, sample_usuario):
    AltaUsuarioUseCase(service).execute(sample_usuario, ctx=ctx)

    result = AltaUsuarioUseCase(service).execute(
        replace(sample_usuario, correo_electronico="otra@empresa.com"), ctx=ctx
    )

    assert result.usuario is None
    assert result.error.code == UsuarioErrorCode.CONFLICT
    assert result.error.message == "El Usuario ya se encuentra registrado."


def test_actualizar_to_taken_email_is_conflict(service, ctx, sample_usuario):
    service.registrar_usuario(sample_usuario)
    service.registrar_usuario(Usuario("u-002", "b@empresa.com", "B"))

    result = ActualizarUsuarioUseCase(service).execute(
        "u-002", Usuario("u-002", "ana@empresa.com", "B"), ctx=ctx
    )

    assert result.error.code == UsuarioErrorCode.CONFLICT
    assert service.obtener_usuario_por_id("u-002").correo_electronico == "b@empresa.com"
