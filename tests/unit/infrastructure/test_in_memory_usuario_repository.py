"""
Name: In-Memory Usuario Repository Tests

Responsibilities:
  - Verify store contract on the dict-backed implementation
  - Verify defensive copies
  - Verify duplicates are rejected instead of replacing records
"""

from dataclasses import replace

import pytest

from usuarios_api.crosscutting.exceptions import UsuarioDuplicadoError
from usuarios_api.domain.entities import Usuario
from usuarios_api.infrastructure.repositories import InMemoryUsuarioRepository

pytestmark = pytest.mark.unit


def test_registrar_sets_timestamps_and_active(sample_usuario):
    repo = InMemoryUsuarioRepository()
    sample_usuario.estado = False

    creado = repo.registrar_usuario(sample_usuario)

    assert creado.estado is True
    assert creado.fecha_creacion is not None
    assert creado.fecha_creacion == creado.fecha_actualizacion


def test_returned_records_are_copies(sample_usuario):
    repo = InMemoryUsuarioRepository([sample_usuario])

    leido = repo.obtener_usuario_por_id("u-001")
    leido.nombre_completo = "Mutado"
    leido.paises.clear()

    fresco = repo.obtener_usuario_por_id("u-001")
    assert fresco.nombre_completo == "Ana Pérez"
    assert len(fresco.paises) == 2


def test_actualizar_missing_returns_none():
    repo = InMemoryUsuarioRepository()

    assert repo.actualizar_usuario(Usuario("x", "x@b.com", "X")) is None
    assert repo.listar_usuarios() == []


def test_email_lookup_returns_access_profile(sample_usuario):
    repo = InMemoryUsuarioRepository([sample_usuario])

    perfil = repo.obtener_usuario_por_email("ana@empresa.com")

    assert perfil.id_usuario == "u-001"
    assert perfil.pais == "AR"
    assert perfil.rol == "ADMIN"
    assert repo.obtener_usuario_por_email("otro@empresa.com") is None


def test_modules_default_to_empty():
    assert InMemoryUsuarioRepository().obtener_modulos_por_usuario("u-001") == []


def test_registrar_existing_id_keeps_original_record(sample_usuario):
    repo = InMemoryUsuarioRepository()
    creado = repo.registrar_usuario(sample_usuario)
    repo.eliminar_usuario("u-001")

    with pytest.raises(UsuarioDuplicadoError):
        repo.registrar_usuario(
            replace(sample_usuario, correo_electronico="c@d.com", nombre_completo="Segundo")
        )

    leido = repo.obtener_usuario_por_id("u-001")
    assert leido.nombre_completo == "Ana Pérez"
    assert leido.estado is False
    assert leido.fecha_creacion == creado.fecha_creacion


def test_registrar_existing_email_rejected(sample_usuario):
    repo = InMemoryUsuarioRepository([sample_usuario])

    with pytest.raises(UsuarioDuplicadoError):
        repo.registrar_usuario(replace(sample_usuario, id_usuario="u-002"))

    assert len(repo.listar_usuarios()) == 1


def test_actualizar_to_taken_email_rejected(sample_usuario):
    repo = InMemoryUsuarioRepository([sample_usuario, Usuario("u-002", "b@b.com", "B")])

    with pytest.raises(UsuarioDuplicadoError):
        repo.actualizar_usuario(Usuario("u-002", "ana@empresa.com", "B"))

    assert repo.obtener_usuario_por_id("u-002").correo_electronico == "b@b.com"
