"""
Name: Stored-Function Usuario Repository Tests

Responsibilities:
  - Verify (estatus, mensaje, objeto) envelope policy for reads and writes
  - Verify driver errors are wrapped in PersistenceError
  - Offline unit tests (mocked pool, no real DB)
"""

import json
from unittest.mock import MagicMock

import psycopg
import pytest

from usuarios_api.crosscutting.exceptions import (
    PersistenceError,
    UsuarioDuplicadoError,
)
from usuarios_api.domain.entities import Usuario
from usuarios_api.infrastructure.repositories import PostgresUsuarioRepository
from usuarios_api.infrastructure.repositories.postgres.usuario import (
    SP_ELIMINAR_USUARIO,
    SP_INSERTAR_USUARIO,
    SP_OBTENER_USUARIO,
)

pytestmark = pytest.mark.unit

_RECORD = {
    "IdUsuario": "u-001",
    "CorreoElectronico": "ana@empresa.com",
    "NombreCompleto": "Ana Pérez",
    "Pais": [{"PaisId": "AR", "Estado": True}],
    "Rol": [{"RolId": "ADMIN", "Estado": True}],
    "FechaCreacion": "2024-05-01T10:00:00+00:00",
    "FechaActualizacion": "2024-05-01T10:00:00+00:00",
    "Estado": True,
}


def _repo_returning(row):
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = row
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return PostgresUsuarioRepository(pool=pool), conn


def test_obtener_usuario_maps_payload():
    repo, conn = _repo_returning(("S", "Usuario encontrado.", json.dumps(_RECORD)))

    usuario = repo.obtener_usuario_por_id("u-001")

    assert usuario.id_usuario == "u-001"
    assert usuario.paises[0].pais_id == "AR"
    query, params = conn.execute.call_args.args
    assert SP_OBTENER_USUARIO in query
    assert params == ("u-001",)


def test_read_success_with_null_payload_is_absent():
    repo, _ = _repo_returning(("S", "No se ha encontrado el usuario.", None))

    assert repo.obtener_usuario_por_id("nope") is None


def test_read_requires_success_status():
    repo, _ = _repo_returning(("W", "Sin datos", None))

    with pytest.raises(PersistenceError) as exc_info:
        repo.listar_usuarios()

    assert "obtener los usuarios" in exc_info.value.message
    assert "Sin datos" in exc_info.value.message


def test_write_error_status_raises_with_embedded_message():
    repo, conn = _repo_returning(("E", "value too long for type", None))

    with pytest.raises(PersistenceError) as exc_info:
        repo.registrar_usuario(Usuario("u-001", "ana@empresa.com", "Ana"))

    assert "registrar el usuario" in exc_info.value.message
    assert "value too long" in exc_info.value.message
    assert exc_info.value.mensaje_publico == "Error al registrar el usuario."
    query, params = conn.execute.call_args.args
    assert SP_INSERTAR_USUARIO in query
    assert json.loads(params[0])["IdUsuario"] == "u-001"


def test_insert_unique_violation_is_duplicate():
    repo, _ = _repo_returning(("E", "El Usuario ya se encuentra registrado.", None))

    with pytest.raises(UsuarioDuplicadoError) as exc_info:
        repo.registrar_usuario(Usuario("u-001", "ana@empresa.com", "Ana"))

    assert exc_info.value.message == "El Usuario ya se encuentra registrado."


def test_update_unique_violation_is_duplicate():
    repo, _ = _repo_returning(("E", "El correo ya pertenece a otro usuario.", None))

    with pytest.raises(UsuarioDuplicadoError):
        repo.actualizar_usuario(Usuario("u-001", "otro@empresa.com", "Ana"))


def test_write_warning_with_null_payload_is_absent():
    repo, conn = _repo_returning(("W", "No se ha encontrado el registro.", None))

    assert repo.eliminar_usuario("nope") is None
    assert SP_ELIMINAR_USUARIO in conn.execute.call_args.args[0]


def test_email_lookup_returns_access_profile():
    acceso = {
        "IdUsuario": "u-001",
        "NombreCompleto": "Ana",
        "CorreoElectronico": "ana@empresa.com",
        "Pais": "AR",
        "Rol": "ADMIN",
        "Estado": True,
    }
    repo, _ = _repo_returning(("S", "Usuario encontrado.", json.dumps(acceso)))

    perfil = repo.obtener_usuario_por_email("ana@empresa.com")

    assert perfil.pais == "AR"
    assert perfil.estado is True


def test_modules_are_mapped():
    filas = [
        {"IdMenu": 1, "IdMenuCatalogo": None, "Menu": "Inicio", "Icono": "", "Ruta": "/"},
        {"IdMenu": 2, "IdMenuCatalogo": "1", "Menu": "Sub", "Icono": "", "Ruta": "/s"},
    ]
    repo, _ = _repo_returning(("S", "ok", json.dumps(filas)))

    modulos = repo.obtener_modulos_por_usuario("u-001")

    assert [m.id_menu for m in modulos] == [1, 2]
    assert modulos[0].es_raiz


def test_missing_row_is_error():
    repo, _ = _repo_returning(None)

    with pytest.raises(PersistenceError):
        repo.obtener_usuario_por_id("u-001")


def test_driver_error_is_wrapped():
    pool = MagicMock()
    pool.connection.side_effect = psycopg.OperationalError("conexión rechazada")
    repo = PostgresUsuarioRepository(pool=pool)

    with pytest.raises(PersistenceError) as exc_info:
        repo.listar_usuarios()

    assert "a nivel BD" in exc_info.value.message
    assert isinstance(exc_info.value.original_error, psycopg.OperationalError)


def test_invalid_payload_is_wrapped():
    repo, _ = _repo_returning(("S", "ok", "{not json"))

    with pytest.raises(PersistenceError):
        repo.obtener_usuario_por_id("u-001")
