"""
Name: Usuarios HTTP Endpoint Tests

Responsibilities:
  - Exercise /api/usuario/* end to end (memory backend)
  - Validate envelope shape {Estatus, Mensaje, ResponseObject}
  - Validate status codes for 201/400/404/409/500
  - Validate that production hides persistence causes
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from usuarios_api.api.main import app
from usuarios_api.container import get_listar_usuarios_use_case
from usuarios_api.crosscutting.config import get_settings
from usuarios_api.crosscutting.exceptions import PersistenceError, UsuariosError

pytestmark = pytest.mark.unit

BASE = "/api/usuario"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _alta(client, **body):
    payload = {"Email": "a@b.com", "Nombre": "A"}
    payload.update(body)
    return client.post(f"{BASE}/altaUsuario", json=payload)


def test_alta_usuario_created(client):
    response = _alta(client)

    assert response.status_code == 201
    body = response.json()
    assert body["Estatus"] == "S"
    assert body["Mensaje"] == "Usuario creado correctamente."
    usuario = body["ResponseObject"]
    assert usuario["UsuarioId"]
    assert usuario["Estatus"] is True
    assert usuario["FechaCreacion"] == usuario["FechaActualizacion"]
    assert response.headers["Location"] == (
        f"{BASE}/obtenerUsuario/{usuario['UsuarioId']}"
    )
    assert response.headers["X-Request-Id"]


def test_alta_usuario_validation_errors(client):
    response = _alta(client, Email="not-an-email", Nombre="")

    assert response.status_code == 400
    body = response.json()
    assert body["Estatus"] == "E"
    assert body["Mensaje"] == (
        "El formato del email no es válido., El nombre es obligatorio."
    )
    assert body["ResponseObject"] == [
        "El formato del email no es válido.",
        "El nombre es obligatorio.",
    ]


def test_malformed_body_is_bad_request(client):
    response = client.post(f"{BASE}/altaUsuario", json={"Paises": "no-es-lista"})

    assert response.status_code == 400
    body = response.json()
    assert body["Estatus"] == "E"
    assert body["Mensaje"] == "Datos inválidos."
    assert body["ResponseObject"]


def test_get_and_list_after_create(client):
    creado = _alta(
        client,
        UsuarioId="u-1",
        Paises=[{"PaisId": "AR", "Estado": True}],
        Roles=[{"RolId": "ADMIN", "Estado": True}],
        NombreSuperior="Jefa",
    ).json()["ResponseObject"]

    uno = client.get(f"{BASE}/obtenerUsuario/u-1")
    todos = client.get(f"{BASE}/obtenerUsuarios")

    assert uno.status_code == 200
    assert uno.json()["Mensaje"] == "Usuario encontrado."
    assert uno.json()["ResponseObject"] == creado
    assert uno.json()["ResponseObject"]["Paises"] == [{"PaisId": "AR", "Estado": True}]
    assert todos.status_code == 200
    assert todos.json()["Mensaje"] == "Usuarios encontrados."
    assert [u["UsuarioId"] for u in todos.json()["ResponseObject"]] == ["u-1"]


def test_get_missing_is_warning_404(client):
    response = client.get(f"{BASE}/obtenerUsuario/nope")

    assert response.status_code == 404
    assert response.json() == {
        "Estatus": "W",
        "Mensaje": "No se ha encontrado el usuario.",
        "ResponseObject": None,
    }


def test_list_empty_is_warning_404(client):
    response = client.get(f"{BASE}/obtenerUsuarios")

    assert response.status_code == 404
    assert response.json()["Estatus"] == "W"
    assert response.json()["Mensaje"] == "No se encontraron usuarios."


def test_patch_updates_user(client):
    _alta(client, UsuarioId="u-1")

    response = client.patch(
        f"{BASE}/actualizarUsuario/u-1",
        json={"UsuarioId": "u-1", "Email": "nuevo@b.com", "Nombre": "Nuevo"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["Mensaje"] == "Usuario actualizado correctamente."
    assert body["ResponseObject"]["Email"] == "nuevo@b.com"


def test_patch_id_mismatch_is_bad_request(client):
    response = client.patch(
        f"{BASE}/actualizarUsuario/u-1",
        json={"UsuarioId": "u-2", "Email": "a@b.com", "Nombre": "A"},
    )

    assert response.status_code == 400
    assert response.json()["Mensaje"] == "El ID del usuario no coincide con el de la URL."


def test_patch_missing_is_not_found(client):
    response = client.patch(
        f"{BASE}/actualizarUsuario/u-9",
        json={"UsuarioId": "u-9", "Email": "a@b.com", "Nombre": "A"},
    )

    assert response.status_code == 404
    assert response.json()["Estatus"] == "W"


def test_delete_is_soft_and_idempotent(client):
    _alta(client, UsuarioId="u-1")

    primero = client.delete(f"{BASE}/eliminarUsuario/u-1")
    segundo = client.delete(f"{BASE}/eliminarUsuario/u-1")

    assert primero.status_code == 200
    assert primero.json()["Mensaje"] == "Usuario eliminado correctamente."
    assert primero.json()["ResponseObject"]["Estatus"] is False
    assert segundo.status_code == 200
    assert client.get(f"{BASE}/obtenerUsuario/u-1").status_code == 200


def test_delete_missing_is_not_found(client):
    response = client.delete(f"{BASE}/eliminarUsuario/nope")

    assert response.status_code == 404
    assert response.json()["Mensaje"] == "No se ha encontrado el registro."


def test_alta_duplicate_is_conflict(client):
    _alta(client, UsuarioId="u-1")

    response = _alta(client, UsuarioId="u-1", Email="otro@b.com")

    assert response.status_code == 409
    assert response.json() == {
        "Estatus": "E",
        "Mensaje": "El Usuario ya se encuentra registrado.",
        "ResponseObject": None,
    }
    todos = client.get(f"{BASE}/obtenerUsuarios").json()["ResponseObject"]
    assert [(u["UsuarioId"], u["Email"]) for u in todos] == [("u-1", "a@b.com")]


def test_alta_same_email_is_conflict(client):
    _alta(client, UsuarioId="u-1")

    response = _alta(client, UsuarioId="u-2")

    assert response.status_code == 409
    assert client.get(f"{BASE}/obtenerUsuario/u-2").status_code == 404


def test_patch_to_taken_email_is_conflict(client):
    _alta(client, UsuarioId="u-1")
    _alta(client, UsuarioId="u-2", Email="b@b.com")

    response = client.patch(
        f"{BASE}/actualizarUsuario/u-2",
        json={"UsuarioId": "u-2", "Email": "a@b.com", "Nombre": "B"},
    )

    assert response.status_code == 409
    assert response.json()["Mensaje"] == "El correo ya pertenece a otro usuario."
    stored = client.get(f"{BASE}/obtenerUsuario/u-2").json()["ResponseObject"]
    assert stored["Email"] == "b@b.com"


def test_persistence_error_is_500_envelope(client):
    failing = Mock()
    failing.execute.side_effect = PersistenceError(
        "Error al obtener los usuarios: disco lleno"
    )
    app.dependency_overrides[get_listar_usuarios_use_case] = lambda: failing

    response = client.get(f"{BASE}/obtenerUsuarios")

    assert response.status_code == 500
    assert response.json()["Estatus"] == "E"
    assert response.json()["Mensaje"] == "Error al obtener los usuarios: disco lleno"


def test_production_hides_persistence_cause(client, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    get_settings.cache_clear()
    failing = Mock()
    failing.execute.side_effect = PersistenceError(
        "Error al obtener los usuarios: /var/data/usuarios.json disco lleno",
        operacion="obtener los usuarios",
    )
    app.dependency_overrides[get_listar_usuarios_use_case] = lambda: failing

    response = client.get(f"{BASE}/obtenerUsuarios")

    assert response.status_code == 500
    assert response.json() == {
        "Estatus": "E",
        "Mensaje": "Error al obtener los usuarios.",
        "ResponseObject": None,
    }


def test_production_hides_untyped_service_error(client, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    get_settings.cache_clear()
    failing = Mock()
    failing.execute.side_effect = UsuariosError("pool agotado en 10.0.0.5:5432")
    app.dependency_overrides[get_listar_usuarios_use_case] = lambda: failing

    response = client.get(f"{BASE}/obtenerUsuarios")

    assert response.status_code == 500
    assert response.json()["Mensaje"] == "Error interno."


def test_guard_enabled_requires_token(client, monkeypatch):
    monkeypatch.setenv("USUARIOS_REQUIRE_TOKEN", "true")
    get_settings.cache_clear()

    response = client.get(f"{BASE}/obtenerUsuarios")

    assert response.status_code == 401
    assert response.json()["Mensaje"] == "No autorizado. Token inválido o ausente."


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["ok"] is True
