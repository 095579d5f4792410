"""
Name: Login HTTP Endpoint Tests

Responsibilities:
  - Exercise POST /api/login/authenticate end to end (memory backend)
  - Validate {Token, Perfil, Modulos} payload and 400/401 envelopes
"""

import pytest
from fastapi.testclient import TestClient

from usuarios_api.api.main import app
from usuarios_api.container import get_token_service, get_usuario_repository
from usuarios_api.crosscutting.config import get_settings
from usuarios_api.domain.entities import ModuloGeneral

pytestmark = pytest.mark.unit

URL = "/api/login/authenticate"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registrado(sample_usuario):
    repo = get_usuario_repository()
    repo.registrar_usuario(sample_usuario)
    repo.asignar_modulos(
        sample_usuario.id_usuario,
        [
            ModuloGeneral(id_menu=1, menu="Inicio", icono="home", ruta="/"),
            ModuloGeneral(id_menu=2, menu="Reportes", icono="chart", ruta="/rep"),
            ModuloGeneral(id_menu=10, menu="Ventas", ruta="/rep/ventas", id_menu_catalogo="2"),
        ],
    )
    return sample_usuario


def test_login_success(client, registrado):
    response = client.post(URL, json={"Email": "ana@empresa.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["Estatus"] == "S"
    assert body["Mensaje"] == "Inicio de sesión exitoso."

    payload = body["ResponseObject"]
    assert payload["Perfil"] == {
        "IdUsuario": "u-001",
        "NombreCompleto": "Ana Pérez",
        "CorreoElectronico": "ana@empresa.com",
        "Pais": "AR",
        "Rol": "ADMIN",
        "Estado": True,
    }
    assert payload["Modulos"] == [
        {"Label": "Inicio", "Icono": "home", "Ruta": "/", "Submodulos": None},
        {
            "Label": "Reportes",
            "Icono": "chart",
            "Ruta": "/rep",
            "Submodulos": [
                {"Label": "Ventas", "Icono": "", "Ruta": "/rep/ventas", "Submodulos": None}
            ],
        },
    ]

    claims = get_token_service().decodificar_token(payload["Token"])
    assert claims.id_usuario == "u-001"
    assert claims.email == "ana@empresa.com"


def test_login_unknown_user_is_unauthorized(client):
    response = client.post(URL, json={"Email": "nadie@empresa.com"})

    assert response.status_code == 401
    assert response.json() == {
        "Estatus": "E",
        "Mensaje": "Usuario no encontrado o inactivo.",
        "ResponseObject": None,
    }


def test_login_inactive_user_is_unauthorized(client, registrado):
    get_usuario_repository().eliminar_usuario("u-001")

    response = client.post(URL, json={"Email": "ana@empresa.com"})

    assert response.status_code == 401


def test_login_invalid_email_is_bad_request(client):
    response = client.post(URL, json={"Email": "not-an-email"})

    assert response.status_code == 400
    assert response.json()["ResponseObject"] == ["El formato del email no es válido."]


def test_login_token_passes_guard(client, registrado, monkeypatch):
    token = client.post(URL, json={"Email": "ana@empresa.com"}).json()[
        "ResponseObject"
    ]["Token"]
    monkeypatch.setenv("USUARIOS_REQUIRE_TOKEN", "true")
    get_settings.cache_clear()

    response = client.get(
        "/api/usuario/obtenerUsuario/u-001",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
