"""
Name: Bearer Guard Tests

Responsibilities:
  - Verify require_token() is a no-op when disabled
  - Verify 401 envelope for missing/invalid tokens when enabled
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from usuarios_api.api.exception_handlers import register_exception_handlers
from usuarios_api.container import get_token_service
from usuarios_api.identity.auth import _extract_bearer_token, require_token

pytestmark = pytest.mark.unit


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/protegido")
    def protegido(payload=Depends(require_token())):
        return {"sub": payload.id_usuario if payload else None}

    return app


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", None),
        ("Bearer abc", "abc"),
        ("bearer  xyz ", "xyz"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert _extract_bearer_token(header) == expected


def test_guard_disabled_allows_anonymous():
    response = TestClient(_build_app()).get("/protegido")

    assert response.status_code == 200
    assert response.json() == {"sub": None}


def test_guard_enabled_rejects_missing_token(monkeypatch):
    monkeypatch.setenv("USUARIOS_REQUIRE_TOKEN", "true")

    response = TestClient(_build_app()).get("/protegido")

    assert response.status_code == 401
    body = response.json()
    assert body["Estatus"] == "E"
    assert body["Mensaje"] == "No autorizado. Token inválido o ausente."
    assert body["ResponseObject"] is None


def test_guard_enabled_rejects_garbage_token(monkeypatch):
    monkeypatch.setenv("USUARIOS_REQUIRE_TOKEN", "true")

    response = TestClient(_build_app()).get(
        "/protegido", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


def test_guard_enabled_accepts_valid_token(monkeypatch):
    monkeypatch.setenv("USUARIOS_REQUIRE_TOKEN", "true")
    token = get_token_service().emitir_token("u-9", "z@b.com")

    response = TestClient(_build_app()).get(
        "/protegido", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json() == {"sub": "u-9"}
