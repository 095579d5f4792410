"""Unit tests for the response envelope and error factories."""

import pytest

from usuarios_api.crosscutting.error_responses import (
    ErrorCode,
    Estatus,
    Respuesta,
    conflict,
    exito,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)

pytestmark = pytest.mark.unit


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error(self):
        exc = validation_error("Email inválido.", ["Email inválido."])
        assert exc.status_code == 400
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.estatus == Estatus.ERROR
        assert exc.errores == ["Email inválido."]

    def test_not_found_is_warning(self):
        exc = not_found("No se ha encontrado el usuario.")
        assert exc.status_code == 404
        assert exc.code == ErrorCode.NOT_FOUND
        assert exc.estatus == Estatus.ADVERTENCIA

    def test_unauthorized(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.detail == "No autorizado. Token inválido o ausente."

    def test_conflict_is_error(self):
        exc = conflict("El Usuario ya se encuentra registrado.")
        assert exc.status_code == 409
        assert exc.code == ErrorCode.CONFLICT
        assert exc.estatus == Estatus.ERROR

    def test_internal_error(self):
        exc = internal_error()
        assert exc.status_code == 500
        assert exc.code == ErrorCode.INTERNAL_ERROR


class TestRespuesta:
    """Test envelope serialization."""

    def test_dump_uses_pascal_case_aliases(self):
        data = exito("ok", {"a": 1}).model_dump(by_alias=True, mode="json")
        assert data == {"Estatus": "S", "Mensaje": "ok", "ResponseObject": {"a": 1}}

    def test_accepts_aliases_on_input(self):
        respuesta = Respuesta[int].model_validate(
            {"Estatus": "S", "Mensaje": "ok", "ResponseObject": 3}
        )
        assert respuesta.response_object == 3
