"""
===============================================================================
MÓDULO: Envoltura de respuesta uniforme {Estatus, Mensaje, ResponseObject}
===============================================================================

Objetivo
--------
Uniformar TODAS las respuestas HTTP (éxito y error) para que:
- El frontend lea siempre la misma forma
- Estatus distinga éxito ("S"), advertencia ("W") y error ("E")
- El backend pueda correlacionar por request_id / error_id en logs

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  Respuesta + AppHTTPException + handlers

Responsabilidades:
  - Definir Estatus y el catálogo de códigos (ErrorCode)
  - Construir la envoltura (Respuesta) con alias PascalCase
  - Proveer factories de errores frecuentes
  - Proveer el handler FastAPI que serializa la envoltura

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
  - interfaces/api/http/routers/* (respuestas de éxito)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Estatus(str, Enum):
    EXITO = "S"
    ADVERTENCIA = "W"
    ERROR = "E"


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class Respuesta(BaseModel, Generic[T]):
    """
    Envoltura uniforme de la API.

    - Estatus: "S" éxito, "W" advertencia (p.ej. no encontrado), "E" error
    - Mensaje: texto para mostrar
    - ResponseObject: payload o null
    """

    model_config = ConfigDict(populate_by_name=True)

    estatus: Estatus = Field(alias="Estatus")
    mensaje: str = Field(alias="Mensaje")
    response_object: T | None = Field(default=None, alias="ResponseObject")


def exito(mensaje: str, objeto: Any = None) -> Respuesta:
    return Respuesta(estatus=Estatus.EXITO, mensaje=mensaje, response_object=objeto)


_OPENAPI_ENVELOPE = {"model": Respuesta[Any]}

OPENAPI_ERROR_RESPONSES = {
    "400": {"description": "Datos inválidos (Estatus E)", **_OPENAPI_ENVELOPE},
    "401": {"description": "No autorizado (Estatus E)", **_OPENAPI_ENVELOPE},
    "404": {"description": "No encontrado (Estatus W)", **_OPENAPI_ENVELOPE},
    "409": {"description": "Usuario ya registrado (Estatus E)", **_OPENAPI_ENVELOPE},
    "500": {"description": "Error interno (Estatus E)", **_OPENAPI_ENVELOPE},
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable (para logs) y el Estatus de la envoltura
      - Transportar la lista de mensajes de validación (errores[])

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        *,
        estatus: Estatus = Estatus.ERROR,
        errores: list[str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.estatus = estatus
        self.errores = errores


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(detail: str, errores: list[str] | None = None) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errores=errores)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, detail, estatus=Estatus.ADVERTENCIA
    )


def unauthorized(
    detail: str = "No autorizado. Token inválido o ausente.",
) -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Propaga X-Request-Id (si existe) y headers opcionales (WWW-Authenticate).
    """
    body = Respuesta(
        estatus=exc.estatus,
        mensaje=str(exc.detail),
        response_object=exc.errores or None,
    )
    headers = dict(getattr(exc, "headers", None) or {})
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    if request_id:
        headers["X-Request-Id"] = request_id

    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(by_alias=True, mode="json"),
        headers=headers or None,
    )
