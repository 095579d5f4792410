"""
===============================================================================
TARJETA CRC — usuarios_api/api/exception_handlers.py (Manejo Centralizado)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a la envoltura
    {Estatus, Mensaje, ResponseObject}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos (causas de persistencia, errores no
    controlados) en producción.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: UsuariosError, PersistenceError, UsuarioDuplicadoError
  - crosscutting.config.get_settings (nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    PersistenceError,
    UsuarioDuplicadoError,
    UsuariosError,
)
from ..crosscutting.logger import logger

MSG_DATOS_INVALIDOS = "Datos inválidos."


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: UsuariosError,
    code: ErrorCode,
    status_code: int,
    detail: str | None = None,
) -> JSONResponse:
    """
    Helper común para errores tipados de servicios.

    detail: texto para el cliente; por defecto exc.message. La causa completa
    queda en el log bajo error_id.
    """
    logger.error(
        "Error de servicio",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error": exc.message,
            "cause": repr(exc.original_error) if exc.original_error else None,
            "request_id": _request_id_from(request),
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code, code=code, detail=detail or exc.message
    )
    return await app_exception_handler(request, app_exc)


async def persistence_error_handler(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    # R: En producción solo la operación; nada de rutas, SQL ni texto del driver.
    detail = exc.mensaje_publico if get_settings().is_production() else exc.message
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.PERSISTENCE_ERROR,
        status_code=500,
        detail=detail,
    )


async def duplicado_error_handler(
    request: Request, exc: UsuarioDuplicadoError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.CONFLICT, status_code=409
    )


async def usuarios_error_handler(request: Request, exc: UsuariosError) -> JSONResponse:
    detail = "Error interno." if get_settings().is_production() else exc.message
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.INTERNAL_ERROR,
        status_code=500,
        detail=detail,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Cuerpo mal formado (JSON inválido / tipos) -> 400 "Datos inválidos."."""
    errores = []
    for err in exc.errors():
        campo = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        texto = err.get("msg", "")
        errores.append(f"{campo}: {texto}" if campo else texto)

    logger.warning(
        "Request inválido",
        extra={"request_id": _request_id_from(request), "errores": errores},
    )
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=MSG_DATOS_INVALIDOS,
        errores=errores,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": _request_id_from(request), "error": str(exc)},
    )

    # R: En producción evitamos filtrar detalles.
    detail = str(exc) if not get_settings().is_production() else "Error interno."

    app_exc = AppHTTPException(
        status_code=500, code=ErrorCode.INTERNAL_ERROR, detail=detail
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(UsuarioDuplicadoError, duplicado_error_handler)
    app.add_exception_handler(UsuariosError, usuarios_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
