"""
===============================================================================
TARJETA CRC — usuarios_api/crosscutting/logger.py (Logger JSON)
===============================================================================

Responsabilidades:
  - Emitir una línea JSON por evento (LOG_JSON=true) o texto plano.
  - Copiar los campos de `extra`: request_id, endpoint, id_usuario, error_id.
  - Ocultar tokens emitidos, el header Authorization y credenciales de BD.

Colaboradores:
  - context.RequestContext.as_log_extra() (origen de los campos de request)
  - crosscutting.config.get_settings (LOG_LEVEL / LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Atributos propios de LogRecord; el resto llegó por `extra`.
_CAMPOS_LOGRECORD: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_CLAVES_SENSIBLES: frozenset[str] = frozenset(
    {
        "token",
        "access_token",
        "authorization",
        "jwt_secret_key",
        "database_url",
        "password",
    }
)

REDACTADO = "***REDACTADO***"


def redactar(valor: Any, clave: str | None = None) -> Any:
    """Reemplaza valores bajo claves sensibles, también dentro de dicts/listas."""
    if clave and clave.lower() in _CLAVES_SENSIBLES:
        return REDACTADO
    if isinstance(valor, dict):
        return {str(k): redactar(v, str(k)) for k, v in valor.items()}
    if isinstance(valor, (list, tuple)):
        return [redactar(v) for v in valor]
    return valor


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea (con stacktrace si hay excepción)."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        for clave, valor in record.__dict__.items():
            if clave not in _CAMPOS_LOGRECORD:
                payload[clave] = redactar(valor, clave)

        if record.exc_info:
            tipo, error, _ = record.exc_info
            payload["exception"] = {
                "type": tipo.__name__ if tipo else None,
                "message": str(error) if error else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "usuarios-api") -> logging.Logger:
    """
    Logger de la app, configurado una sola vez.

    Si los Settings aún no validan (falta JWT_SECRET_KEY) se usa INFO + JSON;
    el error de configuración lo reporta el lifespan al arrancar.
    """
    log = logging.getLogger(name)

    level = "INFO"
    use_json = True
    try:
        from pydantic import ValidationError

        from .config import get_settings

        s = get_settings()
        level = (s.log_level or "INFO").upper()
        use_json = bool(s.log_json)
    except ValidationError:
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
