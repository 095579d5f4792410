"""
===============================================================================
TARJETA CRC — identity/token_service.py
===============================================================================

Módulo:
    Emisión y validación de JWT de acceso

Responsabilidades:
    - Emitir JWT HS256 con claims sub, email, jti (UUID aleatorio), iat, nbf,
      exp (= ahora + TTL, 2 horas por defecto), iss y aud.
    - Decodificar y validar JWT (firma, exp, iss, aud, claims mínimos).
    - Fallar al construir el servicio si falta la clave (arranque, no request).

Colaboradores:
    - crosscutting.config.get_settings: clave, issuer, audience, TTL.
    - crosscutting.error_responses.unauthorized: 401 estándar.
    - crosscutting.logger: logging estructurado (sin tokens ni secretos).

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Sin refresh tokens ni revocación: la expiración es la única invalidación.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_JTI: str = "jti"
CLAIM_IAT: str = "iat"
CLAIM_NBF: str = "nbf"
CLAIM_EXP: str = "exp"
CLAIM_ISS: str = "iss"
CLAIM_AUD: str = "aud"


# ---------------------------------------------------------------------------
# Contratos internos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Settings de tokens (snapshot)."""

    secret_key: str
    issuer: str
    audience: str
    ttl_hours: int = 2


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Claims que esperamos de un access token válido."""

    id_usuario: str
    email: str
    jti: str
    expira: datetime


def get_token_settings() -> TokenSettings:
    """Construye un snapshot de settings de tokens."""
    s = get_settings()
    return TokenSettings(
        secret_key=s.jwt_secret_key,
        issuer=s.jwt_issuer,
        audience=s.jwt_audience,
        ttl_hours=s.jwt_ttl_hours,
    )


class TokenService:
    """
    Emisor/validador de tokens.

    Se construye una vez (lifespan / container): sin clave no hay servicio.
    """

    def __init__(self, settings: TokenSettings) -> None:
        if not (settings.secret_key or "").strip():
            raise ValueError("La clave secreta no puede ser nula.")
        self._settings = settings

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self._settings.ttl_hours)

    def emitir_token(
        self, id_usuario: str, email: str, *, ahora: datetime | None = None
    ) -> str:
        """Crea un JWT de acceso firmado."""
        now = ahora or datetime.now(timezone.utc)
        payload: dict[str, object] = {
            CLAIM_SUB: id_usuario,
            CLAIM_EMAIL: email,
            CLAIM_JTI: str(uuid4()),
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_NBF: int(now.timestamp()),
            CLAIM_EXP: int((now + self.ttl).timestamp()),
            CLAIM_ISS: self._settings.issuer,
            CLAIM_AUD: self._settings.audience,
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=JWT_ALGORITHM)

    def decodificar_token(self, token: str) -> TokenPayload:
        """Decodifica y valida un JWT de acceso.

        Errores:
            - 401 si expiró, la firma es inválida, o iss/aud no coinciden.
            - 401 si faltan claims mínimos.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[JWT_ALGORITHM],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_JTI, CLAIM_EXP]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.warning("Token rechazado: expirado")
            raise unauthorized() from exc
        except jwt.InvalidTokenError as exc:
            logger.warning("Token rechazado: inválido", extra={"error": str(exc)})
            raise unauthorized() from exc

        return TokenPayload(
            id_usuario=str(payload[CLAIM_SUB]),
            email=str(payload[CLAIM_EMAIL]),
            jti=str(payload[CLAIM_JTI]),
            expira=datetime.fromtimestamp(int(payload[CLAIM_EXP]), tz=timezone.utc),
        )
