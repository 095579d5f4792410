"""Identidad: emisión/validación de JWT y guard de endpoints."""

from .token_service import (
    JWT_ALGORITHM,
    TokenPayload,
    TokenService,
    TokenSettings,
    get_token_settings,
)

__all__ = [
    "JWT_ALGORITHM",
    "TokenPayload",
    "TokenService",
    "TokenSettings",
    "get_token_settings",
]
