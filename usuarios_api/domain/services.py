"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios (Protocols)

Responsabilidades:
    - Definir el contrato del emisor de tokens de acceso.
    - Mantener a application independiente de la librería JWT.

Colaboradores:
    - identity/token_service.TokenService: implementación concreta (PyJWT).
    - application/usecases/login: consume este puerto.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol


class TokenIssuer(Protocol):
    """Contrato para emitir un token firmado ligado a un usuario."""

    def emitir_token(self, id_usuario: str, email: str) -> str:
        """Token firmado con sub/email/jti y expiración."""
        ...
