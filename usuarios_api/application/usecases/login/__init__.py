"""Casos de uso de login."""

from __future__ import annotations

from .autenticar_usuario import AutenticarUsuarioUseCase

__all__ = ["AutenticarUsuarioUseCase"]
