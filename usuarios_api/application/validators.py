"""
===============================================================================
TARJETA CRC — application/validators.py (Validación declarativa de entradas)
===============================================================================

Responsabilidades:
  - Declarar reglas (campo, mensaje, predicado) para login y usuario.
  - Evaluar TODAS las reglas y devolver todos los mensajes violados.
  - Saltar la regla de formato cuando el email está vacío (un solo mensaje).

Colaboradores:
  - email_validator.validate_email (forma RFC, sin chequeo DNS)
  - application.usecases.* (validan antes de cualquier mutación)

Notas:
  - Un validador no lanza excepciones: devuelve ResultadoValidacion.
  - Mensajes de cara al usuario (se muestran unidos con ", ").
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

from email_validator import EmailNotValidError, validate_email

from ..domain.entities import Usuario

T = TypeVar("T")

MSG_EMAIL_OBLIGATORIO = "El email es obligatorio."
MSG_EMAIL_FORMATO = "El formato del email no es válido."
MSG_NOMBRE_OBLIGATORIO = "El nombre es obligatorio."
MSG_ID_OBLIGATORIO = "El ID de usuario es obligatorio."


def _no_vacio(valor: str | None) -> bool:
    return bool((valor or "").strip())


def email_con_formato(valor: str | None) -> bool:
    try:
        validate_email(valor or "", check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _siempre(_: object) -> bool:
    return True


@dataclass(frozen=True)
class Regla(Generic[T]):
    campo: str
    mensaje: str
    es_valida: Callable[[T], bool]
    cuando: Callable[[T], bool] = _siempre


@dataclass(frozen=True)
class ResultadoValidacion:
    errores: tuple[str, ...] = field(default_factory=tuple)

    @property
    def es_valido(self) -> bool:
        return not self.errores

    @property
    def mensaje(self) -> str:
        return ", ".join(self.errores)


class Validador(Generic[T]):
    """Evalúa una lista de reglas y acumula los mensajes de las que fallan."""

    def __init__(self, reglas: Sequence[Regla[T]]) -> None:
        self._reglas = tuple(reglas)

    def validar(self, objeto: T) -> ResultadoValidacion:
        errores = [
            regla.mensaje
            for regla in self._reglas
            if regla.cuando(objeto) and not regla.es_valida(objeto)
        ]
        return ResultadoValidacion(errores=tuple(errores))


# ---------------------------------------------------------------------------
# Reglas concretas
# ---------------------------------------------------------------------------
class LoginValidator(Validador[str]):
    """Valida el email de login."""

    def __init__(self) -> None:
        super().__init__(
            [
                Regla("Email", MSG_EMAIL_OBLIGATORIO, _no_vacio),
                Regla("Email", MSG_EMAIL_FORMATO, email_con_formato, cuando=_no_vacio),
            ]
        )


class UsuarioValidator(Validador[Usuario]):
    """Valida un Usuario antes de alta / actualización."""

    def __init__(self) -> None:
        super().__init__(
            [
                Regla(
                    "Email",
                    MSG_EMAIL_OBLIGATORIO,
                    lambda u: _no_vacio(u.correo_electronico),
                ),
                Regla(
                    "Email",
                    MSG_EMAIL_FORMATO,
                    lambda u: email_con_formato(u.correo_electronico),
                    cuando=lambda u: _no_vacio(u.correo_electronico),
                ),
                Regla(
                    "Nombre",
                    MSG_NOMBRE_OBLIGATORIO,
                    lambda u: _no_vacio(u.nombre_completo),
                ),
                Regla(
                    "UsuarioId",
                    MSG_ID_OBLIGATORIO,
                    lambda u: _no_vacio(u.id_usuario),
                ),
            ]
        )
