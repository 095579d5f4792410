"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" con el contexto de la operación que falló

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  UsuariosError + PersistenceError + UsuarioDuplicadoError

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a la envoltura HTTP
  - Generar error_id para rastreo
  - Conservar la causa original (disco, driver, procedimiento almacenado)

Colaboradores:
  - api/exception_handlers.py (mapea a respuesta Estatus "E")
  - infrastructure/repositories/* (los stores levantan PersistenceError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class UsuariosError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      UsuariosError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "USUARIOS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class PersistenceError(UsuariosError):
    """
    Falla del store: I/O de archivo, conexión, o procedimiento con Estatus de error.

    operacion: texto corto ("registrar el usuario") que sí puede ver el cliente;
    `message` lleva además la causa: el cliente la ve solo fuera de producción.
    """

    error_code: str = "PERSISTENCE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
        *,
        operacion: str | None = None,
    ):
        super().__init__(message, error_id=error_id, original_error=original_error)
        self.operacion = operacion

    @property
    def mensaje_publico(self) -> str:
        if self.operacion:
            return f"Error al {self.operacion}."
        return "Error interno."


MSG_USUARIO_DUPLICADO = "El Usuario ya se encuentra registrado."
MSG_CORREO_DUPLICADO = "El correo ya pertenece a otro usuario."


class UsuarioDuplicadoError(UsuariosError):
    """El id o el email ya existen en el store (alta o cambio de email)."""

    error_code: str = "DUPLICATE_USER"
