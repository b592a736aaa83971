"""
errors.py — Taxonomía de errores y Result de las operaciones del núcleo.

Las condiciones esperadas (validación, no encontrado, contenido
rechazado...) no se lanzan como excepciones: cada operación devuelve un
Result y la capa HTTP decide el status code. Solo los fallos realmente
inesperados se propagan como excepción.

Uso:
    from publicaciones.core.errors import ErrorKind, Result

    result = service.get_comments(pub_id)
    if not result.ok:
        print(result.error, result.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Tipos de error que el núcleo puede reportar."""

    VALIDATION = "validation"
    CONTENT_REJECTED = "content_rejected"
    NOT_FOUND = "not_found"
    AUTH_REJECTED = "auth_rejected"
    INVALID_STATE = "invalid_state"
    EMPTY_RESULT = "empty_result"
    INTERNAL = "internal"


@dataclass
class Result:
    """
    Resultado de una operación del núcleo.

    Campos:
        ok: Si la operación fue exitosa.
        value: Valor producido (publicación, comentario, dict de estado...).
        error: Tipo de error si falló.
        message: Mensaje corto, apto para mostrar al cliente.
    """

    ok: bool
    value: Any = None
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> Result:
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> Result:
        return cls(ok=False, error=error, message=message)
