"""
responses.py — Traducción de ErrorKind a respuestas HTTP.

Es el único lugar donde un error del núcleo se convierte en status code.
El cuerpo de error siempre es {"message": "..."}.
"""

from __future__ import annotations

from fastapi.responses import JSONResponse

from publicaciones.core.errors import ErrorKind, Result

STATUS_BY_ERROR: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONTENT_REJECTED: 400,
    ErrorKind.INVALID_STATE: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EMPTY_RESULT: 404,
    ErrorKind.AUTH_REJECTED: 401,
    ErrorKind.INTERNAL: 500,
}


def message_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"message": message}, status_code=status_code)


def error_response(result: Result) -> JSONResponse:
    """Respuesta de error para un Result fallido."""
    status_code = STATUS_BY_ERROR.get(result.error, 500)
    return message_response(result.message, status_code)
