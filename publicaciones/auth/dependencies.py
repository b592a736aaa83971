"""
dependencies.py — Gate de autenticación para las rutas de publicaciones.

Lee el header Authorization (el prefijo "Bearer " es opcional), verifica
el token y entrega el username como identidad del autor/comentarista.
"""

from __future__ import annotations

from fastapi import Request

from publicaciones.auth.security import AuthRejected, TokenIssuer


def get_current_username(request: Request) -> str:
    """
    Dependency de FastAPI: username del token del request.

    Raises:
        AuthRejected: 403 sin token, 401 con token inválido o expirado.
    """
    raw = request.headers.get("Authorization", "")
    token = raw.replace("Bearer ", "", 1).strip()
    if not token:
        raise AuthRejected("Acceso denegado: No hay token", status_code=403)

    issuer: TokenIssuer = request.app.state.token_issuer
    claims = issuer.decode_access_token(token)
    return claims["username"]
