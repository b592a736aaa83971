"""
security.py — Hash de contraseñas y tokens JWT.

- Contraseñas: bcrypt con cost factor configurable (10 por defecto)
- Tokens: JWT HS256 con claims userId, username y exp

Uso:
    from publicaciones.auth.security import TokenIssuer, hash_password
    issuer = TokenIssuer(secret="...", ttl_seconds=600)
    token = issuer.create_access_token(user_id, "alice")
    claims = issuer.decode_access_token(token)
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

DEFAULT_BCRYPT_ROUNDS = 10


class AuthRejected(Exception):
    """
    El request no pasó la verificación de identidad.

    Args:
        message: Mensaje corto para el cliente.
        status_code: 403 si falta el token, 401 si es inválido o expiró.
    """

    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash bcrypt de la contraseña, como string utf-8."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """True si la contraseña coincide con el hash guardado."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Hash corrupto o con formato desconocido
        return False


class TokenIssuer:
    """
    Firma y verifica los tokens de sesión.

    Args:
        secret: Clave HS256 (JWT_SECRET).
        ttl_seconds: Vida del token en segundos.
        algorithm: Algoritmo de firma.
    """

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 600,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self._ttl = ttl_seconds
        self._algorithm = algorithm

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def create_access_token(self, user_id: str, username: str) -> str:
        """Token firmado que expira en ttl_seconds."""
        ahora = int(time.time())
        payload = {
            "userId": user_id,
            "username": username,
            "iat": ahora,
            "exp": ahora + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """
        Verifica firma y expiración.

        Returns:
            Claims del token ({userId, username, iat, exp}).

        Raises:
            AuthRejected: 401 si el token es inválido, expiró o no trae username.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError:
            raise AuthRejected("Token inválido", status_code=401)

        if not claims.get("username"):
            raise AuthRejected("Token inválido", status_code=401)
        return claims
