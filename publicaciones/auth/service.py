"""
service.py — Registro e inicio de sesión.

Usa el CredentialStore para guardar usuarios con la contraseña hasheada
y el TokenIssuer para emitir el token de sesión.
"""

from __future__ import annotations

import sqlite3

from publicaciones.auth.security import TokenIssuer, hash_password, verify_password
from publicaciones.core.errors import ErrorKind, Result
from publicaciones.core.store import CredentialStore
from publicaciones.utils.logger import get_logger

logger = get_logger("publicaciones.auth")

MSG_BAD_CREDENTIALS = "Credenciales incorrectas"


class AuthService:
    """
    Args:
        credentials: Store de usuarios.
        issuer: Emisor de tokens.
        bcrypt_rounds: Cost factor de bcrypt.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        issuer: TokenIssuer,
        bcrypt_rounds: int = 10,
    ) -> None:
        self._credentials = credentials
        self._issuer = issuer
        self._rounds = bcrypt_rounds

    def register(self, username: str | None, password: str | None) -> Result:
        """
        Registra un usuario nuevo.

        Returns:
            Result con el userId asignado.
        """
        if not username or not password:
            return Result.failure(
                ErrorKind.VALIDATION,
                "El nombre de usuario y la contraseña son obligatorios",
            )

        if self._credentials.find_by_username(username) is not None:
            return Result.failure(ErrorKind.VALIDATION, "El usuario ya existe")

        hashed = hash_password(password, rounds=self._rounds)
        try:
            user_id = self._credentials.create(username, hashed)
        except sqlite3.IntegrityError:
            # Otro request registró el mismo username entre la consulta y el insert
            return Result.failure(ErrorKind.VALIDATION, "El usuario ya existe")

        logger.info(f"Usuario registrado: {username}")
        return Result.success(user_id, "Usuario registrado correctamente")

    def login(self, username: str | None, password: str | None) -> Result:
        """
        Verifica credenciales y emite un token.

        Returns:
            Result con {token, info}; AUTH_REJECTED si las credenciales fallan.
        """
        if not username or not password:
            return Result.failure(ErrorKind.AUTH_REJECTED, MSG_BAD_CREDENTIALS)

        user = self._credentials.find_by_username(username)
        if user is None or not verify_password(password, user["password"]):
            logger.warning(f"Login fallido para {username}")
            return Result.failure(ErrorKind.AUTH_REJECTED, MSG_BAD_CREDENTIALS)

        token = self._issuer.create_access_token(user["id"], user["username"])
        return Result.success({
            "token": token,
            "info": f"Sesión válida durante {self._issuer.ttl_seconds}s",
        })
