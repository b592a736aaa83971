"""
api.py — Servidor FastAPI de la API de publicaciones.

Arma la app: stores, servicios, routers y manejadores de error.

Endpoints propios:
    GET /        — Info básica del servicio
    GET /health  — Health check (base de datos)

Routers:
    /auth/...             — web/auth_routes.py
    /api/publication/...  — web/publication_routes.py

Uso:
    python -m publicaciones serve
    python -m publicaciones serve --port 8080
"""

from __future__ import annotations

import secrets
import time
import traceback
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from publicaciones import __version__
from publicaciones.auth.security import AuthRejected, TokenIssuer
from publicaciones.auth.service import AuthService
from publicaciones.config import AppConfig, load_config
from publicaciones.core.comments import CommentService
from publicaciones.core.publications import PublicationService
from publicaciones.core.store import CredentialStore, Database, DocumentStore
from publicaciones.utils.logger import get_logger
from publicaciones.web import auth_routes, publication_routes
from publicaciones.web.responses import message_response

logger = get_logger("publicaciones.api")

# ================================================================
# App factory
# ================================================================

_start_time: float = 0.0


def create_app(
    config: AppConfig | None = None,
    database: Database | None = None,
) -> FastAPI:
    """
    Crea la app FastAPI.

    Args:
        config: Configuración (si es None se carga con load_config()).
        database: Database existente (reutiliza la conexión en tests).

    Returns:
        FastAPI app lista para servir.
    """
    global _start_time
    _start_time = time.time()

    config = config or load_config()

    app = FastAPI(
        title="Publicaciones API",
        description="Publicaciones, comentarios moderados, likes y tendencias",
        version=__version__,
    )

    if database is None:
        database = Database(config.database.path)

    secret = config.jwt_secret
    if not secret:
        logger.warning(
            "JWT_SECRET no configurado: se usa una clave temporal, "
            "los tokens no sobreviven a un reinicio"
        )
        secret = secrets.token_urlsafe(32)

    publications_store = DocumentStore(database, "publications")
    issuer = TokenIssuer(
        secret=secret,
        ttl_seconds=config.auth.token_ttl_seconds,
        algorithm=config.auth.algorithm,
    )

    app.state.config = config
    app.state.database = database
    app.state.token_issuer = issuer
    app.state.publication_service = PublicationService(
        publications_store,
        trending_limit=config.publications.trending_limit,
    )
    app.state.comment_service = CommentService(publications_store)
    app.state.auth_service = AuthService(
        CredentialStore(database),
        issuer,
        bcrypt_rounds=config.auth.bcrypt_rounds,
    )

    _register_error_handlers(app)
    _register_routes(app)
    app.include_router(auth_routes.router)
    app.include_router(publication_routes.router)

    return app


# ================================================================
# Error handlers
# ================================================================


def _register_error_handlers(app: FastAPI) -> None:
    """Traduce excepciones a respuestas {"message": ...}."""

    @app.exception_handler(AuthRejected)
    async def auth_rejected_handler(request: Request, exc: AuthRejected):
        return message_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return message_response(
            "Formato de JSON inválido. Verifique los datos enviados.", 400
        )

    @app.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception):
        # El detalle queda en el log, el cliente solo ve un mensaje corto
        logger.error(
            f"Error inesperado en {request.method} {request.url.path}: {exc}\n"
            + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        )
        return message_response("Error interno del servidor", 500)


# ================================================================
# Routes
# ================================================================


def _register_routes(app: FastAPI) -> None:
    """Endpoints de servicio (sin autenticación)."""

    @app.get("/")
    async def root():
        """Info básica del servicio."""
        return {
            "name": "Publicaciones API",
            "version": __version__,
            "status": "alive",
            "uptime_seconds": int(time.time() - _start_time),
        }

    @app.get("/health")
    def health():
        """
        Health check.

        Retorna 200 si la base responde, 503 si algo falla.
        """
        checks = {
            "database": False,
            "uptime_seconds": int(time.time() - _start_time),
            "timestamp": datetime.now().isoformat(),
        }

        try:
            database: Database = app.state.database
            checks["database"] = database.ping()
        except Exception as e:
            checks["database_error"] = str(e)

        all_ok = checks["database"]
        return JSONResponse(
            content={
                "status": "healthy" if all_ok else "degraded",
                "checks": checks,
            },
            status_code=200 if all_ok else 503,
        )
