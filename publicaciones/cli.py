"""
cli.py — Punto de entrada de la API de publicaciones.

Comandos disponibles:
    python -m publicaciones serve                 → Levanta la API con uvicorn
    python -m publicaciones serve --port 8080     → En otro puerto
    python -m publicaciones config --show         → Muestra configuración
    python -m publicaciones config --validate     → Valida configuración
    python -m publicaciones health                → Verifica base de datos y secretos

Uso desde código (testing):
    from click.testing import CliRunner
    from publicaciones.cli import main
    CliRunner().invoke(main, ["config", "--show"])
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from publicaciones import __version__
from publicaciones.config import AppConfig, load_config
from publicaciones.core.store import Database
from publicaciones.utils.logger import get_logger, console as rich_console

logger = get_logger("publicaciones.cli")


@click.group()
@click.version_option(version=__version__, prog_name="Publicaciones API")
def main():
    """Publicaciones API — publicaciones, comentarios, likes y tendencias."""
    pass


@main.command()
@click.option("--host", default=None, help="Host (por defecto server.host)")
@click.option("--port", "-p", type=int, default=None, help="Puerto (por defecto server.port)")
@click.option("--reload", is_flag=True, help="Recarga automática en desarrollo")
def serve(host: str | None, port: int | None, reload: bool):
    """Levanta la API con uvicorn."""
    import uvicorn

    cfg = load_config()
    host = host or cfg.server.host
    port = port or cfg.server.port

    logger.info(f"Servidor corriendo en el puerto {port}")
    logger.info(f"URL base: http://{host}:{port}/api/")

    if reload:
        uvicorn.run("publicaciones.api:create_app", factory=True,
                    host=host, port=port, reload=True)
    else:
        from publicaciones.api import create_app
        uvicorn.run(create_app(cfg), host=host, port=port)


@main.command()
@click.option("--show", is_flag=True, help="Muestra la configuración actual")
@click.option("--validate", is_flag=True, help="Valida la configuración")
def config(show: bool, validate: bool):
    """Gestiona la configuración."""
    cfg = load_config()

    if show:
        tabla = Table(title="Configuración de Publicaciones API")
        tabla.add_column("Parámetro", style="cyan")
        tabla.add_column("Valor", style="green")

        tabla.add_row("Host", cfg.server.host)
        tabla.add_row("Puerto", str(cfg.server.port))
        tabla.add_row("Base de datos", cfg.database.path)
        tabla.add_row("Vida del token", f"{cfg.auth.token_ttl_seconds}s")
        tabla.add_row("Algoritmo JWT", cfg.auth.algorithm)
        tabla.add_row("bcrypt rounds", str(cfg.auth.bcrypt_rounds))
        tabla.add_row("Tendencias", str(cfg.publications.trending_limit))
        tabla.add_row("JWT_SECRET", "Configurado" if cfg.jwt_secret else "Falta")

        rich_console.print(tabla)

    if validate:
        problemas = _validate_config(cfg)
        if problemas:
            for p in problemas:
                logger.error(p)
        else:
            logger.success("Configuración válida")


@main.command()
def health():
    """Verifica base de datos y configuración."""
    cfg = load_config()
    errores = _validate_config(cfg)

    db_path = Path(cfg.database.path)
    if not db_path.exists():
        # health no crea la base
        errores.append(f"Base de datos no encontrada: {db_path}")
        logger.error(f"Base de datos: NO existe ({db_path})")
    else:
        try:
            Database(db_path).ping()
            logger.success(f"Base de datos: {db_path}")
        except Exception as e:
            errores.append(f"Base de datos no disponible: {e}")
            logger.error(f"Base de datos: NO disponible ({db_path})")

    if errores:
        rich_console.print(
            Panel(
                "\n".join(f"- {e}" for e in errores),
                title="Problemas encontrados",
                border_style="red",
            )
        )
        raise SystemExit(1)

    rich_console.print(
        Panel(
            "Todo funcionando correctamente",
            title="Estado de salud",
            border_style="green",
        )
    )


# ============================================================
# Funciones auxiliares (privadas)
# ============================================================

def _validate_config(cfg: AppConfig) -> list[str]:
    """Lista de problemas de configuración (vacía si todo está bien)."""
    problemas = []

    if not cfg.jwt_secret:
        problemas.append("JWT_SECRET no configurado en .env")
    if cfg.auth.token_ttl_seconds <= 0:
        problemas.append("auth.token_ttl_seconds debe ser positivo")
    if not 4 <= cfg.auth.bcrypt_rounds <= 31:
        problemas.append("auth.bcrypt_rounds debe estar entre 4 y 31")
    if cfg.publications.trending_limit <= 0:
        problemas.append("publications.trending_limit debe ser positivo")

    return problemas


if __name__ == "__main__":
    main()
