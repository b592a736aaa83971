"""
config.py — Carga y gestiona la configuración de la API de publicaciones.

Se encarga de:
1. Cargar config.yaml (configuración general)
2. Cargar .env (secretos: JWT_SECRET, rutas locales)
3. Resolver variables de entorno en los valores de config
4. Convertir cada sección a su dataclass

config.yaml se sube a Git; .env nunca.

Uso:
    from publicaciones.config import load_config
    config = load_config()
    print(config.server.port)  # 3001
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


# ============================================================
# Dataclasses de configuración
# ============================================================

@dataclass
class ServerConfig:
    """Dónde escucha uvicorn."""
    host: str = "127.0.0.1"
    port: int = 3001


@dataclass
class DatabaseConfig:
    """Document store SQLite."""
    path: str = "data/publicaciones.db"


@dataclass
class AuthConfig:
    """Emisión y verificación de tokens."""
    token_ttl_seconds: int = 600
    algorithm: str = "HS256"
    bcrypt_rounds: int = 10


@dataclass
class PublicationsConfig:
    """Reglas de negocio configurables."""
    trending_limit: int = 5


@dataclass
class AppConfig:
    """Configuración completa de la aplicación."""
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    publications: PublicationsConfig = field(default_factory=PublicationsConfig)

    # Valores del .env (no están en config.yaml)
    jwt_secret: str = ""


# ============================================================
# Funciones de carga
# ============================================================

def _resolve_env_vars(value: str) -> str:
    """
    Resuelve variables de entorno en un string.

    Ejemplo:
        "${DATA_DIR}/publicaciones.db" → "/srv/data/publicaciones.db"

    Si la variable no existe se deja el placeholder tal cual.
    """
    patron = re.compile(r"\$\{(\w+)\}")

    def reemplazar(match: re.Match) -> str:
        nombre_var = match.group(1)
        return os.environ.get(nombre_var, match.group(0))

    return patron.sub(reemplazar, value)


def _resolve_env_recursive(data: Any) -> Any:
    """Resuelve ${VARIABLE} recursivamente en dicts y listas del YAML."""
    if isinstance(data, str):
        return _resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_recursive(item) for item in data]
    return data


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """
    Convierte un diccionario a una dataclass, ignorando keys desconocidas.

    Un YAML con campos que el código todavía no conoce no debe romper
    el arranque del servidor.
    """
    campos_validos = {f.name for f in cls.__dataclass_fields__.values()}
    datos_filtrados = {k: v for k, v in data.items() if k in campos_validos}
    return cls(**datos_filtrados)


def _find_config_dir() -> Path:
    """
    Encuentra el directorio raíz del proyecto (donde está config.yaml).

    Busca hacia arriba desde el directorio actual.
    """
    current = Path.cwd()
    for parent in [current] + list(current.parents):
        if (parent / "config.yaml").exists():
            return parent
    return current


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Carga la configuración completa.

    Pasos:
    1. Carga .env para tener las variables de entorno disponibles
    2. Lee config.yaml (si no existe, usa valores por defecto)
    3. Resuelve ${VARIABLES} en los valores del YAML
    4. Convierte cada sección a su dataclass
    5. Agrega los valores del .env

    Args:
        config_path: Ruta al config.yaml. Si es None, busca automáticamente.

    Returns:
        AppConfig lista para usar.
    """
    proyecto_dir = _find_config_dir()
    env_path = proyecto_dir / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = proyecto_dir / "config.yaml"

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    else:
        raw_config = {}

    config_resuelto = _resolve_env_recursive(raw_config)

    app_config = AppConfig(
        server=_dict_to_dataclass(
            config_resuelto.get("server", {}), ServerConfig
        ),
        database=_dict_to_dataclass(
            config_resuelto.get("database", {}), DatabaseConfig
        ),
        auth=_dict_to_dataclass(
            config_resuelto.get("auth", {}), AuthConfig
        ),
        publications=_dict_to_dataclass(
            config_resuelto.get("publications", {}), PublicationsConfig
        ),
    )

    app_config.jwt_secret = os.environ.get("JWT_SECRET", "")
    db_override = os.environ.get("PUBLICACIONES_DB_PATH", "")
    if db_override:
        app_config.database.path = db_override

    return app_config
