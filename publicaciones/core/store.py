"""
store.py — Persistencia de la API sobre SQLite.

Dos colaboradores sobre la misma base:
1. DocumentStore: colección de documentos JSON con id opaco
   (get_all, get_by_id, add, update, delete, query_top_by_field)
2. CredentialStore: usuarios registrados (find_by_username, create)

No hay cache en memoria: cada llamada abre su propia conexión y la base
es la única fuente de verdad. Leer y escribir son llamadas separadas,
sin transacción que las envuelva.

Uso:
    from publicaciones.core.store import Database, DocumentStore
    db = Database("data/publicaciones.db")
    pubs = DocumentStore(db, "publications")
    doc_id = pubs.add({"title": "Hola"})
"""

from __future__ import annotations

import json
import re
import sqlite3
import uuid
from pathlib import Path
from typing import Any

from publicaciones.utils.logger import get_logger

logger = get_logger("publicaciones.core.store")

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Nombres que se interpolan en SQL (colecciones y campos del documento)
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Identificador invalido: '{name}'")
    return name


class Database:
    """
    Conexión a la base SQLite con inicialización automática del schema.

    Args:
        db_path: Ruta al archivo SQLite (se crea si no existe).
        schema_path: Ruta a schema.sql (por defecto el del paquete).
    """

    def __init__(
        self,
        db_path: str | Path = "data/publicaciones.db",
        schema_path: str | Path | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        self._ensure_initialized()

    @property
    def path(self) -> Path:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        """Crea una conexion a SQLite con row_factory."""
        conn = sqlite3.connect(
            str(self._db_path),
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _is_initialized(self) -> bool:
        conn = self.connect()
        try:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='table' AND name='publications'"
            )
            return cursor.fetchone() is not None
        finally:
            conn.close()

    def _ensure_initialized(self) -> None:
        """Inicializa el schema si no existe."""
        if self._is_initialized():
            return

        logger.info(f"Inicializando base de datos en {self._db_path}")
        schema_sql = self._schema_path.read_text(encoding="utf-8")

        conn = self.connect()
        try:
            conn.executescript(schema_sql)
            conn.commit()
            logger.success("Schema cargado")
        finally:
            conn.close()

    def ping(self) -> bool:
        """Verifica que la base responda a una query simple."""
        conn = self.connect()
        try:
            conn.execute("SELECT 1").fetchone()
            return True
        finally:
            conn.close()


class DocumentStore:
    """
    Colección de documentos JSON.

    Los documentos devueltos son dicts con el id bajo la key "id"
    más los campos guardados. update() reemplaza campos completos
    (merge superficial), nunca parchea dentro de un campo.

    Args:
        database: Database compartida.
        collection: Nombre de la tabla de la colección.
    """

    def __init__(self, database: Database, collection: str = "publications") -> None:
        self._db = database
        self._table = _check_identifier(collection)

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> dict[str, Any]:
        return {"id": row["id"], **json.loads(row["data"])}

    def get_all(self) -> list[dict[str, Any]]:
        """Todos los documentos en orden de creación."""
        conn = self._db.connect()
        try:
            cursor = conn.execute(
                f"SELECT id, data FROM {self._table} "
                f"ORDER BY created_at ASC, rowid ASC"
            )
            return [self._row_to_document(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_by_id(self, doc_id: str) -> dict[str, Any] | None:
        """Documento con ese id, o None si no existe."""
        conn = self._db.connect()
        try:
            row = conn.execute(
                f"SELECT id, data FROM {self._table} WHERE id = ?",
                (doc_id,),
            ).fetchone()
            return self._row_to_document(row) if row else None
        finally:
            conn.close()

    def add(self, record: dict[str, Any]) -> str:
        """
        Inserta un documento nuevo.

        Returns:
            Id opaco asignado por el store.
        """
        doc_id = uuid.uuid4().hex
        data = {k: v for k, v in record.items() if k != "id"}
        conn = self._db.connect()
        try:
            conn.execute(
                f"INSERT INTO {self._table} (id, data) VALUES (?, ?)",
                (doc_id, json.dumps(data, ensure_ascii=False)),
            )
            conn.commit()
            return doc_id
        finally:
            conn.close()

    def update(self, doc_id: str, fields: dict[str, Any]) -> bool:
        """
        Reemplaza los campos dados en un documento existente.

        Returns:
            False si el documento no existe.
        """
        conn = self._db.connect()
        try:
            row = conn.execute(
                f"SELECT data FROM {self._table} WHERE id = ?",
                (doc_id,),
            ).fetchone()
            if row is None:
                return False

            data = json.loads(row["data"])
            data.update({k: v for k, v in fields.items() if k != "id"})
            conn.execute(
                f"UPDATE {self._table} SET data = ? WHERE id = ?",
                (json.dumps(data, ensure_ascii=False), doc_id),
            )
            conn.commit()
            return True
        finally:
            conn.close()

    def delete(self, doc_id: str) -> bool:
        """Borra el documento. False si no existía."""
        conn = self._db.connect()
        try:
            cursor = conn.execute(
                f"DELETE FROM {self._table} WHERE id = ?",
                (doc_id,),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def query_top_by_field(
        self,
        field: str,
        desc: bool = True,
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        """
        Los primeros `limit` documentos ordenados por un campo numérico.

        El orden entre empates es el que devuelva SQLite.
        """
        _check_identifier(field)
        direction = "DESC" if desc else "ASC"
        conn = self._db.connect()
        try:
            cursor = conn.execute(
                f"SELECT id, data FROM {self._table} "
                f"ORDER BY COALESCE(json_extract(data, '$.{field}'), 0) {direction} "
                f"LIMIT ?",
                (limit,),
            )
            return [self._row_to_document(row) for row in cursor.fetchall()]
        finally:
            conn.close()


class CredentialStore:
    """Usuarios registrados: username único y hash de la contraseña."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_username(self, username: str) -> dict[str, Any] | None:
        """Dict con id, username y password (hash), o None."""
        conn = self._db.connect()
        try:
            row = conn.execute(
                "SELECT id, username, password, created_at "
                "FROM users WHERE username = ?",
                (username,),
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def create(self, username: str, password_hash: str) -> str:
        """
        Registra un usuario.

        Returns:
            Id asignado al usuario.

        Raises:
            sqlite3.IntegrityError: si el username ya existe.
        """
        user_id = uuid.uuid4().hex
        conn = self._db.connect()
        try:
            conn.execute(
                "INSERT INTO users (id, username, password) VALUES (?, ?, ?)",
                (user_id, username, password_hash),
            )
            conn.commit()
            return user_id
        finally:
            conn.close()
