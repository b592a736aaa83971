"""
models.py — Publicación y Comentario tal como viven en el document store.

Los nombres de los campos del documento JSON se conservan exactamente
(datePub, comentarios, popularidad, fechaComentario...) porque son el
contrato de la API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def now_iso() -> str:
    """Timestamp ISO 8601 en UTC, con milisegundos y sufijo Z."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass
class Comment:
    """Comentario embebido en una publicación."""

    id: int
    usuario: str
    contenido: str
    fechaComentario: str
    likes: int = 0
    fechaModificacion: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Comment:
        return cls(
            id=int(data["id"]),
            usuario=data.get("usuario", ""),
            contenido=data.get("contenido", ""),
            fechaComentario=data.get("fechaComentario", ""),
            likes=int(data.get("likes") or 0),
            fechaModificacion=data.get("fechaModificacion"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "usuario": self.usuario,
            "contenido": self.contenido,
            "fechaComentario": self.fechaComentario,
            "likes": self.likes,
        }
        # Solo los comentarios editados llevan fechaModificacion
        if self.fechaModificacion is not None:
            data["fechaModificacion"] = self.fechaModificacion
        return data


@dataclass
class Publication:
    """
    Publicación con sus comentarios embebidos.

    popularidad es la suma de los likes de los comentarios vivos,
    mantenida de forma incremental por el servicio.
    """

    id: str
    author: str
    title: str
    content: str
    datePub: str
    comentarios: list[Comment] = field(default_factory=list)
    popularidad: int = 0
    # Mayor id de comentario asignado alguna vez (no se expone en la API)
    ultimoIdComentario: int = 0

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Publication:
        """Construye la publicación a partir de un documento del store."""
        comentarios = data.get("comentarios")
        if not isinstance(comentarios, list):
            comentarios = []
        return cls(
            id=doc_id,
            author=data.get("author", ""),
            title=data.get("title", ""),
            content=data.get("content", ""),
            datePub=data.get("datePub", ""),
            comentarios=[Comment.from_dict(c) for c in comentarios],
            popularidad=int(data.get("popularidad") or 0),
            ultimoIdComentario=int(data.get("ultimoIdComentario") or 0),
        )

    def comments_as_dicts(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.comentarios]

    def to_document(self) -> dict[str, Any]:
        """Campos persistidos (el id lo guarda el store aparte)."""
        return {
            "author": self.author,
            "title": self.title,
            "content": self.content,
            "datePub": self.datePub,
            "comentarios": self.comments_as_dicts(),
            "popularidad": self.popularidad,
            "ultimoIdComentario": self.ultimoIdComentario,
        }

    def to_dict(self) -> dict[str, Any]:
        """Representación pública que devuelve la API."""
        return {
            "id": self.id,
            "author": self.author,
            "title": self.title,
            "content": self.content,
            "datePub": self.datePub,
            "comentarios": self.comments_as_dicts(),
            "popularidad": self.popularidad,
        }

    def find_comment(self, comment_id: int) -> Comment | None:
        for comment in self.comentarios:
            if comment.id == comment_id:
                return comment
        return None

    def next_comment_id(self) -> int:
        """
        Siguiente id de comentario: max(ids vivos) + 1, o 1 si no hay.

        Si el comentario con el id más alto fue borrado, el contador
        ultimoIdComentario evita que ese id se vuelva a asignar.
        """
        vivos = max((c.id for c in self.comentarios), default=0)
        return max(vivos, self.ultimoIdComentario) + 1
