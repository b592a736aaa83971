"""
comments.py — Comentarios embebidos en una publicación.

Agregar, listar, editar, borrar y dar/quitar like. Todas las mutaciones
siguen el mismo patrón: leer la publicación, modificar la lista en
memoria y reescribir el campo comentarios completo (junto con
popularidad cuando cambia) en una sola llamada a update().

Uso:
    from publicaciones.core.comments import CommentService
    comments = CommentService(store)
    result = comments.add_comment(pub_id, "bob", "hola")
    result = comments.update_like(pub_id, "1", increment=True)
"""

from __future__ import annotations

import re
from typing import Any

from publicaciones.core.errors import ErrorKind, Result
from publicaciones.core.models import Comment, Publication, now_iso
from publicaciones.core.popularity import (
    LikeUnderflow,
    apply_comment_deletion,
    apply_like,
)
from publicaciones.core.store import DocumentStore
from publicaciones.core.word_filter import is_prohibited
from publicaciones.utils.logger import get_logger

logger = get_logger("publicaciones.core.comments")

MSG_PUB_NOT_FOUND = "Publicación no encontrada"
MSG_COMMENT_NOT_FOUND = "Comentario no encontrado"
MSG_REJECTED = "Comentario no permitido por lenguaje inapropiado."
MSG_EMPTY = "El contenido del comentario debe ser un texto no vacío."

# Solo dígitos ASCII; int() aceptaría también "1_0" o dígitos Unicode
_COMMENT_ID = re.compile(r"[+-]?[0-9]+")


def parse_comment_id(raw: Any) -> int | None:
    """Id numérico del comentario, o None si no es un entero."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not _COMMENT_ID.fullmatch(text):
        return None
    return int(text)


class CommentService:
    """
    Operaciones sobre los comentarios de una publicación.

    La identidad del comentarista llega como parámetro explícito;
    el servicio no conoce el request HTTP.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def _load(self, pub_id: str) -> Publication | None:
        doc = self._store.get_by_id(pub_id)
        if doc is None:
            return None
        return Publication.from_document(doc["id"], doc)

    def get_comments(self, pub_id: str) -> Result:
        """Lista de comentarios (dicts) de la publicación."""
        publication = self._load(pub_id)
        if publication is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_PUB_NOT_FOUND)
        return Result.success(publication.comments_as_dicts())

    def add_comment(self, pub_id: str, usuario: str, contenido: str) -> Result:
        """
        Agrega un comentario al final de la lista.

        El comentario nuevo arranca con 0 likes, así que popularidad
        no cambia.

        Returns:
            Result con el Comment creado.
        """
        publication = self._load(pub_id)
        if publication is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_PUB_NOT_FOUND)

        if not isinstance(contenido, str) or not contenido.strip():
            return Result.failure(ErrorKind.CONTENT_REJECTED, MSG_EMPTY)

        if is_prohibited(contenido):
            logger.warning(f"Comentario rechazado en {pub_id} (usuario {usuario})")
            return Result.failure(ErrorKind.CONTENT_REJECTED, MSG_REJECTED)

        comment = Comment(
            id=publication.next_comment_id(),
            usuario=usuario,
            contenido=contenido,
            fechaComentario=now_iso(),
            likes=0,
        )
        publication.comentarios.append(comment)

        self._store.update(pub_id, {
            "comentarios": publication.comments_as_dicts(),
            "ultimoIdComentario": comment.id,
        })
        logger.info(f"Comentario {comment.id} agregado a {pub_id} por {usuario}")
        return Result.success(comment)

    def update_comment(self, pub_id: str, comment_id: Any, contenido: str) -> Result:
        """
        Reemplaza el contenido de un comentario y marca fechaModificacion.

        id y likes no cambian.

        Returns:
            Result con el Comment actualizado.
        """
        if not isinstance(contenido, str) or not contenido.strip():
            return Result.failure(ErrorKind.VALIDATION, MSG_EMPTY)

        if is_prohibited(contenido):
            logger.warning(f"Edición rechazada en {pub_id}, comentario {comment_id}")
            return Result.failure(ErrorKind.CONTENT_REJECTED, MSG_REJECTED)

        parsed_id = parse_comment_id(comment_id)

        publication = self._load(pub_id)
        if publication is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_PUB_NOT_FOUND)

        comment = publication.find_comment(parsed_id) if parsed_id is not None else None
        if comment is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_COMMENT_NOT_FOUND)

        comment.contenido = contenido
        comment.fechaModificacion = now_iso()

        self._store.update(pub_id, {"comentarios": publication.comments_as_dicts()})
        return Result.success(comment, "Comentario actualizado exitosamente")

    def delete_comment(self, pub_id: str, comment_id: Any) -> Result:
        """
        Borra un comentario y descuenta sus likes de popularidad.

        comentarios y popularidad se escriben en la misma llamada.

        Returns:
            Result con {id, comentarios, popularidad}.
        """
        publication = self._load(pub_id)
        if publication is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_PUB_NOT_FOUND)

        parsed_id = parse_comment_id(comment_id)
        comment = publication.find_comment(parsed_id) if parsed_id is not None else None
        if comment is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_COMMENT_NOT_FOUND)

        publication.comentarios = [
            c for c in publication.comentarios if c.id != comment.id
        ]
        publication.popularidad = apply_comment_deletion(
            publication.popularidad, comment.likes
        )

        comentarios = publication.comments_as_dicts()
        self._store.update(pub_id, {
            "comentarios": comentarios,
            "popularidad": publication.popularidad,
        })
        logger.info(
            f"Comentario {comment.id} eliminado de {pub_id} "
            f"(-{comment.likes} popularidad)"
        )
        return Result.success({
            "id": pub_id,
            "comentarios": comentarios,
            "popularidad": publication.popularidad,
        })

    def update_like(self, pub_id: str, comment_id: Any, increment: bool = True) -> Result:
        """
        Suma o resta un like a un comentario y ajusta popularidad.

        Returns:
            Result con {success, comentarios, popularidad}.
        """
        publication = self._load(pub_id)
        if publication is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_PUB_NOT_FOUND)

        parsed_id = parse_comment_id(comment_id)
        comment = publication.find_comment(parsed_id) if parsed_id is not None else None
        if comment is None:
            return Result.failure(ErrorKind.NOT_FOUND, MSG_COMMENT_NOT_FOUND)

        try:
            change = apply_like(comment.likes, publication.popularidad, increment)
        except LikeUnderflow as e:
            return Result.failure(ErrorKind.INVALID_STATE, str(e))

        comment.likes = change.likes
        publication.popularidad = change.popularidad

        comentarios = publication.comments_as_dicts()
        self._store.update(pub_id, {
            "comentarios": comentarios,
            "popularidad": publication.popularidad,
        })
        return Result.success({
            "success": True,
            "comentarios": comentarios,
            "popularidad": publication.popularidad,
        })
