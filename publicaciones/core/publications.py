"""
publications.py — Ciclo de vida de las publicaciones.

Crear, leer, actualizar, borrar y las 5 más populares. Cada operación
vuelve a leer el estado del store antes de escribir; no hay cache.

Uso:
    from publicaciones.core.publications import PublicationService
    service = PublicationService(store)
    result = service.create_publication("alice", "Titulo", "Contenido")
    if result.ok:
        print(result.value.id)
"""

from __future__ import annotations

from publicaciones.core.errors import ErrorKind, Result
from publicaciones.core.models import Publication, now_iso
from publicaciones.core.store import DocumentStore
from publicaciones.utils.logger import get_logger

logger = get_logger("publicaciones.core.publications")

TRENDING_LIMIT = 5


def _is_filled(value: object) -> bool:
    return isinstance(value, str) and value.strip() != ""


class PublicationService:
    """
    Operaciones sobre publicaciones completas.

    Args:
        store: Colección de publicaciones.
        trending_limit: Cuántas publicaciones devuelve get_trending().
    """

    def __init__(self, store: DocumentStore, trending_limit: int = TRENDING_LIMIT) -> None:
        self._store = store
        self._trending_limit = trending_limit

    def list_publications(self) -> list[Publication]:
        """Todas las publicaciones. Lista vacía no es un error."""
        return [
            Publication.from_document(doc["id"], doc)
            for doc in self._store.get_all()
        ]

    def get_publication(self, pub_id: str) -> Publication | None:
        """La publicación o None; el llamador decide qué hacer si falta."""
        doc = self._store.get_by_id(pub_id)
        if doc is None:
            return None
        return Publication.from_document(doc["id"], doc)

    def create_publication(self, author: str, title: str, content: str) -> Result:
        """
        Crea una publicación sin comentarios y con popularidad 0.

        Returns:
            Result con la Publication creada (incluye el id asignado).
        """
        if not _is_filled(title) or not _is_filled(content):
            return Result.failure(
                ErrorKind.VALIDATION,
                "Debe proporcionar title y content correctamente.",
            )

        publication = Publication(
            id="",
            author=author,
            title=title,
            content=content,
            datePub=now_iso(),
        )
        publication.id = self._store.add(publication.to_document())
        logger.info(f"Publicación {publication.id} creada por {author}")
        return Result.success(publication)

    def update_publication(self, pub_id: str, title: str, content: str) -> Result:
        """Cambia solo title y content; el resto del documento no se toca."""
        if not _is_filled(title) or not _is_filled(content):
            return Result.failure(
                ErrorKind.VALIDATION, "Título y contenido son requeridos"
            )

        publication = self.get_publication(pub_id)
        if publication is None:
            return Result.failure(
                ErrorKind.NOT_FOUND, f"Publicación con ID {pub_id} no encontrada."
            )

        self._store.update(pub_id, {"title": title, "content": content})
        publication.title = title
        publication.content = content
        logger.info(f"Publicación {pub_id} actualizada")
        return Result.success(publication, "Publicación actualizada con éxito")

    def delete_publication(self, pub_id: str) -> Result:
        """Borra la publicación y, con ella, sus comentarios embebidos."""
        if not self._store.delete(pub_id):
            return Result.failure(ErrorKind.NOT_FOUND, "Publicación no encontrada")

        logger.info(f"Publicación {pub_id} eliminada")
        return Result.success(message="Publicación eliminada correctamente")

    def get_trending(self) -> Result:
        """
        Las publicaciones más populares, de mayor a menor popularidad.

        Sin publicaciones devuelve EMPTY_RESULT en vez de una lista vacía.
        Los empates quedan en el orden que devuelva el store.
        """
        docs = self._store.query_top_by_field(
            "popularidad", desc=True, limit=self._trending_limit
        )
        if not docs:
            return Result.failure(
                ErrorKind.EMPTY_RESULT, "No hay publicaciones populares"
            )
        return Result.success(
            [Publication.from_document(doc["id"], doc) for doc in docs]
        )
