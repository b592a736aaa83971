"""
publication_routes.py — Endpoints de publicaciones y comentarios.

Todas las rutas pasan por el gate de autenticación; el username del
token es el autor de publicaciones y comentarios.

Endpoints:
    GET    /api/publication                                  — Todas
    GET    /api/publication/trends/popular                   — Top 5 por popularidad
    GET    /api/publication/{id}                             — Una publicación
    POST   /api/publication                                  — Crear
    PUT    /api/publication/{id}                             — Editar title/content
    DELETE /api/publication/{id}                             — Borrar
    GET    /api/publication/{idPub}/comments                 — Comentarios
    POST   /api/publication/{idPub}/comment                  — Comentar
    PUT    /api/publication/{idPub}/comment/{idComment}      — Editar comentario
    DELETE /api/publication/{idPub}/comment/{idComment}      — Borrar comentario
    PATCH  /api/publication/{idPub}/comment/{idComment}/like — Like / unlike
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from publicaciones.auth.dependencies import get_current_username
from publicaciones.core.comments import CommentService
from publicaciones.core.publications import PublicationService
from publicaciones.utils.logger import get_logger
from publicaciones.web.responses import error_response, message_response

logger = get_logger("publicaciones.web")

router = APIRouter(
    prefix="/api",
    dependencies=[Depends(get_current_username)],
)


# Los campos llegan como Any para poder responder 400 con un mensaje
# propio cuando faltan o tienen el tipo equivocado.

class PublicationBody(BaseModel):
    title: Any = None
    content: Any = None


class CommentBody(BaseModel):
    content: Any = None


class CommentEditBody(BaseModel):
    contenido: Any = None


class LikeBody(BaseModel):
    increment: Any = None


def _publications(request: Request) -> PublicationService:
    return request.app.state.publication_service


def _comments(request: Request) -> CommentService:
    return request.app.state.comment_service


# ================================================================
# Publicaciones
# ================================================================

@router.get("/publication")
def get_all_publications(request: Request):
    """Todas las publicaciones; 404 si no hay ninguna."""
    publications = _publications(request).list_publications()
    if not publications:
        return message_response("No hay publicaciones encontradas", 404)
    return [p.to_dict() for p in publications]


@router.get("/publication/trends/popular")
def get_most_trend(request: Request):
    """Las 5 publicaciones más populares."""
    result = _publications(request).get_trending()
    if not result.ok:
        return error_response(result)
    return [p.to_dict() for p in result.value]


@router.get("/publication/{pub_id}")
def get_publication_by_id(pub_id: str, request: Request):
    publication = _publications(request).get_publication(pub_id)
    if publication is None:
        return message_response("Publicación no encontrada", 404)
    return publication.to_dict()


@router.post("/publication")
def create_publication(
    request: Request,
    body: PublicationBody | None = None,
    username: str = Depends(get_current_username),
):
    """Crea una publicación a nombre del usuario del token."""
    body = body or PublicationBody()
    if not body.title or not body.content:
        return message_response(
            "Debe proporcionar title y content correctamente.", 400
        )
    if not isinstance(body.title, str) or not isinstance(body.content, str):
        return message_response("Los campos deben ser de tipo string.", 400)

    result = _publications(request).create_publication(
        username, body.title, body.content
    )
    if not result.ok:
        return error_response(result)
    return JSONResponse(content=result.value.to_dict(), status_code=201)


@router.put("/publication/{pub_id}")
def update_publication(
    pub_id: str,
    request: Request,
    body: PublicationBody | None = None,
):
    body = body or PublicationBody()
    if not body.title or not body.content:
        return message_response("Título y contenido son requeridos", 400)
    if not isinstance(body.title, str) or not isinstance(body.content, str):
        return message_response("Los campos deben ser de tipo string.", 400)

    result = _publications(request).update_publication(
        pub_id, body.title, body.content
    )
    if not result.ok:
        return error_response(result)
    return {"message": result.message, "publicacion": result.value.to_dict()}


@router.delete("/publication/{pub_id}")
def delete_publication(pub_id: str, request: Request):
    result = _publications(request).delete_publication(pub_id)
    if not result.ok:
        return error_response(result)
    return {"message": "Publicación borrada con éxito"}


# ================================================================
# Comentarios
# ================================================================

@router.get("/publication/{pub_id}/comments")
def get_comments(pub_id: str, request: Request):
    result = _comments(request).get_comments(pub_id)
    if not result.ok:
        return error_response(result)
    return {"comentarios": result.value}


@router.post("/publication/{pub_id}/comment")
def add_comment_to_publication(
    pub_id: str,
    request: Request,
    body: CommentBody | None = None,
    username: str = Depends(get_current_username),
):
    body = body or CommentBody()
    if not body.content:
        return message_response("Usuario y contenido requeridos", 400)
    if not isinstance(body.content, str):
        return message_response("El contenido debe ser de tipo string.", 400)

    result = _comments(request).add_comment(pub_id, username, body.content)
    if not result.ok:
        return error_response(result)
    return JSONResponse(content=result.value.to_dict(), status_code=201)


@router.put("/publication/{pub_id}/comment/{comment_id}")
def update_comment(
    pub_id: str,
    comment_id: str,
    request: Request,
    body: CommentEditBody | None = None,
):
    body = body or CommentEditBody()
    result = _comments(request).update_comment(pub_id, comment_id, body.contenido)
    if not result.ok:
        return error_response(result)
    return {
        "message": result.message,
        "comentarioActualizado": result.value.to_dict(),
    }


@router.delete("/publication/{pub_id}/comment/{comment_id}")
def delete_comment(pub_id: str, comment_id: str, request: Request):
    result = _comments(request).delete_comment(pub_id, comment_id)
    if not result.ok:
        return error_response(result)
    return result.value


@router.patch("/publication/{pub_id}/comment/{comment_id}/like")
def update_like_comment(
    pub_id: str,
    comment_id: str,
    request: Request,
    body: LikeBody | None = None,
):
    body = body or LikeBody()
    if not isinstance(body.increment, bool):
        return message_response("El parámetro 'increment' debe ser booleano", 400)

    result = _comments(request).update_like(pub_id, comment_id, body.increment)
    if not result.ok:
        return error_response(result)
    return result.value
