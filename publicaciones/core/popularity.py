"""
popularity.py — Reglas del contador de popularidad.

popularidad acompaña a la suma de likes de los comentarios vivos, pero
se actualiza de forma incremental en cada like, unlike o borrado de
comentario (nunca se vuelve a sumar todo).

Reglas:
- un unlike sobre un comentario con 0 likes se rechaza
- el unlike resta 1 a popularidad con piso en 0
- el borrado de un comentario resta sus likes sin piso
"""

from __future__ import annotations

from dataclasses import dataclass


class LikeUnderflow(Exception):
    """Se intentó quitar un like a un comentario que tiene 0."""


@dataclass(frozen=True)
class LikeChange:
    likes: int
    popularidad: int


def apply_like(current_likes: int, popularidad: int, increment: bool) -> LikeChange:
    """
    Calcula los nuevos contadores tras un like (+1) o unlike (-1).

    Raises:
        LikeUnderflow: si increment es False y el comentario tiene 0 likes.
    """
    if increment:
        return LikeChange(likes=current_likes + 1, popularidad=popularidad + 1)

    if current_likes <= 0:
        raise LikeUnderflow("No se pueden reducir likes por debajo de 0")

    return LikeChange(
        likes=current_likes - 1,
        popularidad=max(0, popularidad - 1),
    )


def apply_comment_deletion(popularidad: int, deleted_likes: int) -> int:
    """Popularidad tras borrar un comentario con `deleted_likes` likes."""
    return popularidad - deleted_likes
