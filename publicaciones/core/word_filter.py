"""
word_filter.py — Filtro de lenguaje inapropiado para comentarios.

Coincidencia por substring, sin distinguir mayúsculas. No hay stemming
ni límites de palabra: "idiotazo" se rechaza igual que "idiota".
"""

from __future__ import annotations

# Lista fija, de solo lectura para todo el proceso
PALABRAS_PROHIBIDAS: tuple[str, ...] = (
    "idiota",
    "imbécil",
    "estúpido",
    "tonto",
    "mierda",
    "maldito",
    "cabron",
    "pendejo",
    "jodido",
    "coño",
    "chingado",
    "puto",
    "zorra",
    "tarado",
    "baboso",
    "culero",
    "marica",
    "huevon",
    "pelotudo",
    "gilipollas",
    "pajero",
    "naco",
    "puta",
    "cabrón",
)


def is_prohibited(text: str) -> bool:
    """True si el texto contiene alguna palabra prohibida."""
    lower = (text or "").lower()
    return any(palabra in lower for palabra in PALABRAS_PROHIBIDAS)
