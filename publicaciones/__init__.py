"""
Publicaciones API — Publicaciones, comentarios moderados, likes y tendencias.

Este paquete contiene:
- core/  → Modelos, document store, publicaciones, comentarios y popularidad
- auth/  → Hash de contraseñas, tokens JWT y gate de autenticación
- web/   → Routers FastAPI y traducción de errores a HTTP
- utils/ → Logging

Uso:
    python -m publicaciones serve
    python -m publicaciones config --show
    python -m publicaciones health
"""

__version__ = "1.0.0"
