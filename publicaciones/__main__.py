"""
__main__.py — Permite ejecutar el paquete como módulo.

    python -m publicaciones serve
"""

from publicaciones.cli import main

if __name__ == "__main__":
    main()
