"""
test_word_filter.py — Tests para el filtro de palabras prohibidas.

Verifica:
- Coincidencia sin distinguir mayúsculas
- Coincidencia por substring (sin límites de palabra)
- Texto limpio y vacío
"""

from __future__ import annotations

import pytest

from publicaciones.core.word_filter import PALABRAS_PROHIBIDAS, is_prohibited


class TestIsProhibited:
    def test_frase_con_palabra_prohibida(self):
        assert is_prohibited("eres un idiota") is True

    def test_substring_dentro_de_otra_palabra(self):
        """Sin límites de palabra: 'idiotazo' también se rechaza."""
        assert is_prohibited("idiotazo") is True

    def test_ignora_mayusculas(self):
        assert is_prohibited("ERES UN IDIOTA") is True
        assert is_prohibited("Pendejo") is True

    def test_palabras_con_acento(self):
        assert is_prohibited("qué imbécil") is True
        assert is_prohibited("CABRÓN") is True

    def test_texto_limpio(self):
        assert is_prohibited("hello") is False
        assert is_prohibited("Muy buen artículo, gracias") is False

    def test_texto_vacio(self):
        assert is_prohibited("") is False

    def test_falso_positivo_conocido(self):
        """'naco' dentro de 'chinaco' se rechaza: el filtro no mira palabras."""
        assert is_prohibited("chinaco") is True

    @pytest.mark.parametrize("palabra", PALABRAS_PROHIBIDAS)
    def test_toda_la_lista_se_detecta(self, palabra):
        assert is_prohibited(f"texto {palabra} texto") is True


class TestLista:
    def test_lista_es_inmutable(self):
        assert isinstance(PALABRAS_PROHIBIDAS, tuple)

    def test_lista_tiene_24_terminos(self):
        assert len(PALABRAS_PROHIBIDAS) == 24
