"""
test_comments.py — Tests para comentarios, likes y popularidad.

Verifica:
- Ids de comentario crecientes que no se reutilizan
- Moderación al crear y al editar
- Edición conserva id y likes
- Borrado descuenta los likes del comentario de popularidad
- Likes nunca negativos; unlike en 0 se rechaza
- popularidad == suma de likes tras cada operación
"""

from __future__ import annotations

import pytest

from publicaciones.core.comments import CommentService, parse_comment_id
from publicaciones.core.errors import ErrorKind
from publicaciones.core.publications import PublicationService
from publicaciones.core.store import Database, DocumentStore


@pytest.fixture
def store(tmp_path):
    return DocumentStore(Database(tmp_path / "test_comments.db"), "publications")


@pytest.fixture
def publications(store):
    return PublicationService(store)


@pytest.fixture
def comments(store):
    return CommentService(store)


@pytest.fixture
def pub_id(publications):
    return publications.create_publication("alice", "T", "C").value.id


def _reload(publications, pub_id):
    return publications.get_publication(pub_id)


def _likes_sum(publication):
    return sum(c.likes for c in publication.comentarios)


# ================================================================
# Agregar
# ================================================================

class TestAddComment:
    def test_primer_comentario(self, comments, pub_id):
        result = comments.add_comment(pub_id, "bob", "hello")
        assert result.ok
        comment = result.value
        assert comment.id == 1
        assert comment.likes == 0
        assert comment.usuario == "bob"
        assert comment.contenido == "hello"
        assert comment.fechaComentario
        assert comment.fechaModificacion is None
        assert "fechaModificacion" not in comment.to_dict()

    def test_orden_de_insercion(self, comments, publications, pub_id):
        for texto in ["uno", "dos", "tres"]:
            comments.add_comment(pub_id, "bob", texto)
        pub = _reload(publications, pub_id)
        assert [c.contenido for c in pub.comentarios] == ["uno", "dos", "tres"]
        assert [c.id for c in pub.comentarios] == [1, 2, 3]

    def test_ids_no_se_reutilizan(self, comments, pub_id):
        """1, 2, 3; se borra el 2; el siguiente es 4."""
        for texto in ["uno", "dos", "tres"]:
            comments.add_comment(pub_id, "bob", texto)
        comments.delete_comment(pub_id, "2")
        assert comments.add_comment(pub_id, "bob", "cuatro").value.id == 4

    def test_ids_no_se_reutilizan_al_borrar_el_ultimo(self, comments, pub_id):
        for texto in ["uno", "dos", "tres"]:
            comments.add_comment(pub_id, "bob", texto)
        comments.delete_comment(pub_id, "3")
        assert comments.add_comment(pub_id, "bob", "otro").value.id == 4

    def test_documento_sin_contador_usa_max_mas_uno(self, comments, store, pub_id):
        """Documentos guardados sin ultimoIdComentario siguen funcionando."""
        store.update(pub_id, {
            "comentarios": [
                {"id": 5, "usuario": "x", "contenido": "a",
                 "fechaComentario": "2024-01-01T00:00:00.000Z", "likes": 0},
            ],
            "ultimoIdComentario": None,
        })
        assert comments.add_comment(pub_id, "bob", "hola").value.id == 6

    def test_popularidad_no_cambia(self, comments, publications, pub_id):
        comment = comments.add_comment(pub_id, "bob", "hola").value
        comments.update_like(pub_id, comment.id, True)
        comments.add_comment(pub_id, "carol", "otro")
        pub = _reload(publications, pub_id)
        assert pub.popularidad == 1 == _likes_sum(pub)

    def test_publicacion_inexistente(self, comments):
        result = comments.add_comment("no-existe", "bob", "hola")
        assert result.error == ErrorKind.NOT_FOUND

    def test_publicacion_inexistente_antes_que_moderacion(self, comments):
        result = comments.add_comment("no-existe", "bob", "idiota")
        assert result.error == ErrorKind.NOT_FOUND

    def test_lenguaje_inapropiado(self, comments, publications, pub_id):
        result = comments.add_comment(pub_id, "bob", "eres un idiota")
        assert result.error == ErrorKind.CONTENT_REJECTED
        assert result.message == "Comentario no permitido por lenguaje inapropiado."
        assert _reload(publications, pub_id).comentarios == []

    def test_substring_prohibido(self, comments, pub_id):
        result = comments.add_comment(pub_id, "bob", "idiotazo")
        assert result.error == ErrorKind.CONTENT_REJECTED

    def test_contenido_vacio(self, comments, pub_id):
        assert comments.add_comment(pub_id, "bob", "").error == ErrorKind.CONTENT_REJECTED
        assert comments.add_comment(pub_id, "bob", "  ").error == ErrorKind.CONTENT_REJECTED


class TestGetComments:
    def test_lista(self, comments, pub_id):
        comments.add_comment(pub_id, "bob", "hola")
        result = comments.get_comments(pub_id)
        assert result.ok
        assert result.value[0]["contenido"] == "hola"

    def test_sin_comentarios(self, comments, pub_id):
        assert comments.get_comments(pub_id).value == []

    def test_publicacion_inexistente(self, comments):
        assert comments.get_comments("no-existe").error == ErrorKind.NOT_FOUND


# ================================================================
# Editar
# ================================================================

class TestUpdateComment:
    def test_edita_conserva_id_y_likes(self, comments, publications, pub_id):
        comment = comments.add_comment(pub_id, "bob", "hola").value
        comments.update_like(pub_id, comment.id, True)
        comments.update_like(pub_id, comment.id, True)

        result = comments.update_comment(pub_id, str(comment.id), "hola editado")
        assert result.ok
        edited = result.value
        assert edited.id == comment.id
        assert edited.likes == 2
        assert edited.contenido == "hola editado"
        assert edited.fechaModificacion is not None
        assert edited.fechaComentario == comment.fechaComentario

        pub = _reload(publications, pub_id)
        assert pub.comentarios[0].contenido == "hola editado"
        assert pub.popularidad == 2 == _likes_sum(pub)

    @pytest.mark.parametrize("contenido", ["", "   ", "\n\t", None, 42])
    def test_contenido_vacio_o_no_texto(self, comments, pub_id, contenido):
        comments.add_comment(pub_id, "bob", "hola")
        result = comments.update_comment(pub_id, "1", contenido)
        assert result.error == ErrorKind.VALIDATION

    def test_lenguaje_inapropiado(self, comments, publications, pub_id):
        comments.add_comment(pub_id, "bob", "hola")
        result = comments.update_comment(pub_id, "1", "qué tonto")
        assert result.error == ErrorKind.CONTENT_REJECTED
        assert _reload(publications, pub_id).comentarios[0].contenido == "hola"

    def test_comentario_inexistente(self, comments, pub_id):
        result = comments.update_comment(pub_id, "99", "nuevo")
        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Comentario no encontrado"

    def test_id_no_numerico(self, comments, pub_id):
        comments.add_comment(pub_id, "bob", "hola")
        assert comments.update_comment(pub_id, "abc", "nuevo").error == ErrorKind.NOT_FOUND

    def test_publicacion_inexistente(self, comments):
        result = comments.update_comment("no-existe", "1", "nuevo")
        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Publicación no encontrada"


# ================================================================
# Borrar
# ================================================================

class TestDeleteComment:
    def test_borrar_comentario_sin_likes(self, comments, publications, pub_id):
        keep = comments.add_comment(pub_id, "bob", "uno").value
        comments.update_like(pub_id, keep.id, True)
        comments.add_comment(pub_id, "bob", "dos")

        result = comments.delete_comment(pub_id, "2")
        assert result.ok
        assert result.value["popularidad"] == 1
        pub = _reload(publications, pub_id)
        assert pub.popularidad == 1 == _likes_sum(pub)
        assert [c.id for c in pub.comentarios] == [1]

    def test_borrar_comentario_con_likes(self, comments, publications, pub_id):
        uno = comments.add_comment(pub_id, "bob", "uno").value
        dos = comments.add_comment(pub_id, "bob", "dos").value
        for _ in range(3):
            comments.update_like(pub_id, dos.id, True)
        comments.update_like(pub_id, uno.id, True)
        assert _reload(publications, pub_id).popularidad == 4

        result = comments.delete_comment(pub_id, dos.id)
        assert result.ok
        assert result.value == {
            "id": pub_id,
            "comentarios": _reload(publications, pub_id).comments_as_dicts(),
            "popularidad": 1,
        }
        pub = _reload(publications, pub_id)
        assert pub.popularidad == 1 == _likes_sum(pub)

    def test_borrado_sin_piso_en_cero(self, comments, publications, store, pub_id):
        """Con popularidad desfasada, el borrado puede dejarla negativa."""
        comment = comments.add_comment(pub_id, "bob", "uno").value
        for _ in range(3):
            comments.update_like(pub_id, comment.id, True)
        store.update(pub_id, {"popularidad": 1})

        result = comments.delete_comment(pub_id, comment.id)
        assert result.value["popularidad"] == -2

    def test_comentario_inexistente(self, comments, pub_id):
        assert comments.delete_comment(pub_id, "7").error == ErrorKind.NOT_FOUND

    def test_id_no_numerico(self, comments, pub_id):
        comments.add_comment(pub_id, "bob", "uno")
        assert comments.delete_comment(pub_id, "abc").error == ErrorKind.NOT_FOUND

    def test_id_con_formato_raro_no_borra(self, comments, publications, pub_id):
        """Ids como "1_0" o dígitos de ancho completo no apuntan a ningún comentario."""
        for i in range(10):
            comments.add_comment(pub_id, "bob", f"c{i}")

        assert comments.delete_comment(pub_id, "1_0").error == ErrorKind.NOT_FOUND
        assert comments.update_like(pub_id, "１", True).error == ErrorKind.NOT_FOUND

        pub = _reload(publications, pub_id)
        assert [c.id for c in pub.comentarios] == list(range(1, 11))
        assert pub.popularidad == 0

    def test_publicacion_inexistente(self, comments):
        assert comments.delete_comment("no-existe", "1").error == ErrorKind.NOT_FOUND


# ================================================================
# Likes
# ================================================================

class TestLikes:
    def test_like_dos_veces(self, comments, publications, pub_id):
        comment = comments.add_comment(pub_id, "bob", "hello").value
        comments.update_like(pub_id, comment.id, True)
        result = comments.update_like(pub_id, comment.id, True)

        assert result.ok
        assert result.value["success"] is True
        assert result.value["popularidad"] == 2
        assert result.value["comentarios"][0]["likes"] == 2
        pub = _reload(publications, pub_id)
        assert pub.popularidad == 2 == _likes_sum(pub)

    def test_unlike(self, comments, publications, pub_id):
        comment = comments.add_comment(pub_id, "bob", "hello").value
        comments.update_like(pub_id, comment.id, True)
        result = comments.update_like(pub_id, comment.id, False)
        assert result.value["popularidad"] == 0
        assert _reload(publications, pub_id).comentarios[0].likes == 0

    def test_unlike_en_cero_se_rechaza(self, comments, publications, pub_id):
        comment = comments.add_comment(pub_id, "bob", "hello").value
        result = comments.update_like(pub_id, comment.id, False)
        assert result.error == ErrorKind.INVALID_STATE
        pub = _reload(publications, pub_id)
        assert pub.comentarios[0].likes == 0
        assert pub.popularidad == 0

    def test_unlike_recorta_popularidad_en_cero(self, comments, publications, store, pub_id):
        """El comentario baja su like aunque popularidad ya esté en 0."""
        comment = comments.add_comment(pub_id, "bob", "hello").value
        comments.update_like(pub_id, comment.id, True)
        store.update(pub_id, {"popularidad": 0})

        result = comments.update_like(pub_id, comment.id, False)
        assert result.ok
        assert result.value["popularidad"] == 0
        assert result.value["comentarios"][0]["likes"] == 0

    def test_likes_en_varios_comentarios(self, comments, publications, pub_id):
        a = comments.add_comment(pub_id, "bob", "a").value
        b = comments.add_comment(pub_id, "carol", "b").value
        comments.update_like(pub_id, a.id, True)
        comments.update_like(pub_id, b.id, True)
        comments.update_like(pub_id, b.id, True)
        comments.update_like(pub_id, b.id, False)
        pub = _reload(publications, pub_id)
        assert [c.likes for c in pub.comentarios] == [1, 1]
        assert pub.popularidad == 2 == _likes_sum(pub)

    def test_comentario_inexistente(self, comments, pub_id):
        result = comments.update_like(pub_id, "3", True)
        assert result.error == ErrorKind.NOT_FOUND

    def test_publicacion_inexistente(self, comments):
        result = comments.update_like("no-existe", "1", True)
        assert result.error == ErrorKind.NOT_FOUND


class TestParseCommentId:
    @pytest.mark.parametrize("raw,expected", [
        ("1", 1), (" 2 ", 2), (3, 3), ("abc", None), ("", None),
        ("1.5", None), (True, None), (None, None),
        ("1_0", None), ("１", None), ("-3", -3),
    ])
    def test_parse(self, raw, expected):
        assert parse_comment_id(raw) == expected
