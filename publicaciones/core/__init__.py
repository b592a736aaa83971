"""
core/ — Núcleo de la API.

Modulos:
    models.py       -> Publication y Comment
    store.py        -> Document store y credenciales sobre SQLite
    word_filter.py  -> Palabras prohibidas en comentarios
    popularity.py   -> Reglas del contador de popularidad
    publications.py -> Ciclo de vida de publicaciones
    comments.py     -> Comentarios y likes
    errors.py       -> ErrorKind y Result
"""
