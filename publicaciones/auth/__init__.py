"""auth/ — Contraseñas, tokens y gate de autenticación."""
