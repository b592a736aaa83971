"""
auth_routes.py — Registro y login.

Endpoints:
    POST /auth/register — {username, password} → 201 {message, userId}
    POST /auth/login    — {username, password} → 200 {token, info}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from publicaciones.auth.service import AuthService
from publicaciones.web.responses import error_response

router = APIRouter(prefix="/auth")


class CredentialsBody(BaseModel):
    username: Any = None
    password: Any = None


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@router.post("/register")
def register(request: Request, body: CredentialsBody | None = None):
    body = body or CredentialsBody()
    auth: AuthService = request.app.state.auth_service

    result = auth.register(_as_text(body.username), _as_text(body.password))
    if not result.ok:
        return error_response(result)
    return JSONResponse(
        content={"message": result.message, "userId": result.value},
        status_code=201,
    )


@router.post("/login")
def login(request: Request, body: CredentialsBody | None = None):
    body = body or CredentialsBody()
    auth: AuthService = request.app.state.auth_service

    result = auth.login(_as_text(body.username), _as_text(body.password))
    if not result.ok:
        return error_response(result)
    return result.value
