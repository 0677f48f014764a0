"""Verificação do bearer token (emitido pelo serviço de auth) e helpers de requisição."""
from __future__ import annotations
import jwt
from flask import g, request
from kink import di
from ..core import errors
from ..core.settings import Settings
from ..domain.access import is_manager

def authenticate() -> None:
    """before_request dos blueprints: decodifica o JWT e popula g.user."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise errors.token_required()
    s = di[Settings]
    try:
        claims = jwt.decode(token.strip(), s.jwt_secret, algorithms=[s.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise errors.token_expired() from exc
    except jwt.InvalidTokenError as exc:
        raise errors.token_invalid() from exc
    if claims.get("userId") is None:
        raise errors.token_invalid()
    g.user = {
        "userId": int(claims["userId"]),
        "level": int(claims.get("level") or 0),
        "username": claims.get("username"),
    }

def current_user() -> dict:
    return g.user

def require_manager() -> None:
    if not is_manager(current_user()):
        raise errors.forbidden("Apenas gerentes podem executar esta ação")

def client_ip() -> str | None:
    return request.headers.get("X-Forwarded-For", request.remote_addr or "").split(",")[0].strip() or None

def parse_id(value: str, resource: str) -> int:
    if not value.isdigit() or int(value) <= 0:
        raise errors.invalid_id(resource)
    return int(value)

def json_body() -> dict:
    """Corpo JSON como dict; ausente vira {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise errors.invalid_input("Corpo da requisição deve ser um objeto JSON")
    return data
