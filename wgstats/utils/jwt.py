import time
from typing import Any, Dict

import jwt

from wgstats.core.config import settings

ACCESS = "access"
REFRESH = "refresh"


def _now() -> int:
    return int(time.time())


def _encode(sub: str, token_type: str, ttl: int, **extra) -> str:
    now = _now()
    payload = {
        "sub": sub,
        "iat": now,
        "nbf": now - 5,
        "exp": now + ttl,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": token_type,
        **extra,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_access_token(sub: str, scopes: list[str] | None = None) -> str:
    return _encode(sub, ACCESS, settings.JWT_ACCESS_TTL, scopes=scopes or [])


def create_refresh_token(sub: str) -> str:
    return _encode(sub, REFRESH, settings.JWT_REFRESH_TTL)


def decode_token(token: str) -> Dict[str, Any]:
    """Бросает jwt.PyJWTError, если токен битый, просрочен или чужой."""
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
