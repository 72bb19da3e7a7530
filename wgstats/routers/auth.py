import jwt
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from wgstats.core.config import settings
from wgstats.utils.jwt import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
)

router = APIRouter(tags=["auth"])

METRICS_SCOPES = ["metrics:read", "metrics:gather"]


class LoginRequest(BaseModel):
    username: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def _issue(sub: str) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(sub=sub, scopes=METRICS_SCOPES),
        refresh_token=create_refresh_token(sub=sub),
    )


@router.post("/login", response_model=TokenPair)
def login(req: LoginRequest):
    if (
        req.username != settings.ADMIN_USERNAME
        or req.password != settings.ADMIN_PASSWORD
    ):
        raise HTTPException(status_code=401, detail="Неверные учетные данные")
    return _issue(req.username)


@router.post("/refresh", response_model=TokenPair)
def refresh(req: RefreshRequest):
    try:
        payload = decode_token(req.refresh_token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Неверный или просроченный токен")
    if payload.get("type") != REFRESH:
        raise HTTPException(status_code=401, detail="Неверный тип токена")
    return _issue(payload["sub"])
