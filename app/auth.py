# app/auth.py

import secrets
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings

# auto_error=False so a missing header is a 401, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None:
        return ""
    return credentials.credentials.strip()


def require_barber(token: str = Depends(get_bearer_token)) -> None:
    expected = settings.BARBER_API_KEY
    if not expected or not token:
        raise _unauthorized()
    if not secrets.compare_digest(token.encode(), expected.encode()):
        raise _unauthorized()


def require_customer_token(token: str = Depends(get_bearer_token)) -> str:
    if not token:
        raise _unauthorized()
    return token
