"""
auth/dependencies.py -- FastAPI Depends() helpers for bearer authentication.

Clients send the token returned by POST /api/login as
    Authorization: Bearer <token>

get_bearer_token() extracts it; get_current_user_id() verifies it with the
process-wide SECRET_KEY and returns the subject UUID. Every verification
failure (bad signature, expired, malformed subject) becomes the same 401 so
clients learn nothing about why a token was refused. The failure code is
logged; the token itself never is.

Layer rule: no imports from api/ or chirps/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system,
  and from core.config for the token secret.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import HTTPException, Request

from auth.errors import TokenVerificationError
from auth.tokens import validate_jwt
from core.config import get_settings

logger = logging.getLogger("chirpy.auth")

_UNAUTHORIZED = {"code": "unauthorized", "message": "Authentication required."}


def get_bearer_token(request: Request) -> str | None:
    """Return the token from an `Authorization: Bearer` header, or None.

    The scheme is matched case-insensitively; surrounding whitespace around
    the token is ignored. An empty token counts as absent.
    """
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def get_current_user_id(request: Request) -> uuid.UUID:
    """Require a valid bearer token. Raises HTTP 401 otherwise.

    Use as a FastAPI dependency:
        @router.post("/chirps")
        async def route(user_id: uuid.UUID = Depends(get_current_user_id)): ...
    """
    token = get_bearer_token(request)
    if token is None:
        raise HTTPException(status_code=401, detail=_UNAUTHORIZED)
    try:
        return validate_jwt(token, get_settings().secret_key)
    except TokenVerificationError as exc:
        logger.info("Rejected bearer token on %s %s: %s", request.method, request.url.path, exc.code)
        raise HTTPException(status_code=401, detail=_UNAUTHORIZED) from exc
