"""
api/routes/users.py -- Registration and login endpoints.

Routes:
  POST /api/users  -- register with email + password; 201 with the new user
  POST /api/login  -- password login; 200 with the user and a bearer token

Security:
  Passwords are hashed with bcrypt before they reach the store and are
  never echoed back or logged.
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_email() + check_password_hash().
  Unknown email and wrong password return the same 401 body.
  Cache-Control: no-store on login responses (they carry a token).
"""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from api.models import LoginRequest, LoginResponse, UserCreate, UserResponse
from auth.errors import CredentialMismatchError, HashingError
from auth.models import User
from auth.passwords import authenticate_user, hash_password
from auth.store import UserStore
from auth.tokens import make_jwt
from core.config import get_settings

logger = logging.getLogger("chirpy.api.users")

# Auth policy: both routes are public -- they are how a client gets a token.
router = APIRouter()


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(request: Request, body: UserCreate) -> UserResponse:
    """Register a new account.

    Sync handler: bcrypt is CPU-bound, so FastAPI runs this in its thread
    pool instead of blocking the event loop.
    """
    settings = get_settings()
    user_store: UserStore = request.app.state.user_store

    try:
        hashed = hash_password(body.password, rounds=settings.bcrypt_rounds)
    except HashingError as exc:
        logger.error("Password hashing failed during registration: %s", exc.code)
        raise HTTPException(
            status_code=500,
            detail={"code": exc.code, "message": "Could not create user."},
        ) from exc

    try:
        user = user_store.create_user(User(email=body.email, hashed_password=hashed))
    except IntegrityError as exc:
        raise HTTPException(
            status_code=409,
            detail={"code": "conflict", "message": "A user with that email already exists."},
        ) from exc

    logger.info("Registered user %s", user.id)
    return UserResponse.from_user(user)


@router.post("/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password and issue a bearer token.

    Token lifetime is the client's expires_in_seconds when given, capped at
    Settings.token_expire_seconds.
    """
    settings = get_settings()
    user_store: UserStore = request.app.state.user_store

    try:
        user = authenticate_user(user_store, body.email, body.password, rounds=settings.bcrypt_rounds)
    except CredentialMismatchError:
        resp = JSONResponse(
            status_code=401,
            content={"error": {"code": "bad_credentials", "message": "Incorrect email or password."}},
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    lifetime = settings.token_expire_seconds
    if body.expires_in_seconds is not None:
        lifetime = min(body.expires_in_seconds, lifetime)

    token = make_jwt(user.id, settings.secret_key, timedelta(seconds=lifetime))
    logger.info("User %s logged in", user.id)
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            id=user.id,
            email=user.email,
            created_at=user.created_at or "",
            updated_at=user.updated_at or "",
            token=token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            expires_in=lifetime,
        ).model_dump(mode="json"),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp
