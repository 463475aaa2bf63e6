"""
API request and response models for Chirpy REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
chirps/models.py, which own the internal domain representation. Route
handlers map between the two.

hashed_password has no response-model field anywhere in this module, so it
cannot leak through serialization.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User
from chirps.models import Chirp

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


# ---------------------------------------------------------------------------
# Users and login
# ---------------------------------------------------------------------------


class UserCreate(BaseModel):
    """Request body for POST /api/users."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /api/login.

    expires_in_seconds is optional. Values above Settings.token_expire_seconds
    are clamped to it by the route; the model only rejects non-positive values.
    """

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)
    expires_in_seconds: Optional[int] = Field(default=None, gt=0)


class UserResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at or "",
            updated_at=user.updated_at or "",
        )


class LoginResponse(UserResponse):
    """Response for POST /api/login: the user plus a bearer token."""

    token: str
    token_type: str = "bearer"
    expires_in: int


# ---------------------------------------------------------------------------
# Chirps
# ---------------------------------------------------------------------------


class ChirpCreate(BaseModel):
    """Request body for POST /api/chirps.

    The 140-character limit is checked in the route, not here, so an
    over-long chirp gets the dedicated chirp_too_long error rather than a
    generic validation error.
    """

    body: str


class ChirpResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    body: str
    user_id: uuid.UUID
    created_at: str
    updated_at: str

    @classmethod
    def from_chirp(cls, chirp: Chirp) -> "ChirpResponse":
        return cls(
            id=chirp.id,
            body=chirp.body,
            user_id=chirp.user_id,
            created_at=chirp.created_at or "",
            updated_at=chirp.updated_at or "",
        )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


class ResetResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    chirps_deleted: int
    users_deleted: int
