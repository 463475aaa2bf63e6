"""
api/routes/chirps.py -- Chirp creation and listing.

Routes:
  POST /api/chirps       -- create a chirp as the token's user (bearer auth)
  GET  /api/chirps       -- list all chirps, oldest first (public)
  GET  /api/chirps/{id}  -- single chirp; 404 if unknown (public)

The author is always the subject of the bearer token, never a field in the
request body, so a client cannot post on someone else's behalf.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import ChirpCreate, ChirpResponse
from auth.dependencies import get_current_user_id
from auth.store import UserStore
from chirps.models import MAX_CHIRP_LENGTH, Chirp
from chirps.moderation import clean_body
from chirps.store import ChirpStore

logger = logging.getLogger("chirpy.api.chirps")

router = APIRouter()


@router.post("/chirps", response_model=ChirpResponse, status_code=201)
def create_chirp(
    request: Request,
    body: ChirpCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> ChirpResponse:
    """Validate, filter and store a chirp for the authenticated user."""
    user_store: UserStore = request.app.state.user_store
    chirp_store: ChirpStore = request.app.state.chirp_store

    if len(body.body) > MAX_CHIRP_LENGTH:
        raise HTTPException(
            status_code=400,
            detail={"code": "chirp_too_long", "message": f"Chirp is longer than {MAX_CHIRP_LENGTH} characters."},
        )

    # A valid token can outlive its user (POST /admin/reset).
    if user_store.get_by_id(user_id) is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Authentication required."},
        )

    chirp = chirp_store.create_chirp(Chirp(body=clean_body(body.body), user_id=user_id))
    logger.info("User %s created chirp %s", user_id, chirp.id)
    return ChirpResponse.from_chirp(chirp)


@router.get("/chirps", response_model=list[ChirpResponse])
def list_chirps(request: Request) -> list[ChirpResponse]:
    chirp_store: ChirpStore = request.app.state.chirp_store
    return [ChirpResponse.from_chirp(c) for c in chirp_store.list_chirps()]


@router.get("/chirps/{chirp_id}", response_model=ChirpResponse)
def get_chirp(request: Request, chirp_id: uuid.UUID) -> ChirpResponse:
    chirp_store: ChirpStore = request.app.state.chirp_store
    chirp = chirp_store.get_chirp(chirp_id)
    if chirp is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "not_found", "message": "Chirp not found."},
        )
    return ChirpResponse.from_chirp(chirp)
