"""
api/routes/admin.py -- Development-only maintenance endpoint.

Routes:
  POST /admin/reset -- delete every chirp and user and zero the hit counter

Only available when DEBUG=true; returns 403 otherwise. There is no admin
role in Chirpy, so dev mode is the only guard.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from api.models import ResetResponse
from auth.store import UserStore
from chirps.store import ChirpStore
from core.config import get_settings
from core.metrics import HitCounter

logger = logging.getLogger("chirpy.api.admin")

router = APIRouter()


@router.post("/reset", response_model=ResetResponse)
def reset(request: Request) -> ResetResponse:
    """Wipe all data. Chirps go first so none outlive their author."""
    if not get_settings().debug:
        raise HTTPException(
            status_code=403,
            detail={"code": "forbidden", "message": "Reset is only allowed in development mode."},
        )
    user_store: UserStore = request.app.state.user_store
    chirp_store: ChirpStore = request.app.state.chirp_store
    hits: HitCounter = request.app.state.hits

    chirps_deleted = chirp_store.delete_all_chirps()
    users_deleted = user_store.delete_all_users()
    hits.reset()
    logger.warning("Reset: deleted %d chirps and %d users", chirps_deleted, users_deleted)
    return ResetResponse(chirps_deleted=chirps_deleted, users_deleted=users_deleted)
