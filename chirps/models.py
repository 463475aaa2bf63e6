"""
chirps/models.py -- Domain dataclass for a chirp (short post).

Layer rule: no imports from api/.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

# Longest accepted chirp body, in characters, before filtering.
MAX_CHIRP_LENGTH = 140


@dataclass
class Chirp:
    body: str
    user_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: str | None = None
    updated_at: str | None = None
