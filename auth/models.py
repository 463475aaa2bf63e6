"""
auth/models.py -- Domain dataclass for the user account.

Pattern: Data class (pure data container, zero logic). Mirrors
chirps/models.py -- dataclasses own domain shape; stores and routes do the
work.

Layer rule: no imports from api/, chirps/ or core/.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass
class User:
    """A registered account.

    id is assigned here (uuid4) rather than by the database, so the store
    never has to read back a generated key. It is the subject of every
    bearer token issued for this user and never changes.

    hashed_password is the bcrypt string from auth.passwords.hash_password().
    It must never be logged or returned by the API.
    """

    email: str
    hashed_password: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: str | None = None
    updated_at: str | None = None
