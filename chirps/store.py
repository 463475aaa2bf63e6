"""
chirps/store.py -- SQLAlchemy Core persistence layer for chirps.

Pattern: Repository + Data Mapper (same as auth/store.py). ChirpStore is the
repository; _row_to_chirp is the mapper. Route handlers never touch SQL
directly.

Chirps and users normally share one database (Settings.db_url), but each
store owns its own MetaData so either can be pointed at a different URL in
tests. user_id is therefore a plain indexed column rather than a foreign key;
POST /api/chirps only ever writes the id of an authenticated user.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ChirpStore()
    chirp = store.create_chirp(Chirp(body="hello", user_id=user.id))
    chirps = store.list_chirps()
    store.close()
"""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Index, MetaData, String, Table
from sqlalchemy.engine import Engine

from chirps.models import Chirp
from core.db import DEFAULT_DB_URL, make_engine, now_iso

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_chirps = Table(
    "chirps",
    _metadata,
    Column("id", String(36), primary_key=True),
    Column("body", String(255), nullable=False),
    Column("user_id", String(36), nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("ix_chirps_user_id", "user_id"),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ChirpStore:
    def __init__(self, db_url: str = DEFAULT_DB_URL) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def create_chirp(self, chirp: Chirp) -> Chirp:
        """Insert a chirp and return it with timestamps filled in.

        The body is stored as given. Length checks and word filtering happen
        in the route layer before this is called.
        """
        now = now_iso()
        with self.engine.connect() as conn:
            conn.execute(
                _chirps.insert().values(
                    id=str(chirp.id),
                    body=chirp.body,
                    user_id=str(chirp.user_id),
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
        return Chirp(id=chirp.id, body=chirp.body, user_id=chirp.user_id, created_at=now, updated_at=now)

    def get_chirp(self, chirp_id: uuid.UUID) -> Chirp | None:
        """Look up a chirp by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_chirps.select().where(_chirps.c.id == str(chirp_id))).fetchone()
        return _row_to_chirp(row) if row is not None else None

    def list_chirps(self) -> list[Chirp]:
        """Return every chirp, oldest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(_chirps.select().order_by(_chirps.c.created_at, _chirps.c.id)).fetchall()
        return [_row_to_chirp(r) for r in rows]

    def delete_all_chirps(self) -> int:
        """Delete every chirp. Returns the number of rows removed."""
        with self.engine.connect() as conn:
            result = conn.execute(_chirps.delete())
            conn.commit()
        return result.rowcount

    def close(self) -> None:
        self.engine.dispose()


def _row_to_chirp(row) -> Chirp:
    return Chirp(
        id=uuid.UUID(row.id),
        body=row.body,
        user_id=uuid.UUID(row.user_id),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
