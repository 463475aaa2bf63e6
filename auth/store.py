"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper (same as chirps/store.py).
UserStore is the repository; _row_to_user is the mapper.
Route and dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.
  hashed_password is read and written here and nowhere logged.

IDs are uuid4 values generated in auth/models.py and stored as their
canonical 36-character string form, so the same schema works on SQLite and
PostgreSQL without a dialect-specific UUID type.

Layer rule: no imports from api/ or chirps/. Engine setup comes from core/db.py.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Column, MetaData, String, Table, Text, func, select
from sqlalchemy.engine import Engine

from auth.models import User
from core.db import DEFAULT_DB_URL, make_engine, now_iso

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("hashed_password", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore()
        store.create_user(User(email="a@example.com", hashed_password=hash_password("secret")))
        user = store.get_by_email("a@example.com")
        store.close()
    """

    def __init__(self, db_url: str = DEFAULT_DB_URL) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def create_user(self, user: User) -> User:
        """Insert a new user and return it with timestamps filled in.

        Raises sqlalchemy.exc.IntegrityError if the email is already
        registered. POST /api/users turns that into a 409.
        """
        now = now_iso()
        with self.engine.connect() as conn:
            conn.execute(
                _users.insert().values(
                    id=str(user.id),
                    email=user.email,
                    hashed_password=user.hashed_password,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
        return User(
            id=user.id,
            email=user.email,
            hashed_password=user.hashed_password,
            created_at=now,
            updated_at=now,
        )

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == str(user_id))).fetchone()
        return _row_to_user(row) if row is not None else None

    def count_users(self) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(_users)).scalar()
        return result or 0

    def delete_all_users(self) -> int:
        """Delete every user. Returns the number of rows removed.

        Used only by POST /admin/reset in dev mode. Callers must clear
        chirps first (ChirpStore.delete_all_chirps) so no chirp is left
        pointing at a missing author.
        """
        with self.engine.connect() as conn:
            result = conn.execute(_users.delete())
            conn.commit()
        return result.rowcount

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=uuid.UUID(row.id),
        email=row.email,
        hashed_password=row.hashed_password,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
