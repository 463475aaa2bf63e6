"""
core/db.py -- Engine construction shared by the SQLAlchemy Core stores.

auth/store.py and chirps/store.py each own their schema; both build their
engine here so SQLite gets the same connect args and per-connection WAL
pragma, and both stamp rows with the same timestamp format.

Layer rule: core/ is the kernel. This module may not import from api/,
auth/ or chirps/.
"""

from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'chirpy.db'}"


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Create an engine for db_url, with thread sharing and WAL for SQLite."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
    return engine


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string (the stored timestamp format)."""
    return datetime.now(timezone.utc).isoformat()
