"""Unit tests for core/db.py -- engine setup shared by both stores."""

from datetime import datetime

from sqlalchemy import text

from auth.store import UserStore
from chirps.store import ChirpStore
from core.config import Settings
from core.db import DEFAULT_DB_URL, make_engine, now_iso


def test_file_database_uses_wal(tmp_path) -> None:
    engine = make_engine(f"sqlite:///{tmp_path / 'wal.db'}")
    with engine.connect() as conn:
        mode = conn.execute(text("PRAGMA journal_mode")).scalar()
    engine.dispose()
    assert mode.lower() == "wal"


def test_stores_share_one_file_database(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'shared.db'}"
    users, chirps = UserStore(url), ChirpStore(url)
    try:
        with users.engine.connect() as conn:
            tables = set(conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'")).scalars())
        assert {"users", "chirps"} <= tables
    finally:
        chirps.close()
        users.close()


def test_default_url_is_the_settings_default(monkeypatch) -> None:
    monkeypatch.delenv("DB_URL", raising=False)
    assert Settings(debug=True, _env_file=None).db_url == DEFAULT_DB_URL


def test_now_iso_is_aware_utc() -> None:
    stamp = datetime.fromisoformat(now_iso())
    assert stamp.utcoffset().total_seconds() == 0
