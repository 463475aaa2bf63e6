#!/usr/bin/env python3
"""
Chirpy -- short posts with email/password accounts and bearer-token auth.

Usage:
  python main.py
  python main.py --port 9000
  python main.py --host 0.0.0.0 --reload

Environment variables (or .env):
  SECRET_KEY   Token signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG        true enables dev mode: generated SECRET_KEY and POST /admin/reset.
  DB_URL       SQLAlchemy database URL. Defaults to ./chirpy.db (SQLite).
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="chirpy",
        description="Run the Chirpy HTTP server.",
    )
    parser.add_argument("--host", default=settings.host, help=f"bind address (default {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"bind port (default {settings.port})")
    parser.add_argument("--reload", action="store_true", help="restart on code changes (development only)")
    args = parser.parse_args()

    print(f"  Chirpy listening on http://{args.host}:{args.port}")
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
