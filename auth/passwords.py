"""
auth/passwords.py -- bcrypt password hashing and verification.

bcrypt is used directly (no passlib wrapper). The output is the standard
self-describing `$2b$<cost>$<salt+digest>` string, so the cost factor and
salt travel with the hash and old hashes keep verifying after the default
cost is raised.

72-byte limit: bcrypt only consumes the first 72 bytes of its input and
bcrypt 5.x refuses longer inputs outright. Passwords up to 72 UTF-8 bytes
are hashed unchanged; longer ones are first reduced to base64(sha256(raw)),
a fixed 44-byte string. The same reduction runs on verify, so any password
verifies against its own hash and two long passwords that only share a
72-byte prefix do not collide.

authenticate_user() always runs bcrypt, even for an unknown email, so login
latency does not reveal which emails are registered.

Nothing here logs. Callers decide what, if anything, to record.

Layer rule: no imports from api/, chirps/ or core/.
"""

from __future__ import annotations

import base64
import hashlib
from functools import lru_cache
from typing import TYPE_CHECKING

import bcrypt

from auth.errors import CredentialMismatchError, HashingError

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

DEFAULT_ROUNDS = 12

_BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    raw = plain.encode("utf-8", "surrogatepass")
    if len(raw) <= _BCRYPT_MAX_BYTES:
        return raw
    return base64.b64encode(hashlib.sha256(raw).digest())


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    Two calls with the same password return different strings (fresh salt
    each time); both verify against the password.

    Raises:
        HashingError: the bcrypt primitive failed (e.g. an invalid cost factor).
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(_password_bytes(plain), salt)
    except ValueError as exc:
        raise HashingError("bcrypt could not hash the password") from exc
    return hashed.decode("ascii")


def check_password_hash(hashed: str, plain: str) -> None:
    """Raise CredentialMismatchError unless `plain` matches the stored bcrypt hash.

    A malformed or non-bcrypt stored hash is reported as a mismatch, not a
    crash. The digest comparison itself is bcrypt's constant-time check.
    """
    try:
        stored = hashed.encode("ascii")
        ok = bcrypt.checkpw(_password_bytes(plain), stored)
    except (ValueError, TypeError, AttributeError) as exc:
        raise CredentialMismatchError("stored credential is not a usable bcrypt hash") from exc
    if not ok:
        raise CredentialMismatchError("password does not match")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        check_password_hash(hashed, plain)
    except CredentialMismatchError:
        return False
    return True


# Timing equalization dummy hash, one per cost factor. Cached so only the
# first unknown-email login per cost pays for generating it.
@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password("chirpy_timing_dummy", rounds=rounds)


# ---------------------------------------------------------------------------
# User authentication (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, email: str, password: str, rounds: int = DEFAULT_ROUNDS) -> User:
    """Return the user for a correct email/password pair.

    Always runs bcrypt whether or not the email is registered, so response
    time does not reveal which emails have accounts:
    - Unknown email: bcrypt runs against a dummy hash of cost `rounds`
    - Wrong password: bcrypt runs against the stored hash

    Raises:
        CredentialMismatchError: unknown email or wrong password. The two
            cases are deliberately indistinguishable to the caller.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _dummy_hash(rounds))
        raise CredentialMismatchError("email or password does not match")
    check_password_hash(user.hashed_password, password)
    return user
