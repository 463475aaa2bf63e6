"""
auth/tokens.py -- Bearer token issuance and verification.

Security design decisions:
  JWT: python-jose with HS256. A token carries exactly the registered claims
       iss ("chirpy"), iat, exp and sub (the user's UUID in canonical form).
       No role or profile data travels in the token; the route layer loads
       whatever else it needs from the store.

  Claims: TokenClaims is the single typed shape for the claim set. Issuing
       renders it to a payload dict; verifying parses the payload back into
       it, so the subject is a real uuid.UUID by construction rather than a
       string someone hopes is a UUID.

  Verification order is fixed: signature, then expiry, then subject shape.
       jose's own claim checks are switched off so each stage raises its own
       error class (auth/errors.py) and a token that fails the signature
       check never reaches the claim parser. Expiry is inclusive: a token
       whose exp equals the current second is already expired.

  Secrets are passed in by the caller (usually Settings.secret_key). This
       module holds no state and does no I/O, so calls are safe to run
       concurrently from any number of threads.

Nothing here logs: token strings are credentials and must not end up in
diagnostic output. The route layer logs the error code only.

Layer rule: no imports from api/, chirps/ or core/.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.errors import InvalidSignatureError, InvalidSubjectError, TokenExpiredError

ISSUER = "chirpy"

_ALGORITHM = "HS256"

# Only the signature is checked by jose; claims are validated below in order.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_aud": False,
    "verify_iat": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


@dataclass(frozen=True)
class TokenClaims:
    """The claim set signed into every bearer token."""

    issuer: str
    subject: uuid.UUID
    issued_at: datetime | None
    expires_at: datetime

    def to_payload(self) -> dict:
        payload: dict = {
            "iss": self.issuer,
            "sub": str(self.subject),
            "exp": int(self.expires_at.timestamp()),
        }
        if self.issued_at is not None:
            payload["iat"] = int(self.issued_at.timestamp())
        return payload


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_secret(secret: str | bytes) -> None:
    if not secret:
        raise ValueError("token secret must be a non-empty string or bytes value")


def _is_numeric(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _from_timestamp(value: float) -> datetime:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return datetime.max.replace(tzinfo=timezone.utc) if value > 0 else datetime.min.replace(tzinfo=timezone.utc)


def _parse_subject(value) -> uuid.UUID:
    if not isinstance(value, str):
        raise InvalidSubjectError("subject claim is missing or not a string")
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise InvalidSubjectError("subject claim is not a valid UUID") from exc


# ---------------------------------------------------------------------------
# Issue
# ---------------------------------------------------------------------------


def make_jwt(
    user_id: uuid.UUID,
    secret: str | bytes,
    expires_in: timedelta,
    *,
    now: datetime | None = None,
) -> str:
    """Return a signed HS256 token asserting `user_id` for `expires_in`.

    Args:
        user_id:    The subject. Must already be trusted by the caller; this
                    function does not authenticate it.
        secret:     Server-held HMAC key. Empty secrets are rejected.
        expires_in: Token lifetime. A negative value yields a token that is
                    already expired.
        now:        Issue time. Defaults to the current UTC time.

    Raises:
        ValueError: empty secret.
    """
    _check_secret(secret)
    issued_at = now if now is not None else _utcnow()
    claims = TokenClaims(
        issuer=ISSUER,
        subject=user_id,
        issued_at=issued_at,
        expires_at=issued_at + expires_in,
    )
    return jwt.encode(claims.to_payload(), secret, algorithm=_ALGORITHM)


# ---------------------------------------------------------------------------
# Verify
# ---------------------------------------------------------------------------


def decode_jwt(token: str, secret: str | bytes, *, now: datetime | None = None) -> TokenClaims:
    """Verify a token and return its parsed claim set.

    Checks run in this order and stop at the first failure:
      1. signature and encoding     -> InvalidSignatureError
      2. exp claim at or before now -> TokenExpiredError
         (a token without a numeric exp is treated as expired)
      3. sub claim is a UUID        -> InvalidSubjectError

    Raises:
        ValueError: empty secret.
    """
    _check_secret(secret)
    try:
        payload = jwt.decode(token, secret, algorithms=[_ALGORITHM], options=_DECODE_OPTIONS)
    except JWTError as exc:
        raise InvalidSignatureError("token signature or encoding is invalid") from exc

    current = now if now is not None else _utcnow()
    exp = payload.get("exp")
    if not _is_numeric(exp):
        raise TokenExpiredError("token has no usable expiration claim")
    if exp <= current.timestamp():
        raise TokenExpiredError("token has expired")

    subject = _parse_subject(payload.get("sub"))

    iat = payload.get("iat")
    iss = payload.get("iss")
    return TokenClaims(
        issuer=iss if isinstance(iss, str) else "",
        subject=subject,
        issued_at=_from_timestamp(iat) if _is_numeric(iat) else None,
        expires_at=_from_timestamp(exp),
    )


def validate_jwt(token: str, secret: str | bytes, *, now: datetime | None = None) -> uuid.UUID:
    """Verify a token and return the user UUID it asserts.

    Raises InvalidSignatureError, TokenExpiredError or InvalidSubjectError;
    see decode_jwt() for the order in which they are checked.
    """
    return decode_jwt(token, secret, now=now).subject
