"""
auth/errors.py -- Typed failure outcomes for the credential and token core.

Every rejection is a distinct exception class so callers can branch on the
kind of failure without parsing messages. Each class carries a short
machine-readable `code`; route handlers log that code and never the token
or hash that caused it.

Hierarchy:
  AuthError
    CredentialError
      HashingError             -- bcrypt primitive failed (not the password's fault)
      CredentialMismatchError  -- wrong password or unusable stored hash
    TokenVerificationError
      InvalidSignatureError    -- bad signature, tampered or malformed token
      TokenExpiredError        -- exp claim at or before now
      InvalidSubjectError      -- sub claim is not a UUID

Layer rule: stdlib only.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for every failure raised by auth/passwords.py and auth/tokens.py."""

    code: str = "auth_error"


class CredentialError(AuthError):
    code = "credential_error"


class HashingError(CredentialError):
    """The hashing primitive failed internally. Never raised for password content."""

    code = "hashing_failed"


class CredentialMismatchError(CredentialError):
    code = "credential_mismatch"


class TokenVerificationError(AuthError):
    """A bearer token was rejected. Route handlers map every subclass to 401."""

    code = "invalid_token"


class InvalidSignatureError(TokenVerificationError):
    code = "invalid_signature"


class TokenExpiredError(TokenVerificationError):
    code = "token_expired"


class InvalidSubjectError(TokenVerificationError):
    code = "invalid_subject"
