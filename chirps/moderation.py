"""
chirps/moderation.py -- Word filter applied to chirp bodies before storage.

Matching is whole-word and case-insensitive on single-space boundaries, so
"Kerfuffle!" (trailing punctuation) is left alone while "KERFUFFLE" is not.
"""

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})

_REPLACEMENT = "****"


def clean_body(body: str) -> str:
    """Return `body` with every profane word replaced by ****."""
    words = body.split(" ")
    return " ".join(_REPLACEMENT if word.lower() in PROFANE_WORDS else word for word in words)
