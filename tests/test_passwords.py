"""Unit tests for auth/passwords.py -- bcrypt hashing and verification.

Covers:
- hash then verify succeeds for the originating password
- a different password fails with CredentialMismatchError
- hashing is salted: same password, different hashes, both verify
- malformed stored hashes are a mismatch, not a crash
- passwords longer than bcrypt's 72-byte window still hash and stay distinct
- HashingError on primitive failure (invalid cost factor)
- authenticate_user() for known, unknown and wrong-password logins
"""

import bcrypt
import pytest

from auth.errors import CredentialMismatchError, HashingError
from auth.models import User
from auth.passwords import authenticate_user, check_password_hash, hash_password, verify_password
from auth.store import UserStore

# Low cost keeps the suite fast; the algorithm is the same at any cost.
ROUNDS = 4


class TestHashPassword:
    def test_hash_is_self_describing_bcrypt(self) -> None:
        hashed = hash_password("hunter2", rounds=ROUNDS)
        assert hashed.startswith("$2b$04$")

    def test_hash_does_not_contain_plaintext(self) -> None:
        assert "hunter2" not in hash_password("hunter2", rounds=ROUNDS)

    def test_same_password_hashes_differently(self) -> None:
        first = hash_password("correct horse", rounds=ROUNDS)
        second = hash_password("correct horse", rounds=ROUNDS)
        assert first != second
        check_password_hash(first, "correct horse")
        check_password_hash(second, "correct horse")

    def test_invalid_cost_factor_raises_hashing_error(self) -> None:
        with pytest.raises(HashingError):
            hash_password("anything", rounds=3)

    @pytest.mark.parametrize(
        "password", ["", " ", "pässwörd", "emoji 🐦", "a" * 72, "a\x00b", "\ud800", "lone \udfff surrogate"]
    )
    def test_any_content_hashes_and_verifies(self, password: str) -> None:
        hashed = hash_password(password, rounds=ROUNDS)
        check_password_hash(hashed, password)


class TestCheckPasswordHash:
    def test_wrong_password_is_mismatch(self) -> None:
        hashed = hash_password("04234", rounds=ROUNDS)
        with pytest.raises(CredentialMismatchError):
            check_password_hash(hashed, "04235")

    def test_case_matters(self) -> None:
        hashed = hash_password("Secret", rounds=ROUNDS)
        with pytest.raises(CredentialMismatchError):
            check_password_hash(hashed, "secret")

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "$2b$04$short", "plaintext-password", "ünïcode"])
    def test_malformed_stored_hash_is_mismatch(self, stored: str) -> None:
        with pytest.raises(CredentialMismatchError):
            check_password_hash(stored, "whatever")

    def test_verifies_hash_made_by_plain_bcrypt(self) -> None:
        """Hashes written by any standard bcrypt implementation keep verifying."""
        stored = bcrypt.hashpw(b"legacy-password", bcrypt.gensalt(rounds=ROUNDS)).decode()
        check_password_hash(stored, "legacy-password")


class TestLongPasswords:
    def test_long_password_round_trip(self) -> None:
        password = "x" * 200
        check_password_hash(hash_password(password, rounds=ROUNDS), password)

    def test_long_password_with_lone_surrogates(self) -> None:
        password = "\ud800" * 40
        hashed = hash_password(password, rounds=ROUNDS)
        check_password_hash(hashed, password)
        with pytest.raises(CredentialMismatchError):
            check_password_hash(hashed, "\udfff" * 40)

    def test_shared_72_byte_prefix_does_not_collide(self) -> None:
        prefix = "p" * 72
        hashed = hash_password(prefix + "A", rounds=ROUNDS)
        with pytest.raises(CredentialMismatchError):
            check_password_hash(hashed, prefix + "B")

    def test_long_password_does_not_match_its_prefix(self) -> None:
        prefix = "p" * 72
        hashed = hash_password(prefix + "tail", rounds=ROUNDS)
        with pytest.raises(CredentialMismatchError):
            check_password_hash(hashed, prefix)


class TestVerifyPassword:
    def test_bool_wrapper(self) -> None:
        hashed = hash_password("pw", rounds=ROUNDS)
        assert verify_password("pw", hashed) is True
        assert verify_password("nope", hashed) is False
        assert verify_password("pw", "garbage") is False


class TestAuthenticateUser:
    @pytest.fixture
    def store(self):
        s = UserStore("sqlite:///:memory:")
        s.create_user(User(email="saul@bettercall.com", hashed_password=hash_password("jimmy", rounds=ROUNDS)))
        yield s
        s.close()

    def test_correct_credentials_return_user(self, store: UserStore) -> None:
        user = authenticate_user(store, "saul@bettercall.com", "jimmy", rounds=ROUNDS)
        assert user.email == "saul@bettercall.com"

    def test_wrong_password(self, store: UserStore) -> None:
        with pytest.raises(CredentialMismatchError):
            authenticate_user(store, "saul@bettercall.com", "slippin", rounds=ROUNDS)

    def test_unknown_email_is_indistinguishable_mismatch(self, store: UserStore) -> None:
        with pytest.raises(CredentialMismatchError):
            authenticate_user(store, "kim@wexler.com", "jimmy", rounds=ROUNDS)
