"""
bcrypt hashing through passlib.

Run:
    pytest tests/test_passwords.py -v
"""

import pytest

from src.Services.passwords import hash_password, verify_password


def test_hash_round_trip():
    hashed = hash_password("correct horse")
    assert hashed.startswith("$2")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_same_password_gets_different_salts():
    assert hash_password("pw") != hash_password("pw")


@pytest.mark.parametrize("stored", ["", None, "not-a-hash", "$2b$12$truncated"])
def test_malformed_stored_hash_is_a_mismatch(stored):
    assert verify_password("anything", stored) is False
