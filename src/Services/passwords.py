# src/Services/passwords.py
"""
Password hashing for administrator accounts (passlib + bcrypt).

The cost factor comes from settings.PASSWORD_BCRYPT_ROUNDS and is embedded in
every hash, so changing the setting only affects hashes created afterwards.
"""

from passlib.context import CryptContext

from src.Core.config import settings


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its stored hash.

    A malformed or empty stored hash counts as a mismatch instead of an error,
    so a corrupted row simply cannot log in.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False
