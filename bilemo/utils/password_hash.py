"""
Password hashing for login accounts, using argon2.
"""

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

argon2_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password."""
    return argon2_hasher.hash(password)


def verify_password(hashed_password: Optional[str], password: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if not hashed_password:
        return False
    try:
        return argon2_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False


def update_password_hash(hashed_password: Optional[str], password: Optional[str]) -> Optional[str]:
    """
    Return the hash to store after an update.

    The stored hash is kept when no password was sent or when the sent
    password is the current one; otherwise the new password is hashed.
    """
    if password is None or verify_password(hashed_password, password):
        return hashed_password
    return hash_password(password)
