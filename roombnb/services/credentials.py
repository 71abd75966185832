"""Credential service: salted password hashes and bearer tokens."""

import secrets
import string

from passlib.hash import pbkdf2_sha256
from passlib.utils import consteq

SALT_LENGTH = 16
TOKEN_LENGTH = 64
HASH_ROUNDS = 29000
ALPHABET = string.ascii_letters + string.digits


def random_string(length: int) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def new_salt() -> str:
    """Generate a random per-account salt."""
    return random_string(SALT_LENGTH)


def new_token() -> str:
    """Generate a random bearer token."""
    return random_string(TOKEN_LENGTH)


def hash_password(password: str, salt: str) -> str:
    """Derive the stored hash for a password.

    The salt is fixed by the caller, so the same ``(password, salt)`` pair
    always produces the same hash.
    """
    if not password:
        raise ValueError("password must not be empty")
    if not salt:
        raise ValueError("salt must not be empty")
    hasher = pbkdf2_sha256.using(salt=salt.encode("utf-8"), rounds=HASH_ROUNDS)
    return hasher.hash(password)


def verify_password(password: str, salt: str, hashed: str) -> bool:
    """Recompute the hash for ``password`` and compare it to ``hashed``."""
    if not password:
        return False
    return consteq(hash_password(password, salt), hashed)
