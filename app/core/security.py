"""
Password hashing and verification utilities.

Hashes are PBKDF2-HMAC-SHA256 with a 16-byte random salt and a 32-byte
derived key, stored as base64(salt || key).
"""

import base64
import binascii
import hashlib
import hmac
import secrets

SALT_SIZE = 16
KEY_SIZE = 32
# Not stored in the hash; changing it invalidates every existing password
ITERATIONS = 10000


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
        dklen=KEY_SIZE,
    )


def hash_password(password: str) -> str:
    """
    Hash a plain password.

    Args:
        password: Plain text password

    Returns:
        Base64 string of the 48-byte salt + derived key
    """
    salt = secrets.token_bytes(SALT_SIZE)
    key = _derive(password, salt, ITERATIONS)
    return base64.b64encode(salt + key).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Args:
        plain_password: Plain text password from user input
        hashed_password: Previously hashed password from database

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        raw = base64.b64decode(hashed_password.encode("ascii"), validate=True)
    except (binascii.Error, ValueError):
        return False

    if len(raw) != SALT_SIZE + KEY_SIZE:
        return False

    salt, stored_key = raw[:SALT_SIZE], raw[SALT_SIZE:]
    computed = _derive(plain_password, salt, ITERATIONS)
    return hmac.compare_digest(computed, stored_key)
