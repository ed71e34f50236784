"""
Password hashing for application users.

Hashes are PBKDF2-HMAC-SHA256 with 100,000 iterations, a 16-byte random salt
and a 32-byte derived key, stored as base64(salt + key).
"""
import base64
import binascii
import hashlib
import secrets

from django.utils.crypto import constant_time_compare, pbkdf2

ITERATIONS = 100_000
SALT_SIZE = 16
HASH_SIZE = 32


def _derive(password: str, salt: bytes) -> bytes:
    return pbkdf2(password, salt, ITERATIONS, dklen=HASH_SIZE, digest=hashlib.sha256)


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(SALT_SIZE)
    return base64.b64encode(salt + _derive(password, salt)).decode('ascii')


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Recompute the hash with the stored salt and compare in constant time.
    Malformed stored values never verify.
    """
    try:
        raw = base64.b64decode(stored_hash, validate=True)
    except (binascii.Error, ValueError):
        return False

    if len(raw) != SALT_SIZE + HASH_SIZE:
        return False

    salt, expected = raw[:SALT_SIZE], raw[SALT_SIZE:]
    return constant_time_compare(_derive(password, salt), expected)
