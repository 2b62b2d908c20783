import base64
import hashlib
import hmac
import os

from siswa_directory.core.config import settings

HASH_ALGORITHM = "pbkdf2_sha256"


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def _b64url_decode(raw: str) -> bytes:
    padding = "=" * ((4 - len(raw) % 4) % 4)
    return base64.urlsafe_b64decode(raw + padding)


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )


def hash_password(password: str, *, iterations: int | None = None) -> str:
    """Return a self-describing hash: ``pbkdf2_sha256$<iterations>$<salt>$<digest>``."""
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    digest = _derive(password, salt, rounds)
    return f"{HASH_ALGORITHM}${rounds}${_b64url_encode(salt)}${_b64url_encode(digest)}"


def verify_password(password: str, encoded: str | None) -> bool:
    if not encoded:
        return False
    try:
        algorithm, rounds, salt_b64, digest_b64 = encoded.split("$", 3)
        iterations = int(rounds)
        salt = _b64url_decode(salt_b64)
        expected = _b64url_decode(digest_b64)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM or iterations <= 0:
        return False
    actual = _derive(password, salt, iterations)
    return hmac.compare_digest(actual, expected)
