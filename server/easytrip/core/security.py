"""One-way salted password hashing for account credentials."""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


class PasswordHasher:
    """
    PBKDF2-HMAC-SHA256 password hasher.

    Encoded hashes look like ``pbkdf2_sha256$<iterations>$<salt>$<digest>``
    with hex salt and digest, so the iteration count can be raised later
    without invalidating stored accounts.
    """

    def __init__(self, iterations: int):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations

    def _derive(self, password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)

    def hash(self, password: str) -> str:
        """Hash a cleartext password with a fresh random salt."""
        salt = secrets.token_bytes(SALT_BYTES)
        digest = self._derive(password, salt, self.iterations)
        return f"{ALGORITHM}${self.iterations}${salt.hex()}${digest.hex()}"

    def verify(self, password: str, encoded: str) -> bool:
        """
        Check a cleartext password against an encoded hash.

        Returns False for malformed hashes instead of raising, and compares
        digests in constant time.
        """
        try:
            algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
            if algorithm != ALGORITHM or not iterations.isdigit():
                return False
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
            rounds = int(iterations)
        except ValueError:
            return False
        if rounds < 1:
            return False

        candidate = self._derive(password, salt, rounds)
        return hmac.compare_digest(candidate, expected)
