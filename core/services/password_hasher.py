# =============================================================================
# core/services/password_hasher.py - Password Hashing
# =============================================================================
# bcrypt with a fresh random salt per hash. The salt and cost factor are
# stored inside the hash string, so verification needs nothing else.
# =============================================================================

import bcrypt

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Salted one-way password hashing."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash. A malformed hash never matches."""
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
