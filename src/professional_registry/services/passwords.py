"""Password hashing with bcrypt."""

from dataclasses import dataclass

import bcrypt

# bcrypt only looks at the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class BcryptPasswordHasher:
    """Hashes passwords with a per-record bcrypt salt."""

    rounds: int = 12

    def hash(self, password: str) -> str:
        """Return the salted hash for a password."""
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed hash in storage.
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
