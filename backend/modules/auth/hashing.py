"""
Password hashing with bcrypt.

Hashes embed their own salt and cost, so verification needs nothing but the
stored string. Both operations are pure and safe to call from any thread.
"""

import bcrypt

DEFAULT_COST_FACTOR = 10


class PasswordHasher:
    """One-way hashing of user passwords with a fixed bcrypt work factor."""

    def __init__(self, cost_factor: int = DEFAULT_COST_FACTOR) -> None:
        if not 4 <= cost_factor <= 31:
            raise ValueError(f"bcrypt cost factor must be between 4 and 31, got {cost_factor}")
        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash(self, secret: str) -> str:
        """Hash ``secret`` with a fresh random salt."""
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(secret.encode("utf-8"), salt).decode("ascii")

    def verify(self, secret: str, hashed: str) -> bool:
        """
        Check ``secret`` against a stored hash.

        Returns False instead of raising when the stored hash is malformed
        or the secret cannot be checked.
        """
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, TypeError, AttributeError):
            return False
