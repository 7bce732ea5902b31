"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

MIN_COST = 4
MAX_COST = 31


class CostOutOfRangeError(ValueError):
    """Raised when a bcrypt cost lies outside the allowed range."""

    def __init__(self) -> None:
        super().__init__("password: bcrypt cost out of range")


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


class BCryptHasher:
    """Hashes and checks passwords with bcrypt at a fixed cost."""

    def __init__(self, cost: int) -> None:
        if not MIN_COST <= cost <= MAX_COST:
            raise CostOutOfRangeError()
        self._cost = cost

    @property
    def cost(self) -> int:
        return self._cost

    def hash(self, plain_password: bytes | str) -> bytes:
        """Return the bcrypt hash of the given password."""
        salt = bcrypt.gensalt(rounds=self._cost, prefix=b"2a")
        return bcrypt.hashpw(_as_bytes(plain_password), salt)

    def compare(self, hashed_password: bytes | str, plain_password: bytes | str) -> bool:
        """Report whether the password matches the hash."""
        try:
            return bcrypt.checkpw(_as_bytes(plain_password), _as_bytes(hashed_password))
        except ValueError:
            return False