"""Session actor identifiers."""

from __future__ import annotations

import re

ACTOR_ID_PREFIX = "charon:user:"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


class ActorID(str):
    """Globally unique actor identifier in the form "charon:user:<user_id>"."""

    @classmethod
    def from_user_id(cls, user_id: int) -> ActorID:
        return cls(f"{ACTOR_ID_PREFIX}{user_id}")

    def user_id(self) -> int:
        """Return the user id encoded in the identifier, or raise ValueError."""
        if len(self) < 13:
            raise ValueError("charon: session actor id to short, min length 13 characters")
        prefix = str(self)[:12]
        if prefix != ACTOR_ID_PREFIX:
            raise ValueError(
                f"charon: session actor id wrong prefix expected {ACTOR_ID_PREFIX}, got {prefix}"
            )
        digits = str(self)[12:]
        if not _DECIMAL.fullmatch(digits):
            raise ValueError(f"charon: invalid user id {digits!r}")
        value = int(digits)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"charon: user id {digits!r} out of range")
        return value