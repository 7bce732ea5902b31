"""Generation of random refresh tokens."""

from __future__ import annotations

import hashlib
import os

_RANDOM_BYTES = 64
_DIGEST_BYTES = 32


def random_token() -> str:
    """Return a new refresh token: a hex SHAKE-128 digest of random bytes."""
    seed = os.urandom(_RANDOM_BYTES)
    return hashlib.shake_128(seed).hexdigest(_DIGEST_BYTES)