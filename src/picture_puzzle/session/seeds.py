from __future__ import annotations

import hashlib
import random
import re
import string
from typing import Optional

SEED_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
SEED_LENGTH = 16
MIN_SEED_LENGTH = 8

_SEED_RE = re.compile(r"[A-Za-z0-9]+")


def generate_game_seed(rng: Optional[random.Random] = None) -> str:
    """Client-side session seed: 16 alphanumeric characters."""
    rng = rng or random.Random()
    return "".join(rng.choice(SEED_ALPHABET) for _ in range(SEED_LENGTH))


def is_valid_seed(seed) -> bool:
    if not isinstance(seed, str):
        return False
    if len(seed) < MIN_SEED_LENGTH:
        return False
    return _SEED_RE.fullmatch(seed) is not None


def seed_to_int(seed: str) -> int:
    """Map a session seed string onto the 32-bit generator seed.

    First four bytes of the SHA-256 digest, big-endian, so the backend can
    recompute the board from the seed it was sent.
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")
