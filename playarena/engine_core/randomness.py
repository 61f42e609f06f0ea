"""
Randomness - Injectable random source for engines.

Every engine draws shuffles, spawns and ids from its own random.Random.
Passing a seeded instance makes a whole game reproducible.
"""

from __future__ import annotations
import random
import string

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def make_rng(seed: int | None = None) -> random.Random:
    """Create a random source, seeded if a seed is given."""
    return random.Random(seed)


def generate_id(rng: random.Random) -> str:
    """Short base-36 id, unique enough for tiles and gems within one game."""
    return "".join(rng.choices(ID_ALPHABET, k=ID_LENGTH))
