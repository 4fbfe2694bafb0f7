"""Seeded dice helpers. The generator is always passed in, so tests can fix the outcome."""

import random
from typing import Optional

from src.ludo.rules import DICE_FACES


def build_rng(seed: Optional[int] = None) -> random.Random:
    """Return a (deterministic when seeded) random generator."""
    return random.Random(seed)


def roll_die(rng: random.Random) -> int:
    """Uniform integer in [1, DICE_FACES]."""
    return rng.randint(1, DICE_FACES)


def is_valid_roll(value: int) -> bool:
    return 1 <= value <= DICE_FACES
