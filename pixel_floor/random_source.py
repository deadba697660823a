"""
Seeded random stream for floor generation.

Every random decision of one generation call goes through a single
SeededRandom, so a seed string always rebuilds the exact same floor.
"""

import math
import random
import string

ID_CHARACTERS = string.ascii_uppercase + string.ascii_lowercase + string.digits
SEED_LENGTH = 10


class SeededRandom:
    """Deterministic [0, 1) number stream built from a string seed"""

    def __init__(self, seed: str):
        self.seed = seed
        self._rng = random.Random(seed)
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        return self._rng.random()

    def next_int(self, minimum: float, maximum: float) -> int:
        """Random integer mapped onto [minimum, maximum)"""
        return math.floor(self.next() * (maximum - minimum) + minimum)


def make_id(length: int = SEED_LENGTH) -> str:
    """Random alphanumeric seed, not reproducible on purpose"""
    return ''.join(random.choice(ID_CHARACTERS) for _ in range(length))
