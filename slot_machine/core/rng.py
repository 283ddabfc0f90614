import secrets
import random
from typing import Optional


class TrueRNG:
    """
    A wrapper around Python's `secrets` module to provide cryptographically strong
    random numbers for reel draws.
    """

    @staticmethod
    def random_int(min_val: int, max_val: int) -> int:
        """Returns a random integer in the range [min_val, max_val] (inclusive)."""
        # secrets.randbelow(n) returns [0, n). So we need (max - min + 1)
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return min_val + secrets.randbelow(max_val - min_val + 1)


class SeededRNG:
    """
    Reproducible random source for simulations and tests.
    Same seed, same sequence of draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random_int(self, min_val: int, max_val: int) -> int:
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return self._random.randint(min_val, max_val)


def make_rng(seed: Optional[int] = None):
    """Seeded source when a seed is configured, otherwise the secure one."""
    if seed is None:
        return TrueRNG()
    return SeededRNG(seed)


rng = TrueRNG()
