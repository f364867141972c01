"""Seedable RNG wrapper for deterministic map generation."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for deterministic layouts.

    All randomness used to prepare a match goes through this class so the
    same seed always yields the same map. Turn resolution itself never
    draws random numbers.
    """

    def __init__(self, seed: int | str):
        """Initialize RNG with given seed.

        Args:
            seed: Integer or string seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence."""
        return self.rng.choice(seq)
