"""Deterministic pseudo-random source built on the minimal standard LCG."""

import math

_MULTIPLIER = 48271
_MODULUS = 2**31 - 1


class Random:
    """A minimal-standard linear congruential generator with fuzzing helpers."""

    def __init__(self, seed: int) -> None:
        state = seed % _MODULUS
        self._state = state if state else 1

    def next_raw(self) -> int:
        """Advance the generator and return its next raw value."""
        self._state = (self._state * _MULTIPLIER) % _MODULUS
        return self._state

    def below(self, n: int) -> int:
        """Return a value in ``[0, n)``, or 0 when ``n`` is 0."""
        if n == 0:
            return 0
        return self.next_raw() % n

    def between(self, low: int, high: int) -> int:
        """Return a value in the closed range ``[low, high]``; needs ``low < high``."""
        if not low < high:
            raise ValueError(f"empty range: low={low!r} must be below high={high!r}")
        return self.below(high - low + 1) + low

    def rand_bool(self) -> int:
        """Return 0 or 1."""
        return self.next_raw() % 2

    def skew_towards_last(self, n: int) -> int:
        """Return a value in ``[0, n)`` biased towards larger values."""
        return int(math.sqrt(self.below(n * n)))