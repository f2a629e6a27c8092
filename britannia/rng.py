"""A Mersenne Twister random number generator with savable state."""

from __future__ import annotations

import time

_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_MASK = 0xFFFFFFFF


class RNG:
    """Random number generator whose state is a seed plus a draw count."""

    def __init__(self, seed: int | None = None) -> None:
        self._table = [0] * _N
        self._index = 0
        self._original_seed = 0
        self._generated = 0
        if seed is None:
            self.seed_from_system_timer()
        else:
            self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reseed the generator and reset the draw count."""
        seed &= _MASK
        table = [seed]
        for _ in range(1, _N):
            table.append((69069 * table[-1]) & _MASK)
        self._table = table
        self._index = _N
        self._original_seed = seed
        self._generated = 0

    def seed_from_system_timer(self) -> None:
        """Seed from the current time in seconds."""
        self.seed(int(time.time()))

    def _twist(self) -> None:
        table = self._table
        for kk in range(_N):
            y = (table[kk] & _UPPER_MASK) | (table[(kk + 1) % _N] & _LOWER_MASK)
            table[kk] = (
                table[(kk + _M) % _N] ^ (y >> 1) ^ (_MATRIX_A if y & 1 else 0)
            )
        self._index = 0

    def random(self, n: int) -> int:
        """Return a number in [0, n); 0 when n is 0."""
        n &= _MASK
        if n == 0:
            return 0
        if self._index >= _N:
            self._twist()
        y = self._table[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        self._generated += 1
        return y % n

    def random_range(self, low: int, high: int) -> int:
        """Return a number between low and high, inclusive."""
        return self.random((high - low + 1) & _MASK) + low

    def random_range_float(self, low: float, high: float) -> float:
        """Return a float in [low, high]."""
        fraction = self.random(_MASK) / float(_MASK)
        return fraction * (high - low) + low

    def random_float(self, high: float) -> float:
        """Return a float between 0 and high."""
        return self.random_range_float(0.0, high)

    def get_state(self) -> tuple[int, int]:
        """Return (original seed, number of values drawn)."""
        return self._original_seed, self._generated

    def set_state(self, seed: int, index: int) -> None:
        """Restore a state produced by get_state."""
        self.seed(seed)
        for _ in range(index):
            self.random(_MASK)

    def original_seed(self) -> int:
        """Return the seed the generator was last seeded with."""
        return self._original_seed