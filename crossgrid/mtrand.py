"""Mersenne Twister (MT19937) pseudo-random number generator."""

from __future__ import annotations

_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_MASK32 = 0xFFFFFFFF
_DEFAULT_SEED = 5489
_UNSEEDED = _N + 1


class MersenneTwister:
    """32-bit Mersenne Twister with a reproducible, seedable sequence.

    A generator created without a seed behaves as if seeded with 5489
    on its first draw.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._state = [0] * _N
        self._index = _UNSEEDED
        if seed is not None:
            self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the generator state from a seed; only its low 32 bits are used."""
        state = self._state
        state[0] = seed & _MASK32
        for i in range(1, _N):
            previous = state[i - 1]
            state[i] = (1812433253 * (previous ^ (previous >> 30)) + i) & _MASK32
        self._index = _N

    def _twist(self) -> None:
        state = self._state
        for k in range(_N):
            y = (state[k] & _UPPER_MASK) | (state[(k + 1) % _N] & _LOWER_MASK)
            mixed = state[(k + _M) % _N] ^ (y >> 1)
            state[k] = mixed ^ _MATRIX_A if y & 1 else mixed
        self._index = 0

    def next_u32(self) -> int:
        """Return the next unsigned 32-bit value."""
        if self._index >= _N:
            if self._index == _UNSEEDED:
                self.seed(_DEFAULT_SEED)
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & _MASK32

    def below(self, bound: int) -> int:
        """Return an integer in ``[0, bound)`` scaled from the next 32-bit draw."""
        if bound < 0:
            raise ValueError("bound must not be negative")
        return int(self.next_u32() / 4294967296.0 * bound)