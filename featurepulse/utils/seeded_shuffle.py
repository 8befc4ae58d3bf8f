"""
Deterministic, per-device list ordering.

Listing feature requests in server order rewards whatever happens to be on
top. Each device instead gets its own stable permutation, seeded from its
device id, so the order differs between users but not between refreshes.

The constants are fixed so every client implementation produces the same
order for the same seed:

- seed: djb2 over the UTF-8 bytes (``h = h * 33 + byte``, start 5381),
  wrapped to 64 bits;
- generator: LCG ``state = (state * 1103515245 + 12345) & 0x7FFFFFFF``;
- Fisher-Yates from the last index down to 1, swap index ``next() % (i + 1)``.
"""
from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

UINT64_MASK = 0xFFFFFFFFFFFFFFFF
DJB2_START = 5381
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF


def seed_from_string(seed: str) -> int:
    h = DJB2_START
    for byte in seed.encode("utf-8"):
        h = ((h << 5) + h + byte) & UINT64_MASK
    return h


class SeededRandomGenerator:
    def __init__(self, seed: int):
        self.state = seed & UINT64_MASK

    def next(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.state


def shuffle_with_seed(items: Sequence[T], seed: str) -> List[T]:
    """Return a new list holding a seed-stable permutation of ``items``."""
    shuffled = list(items)
    if len(shuffled) < 2:
        return shuffled

    rng = SeededRandomGenerator(seed_from_string(seed))
    for index in range(len(shuffled) - 1, 0, -1):
        swap_index = rng.next() % (index + 1)
        shuffled[index], shuffled[swap_index] = shuffled[swap_index], shuffled[index]

    return shuffled
