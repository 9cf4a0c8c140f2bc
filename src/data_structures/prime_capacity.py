"""
Capacity policy for prime-sized hash tables.

Table sizes are drawn from a fixed ascending sequence of primes that roughly
doubles at each step. Prime moduli spread hash codes sharing low-order bit
patterns across more buckets than power-of-two sizes do.

- Grow: count / capacity > load_factor  -> advance one prime
- Shrink: count <= capacity // 4        -> retreat one prime (never below 17)
"""

import math

from .errors import CapacityExhaustedError

# fmt: off
PRIMES = (
    17, 23, 29, 37, 47, 59, 71, 89, 107, 131, 163, 197, 239, 293, 353, 431,
    521, 631, 761, 919, 1103, 1327, 1597, 1931, 2333, 2801, 3371, 4049, 4861,
    5839, 7013, 8419, 10103, 12143, 14591, 17519, 21023, 25229, 30293, 36353,
    43627, 52361, 62851, 75431, 90523, 108631, 130363, 156437, 187751, 225307,
    270371, 324449, 389357, 467237, 560689, 672827, 807403, 968897, 1162687,
    1395263, 1674319, 2009191, 2411033, 2893249, 3471899, 4166287, 4999559,
    5999471, 7199369, 8639249, 10367087, 12440513, 14928671, 17914409,
)
# fmt: on

MIN_CAPACITY = PRIMES[0]
MAX_CAPACITY = PRIMES[-1]
DEFAULT_LOAD_FACTOR = 0.75


def prime_index_for(capacity: int) -> int:
    """Index of the smallest prime >= capacity, clamped to the largest prime."""
    for i, prime in enumerate(PRIMES):
        if prime >= capacity:
            return i
    return len(PRIMES) - 1


def capacity_for_collection(count: int, load_factor: float) -> int:
    """Capacity needed to hold `count` elements without an immediate grow."""
    return max(math.ceil(count / load_factor) + 1, 1)


def validate_load_factor(load_factor: float) -> float:
    if isinstance(load_factor, bool) or not isinstance(load_factor, (int, float)):
        raise ValueError(f"Load factor must be a number, got {load_factor!r}")
    if math.isnan(load_factor) or math.isinf(load_factor) or load_factor <= 0:
        raise ValueError("Load factor must be positive and finite")
    return float(load_factor)


class PrimeCapacityPolicy:
    """
    Decides table sizes and grow/shrink timing for a PrimeHashSet.

    The policy is stateless apart from the load factor; the caller owns the
    current capacity index and passes it in.
    """

    def __init__(self, load_factor: float = DEFAULT_LOAD_FACTOR):
        self.load_factor = validate_load_factor(load_factor)

    def initial_index(self, capacity: int) -> int:
        """
        Index of the table size used for a requested initial capacity.

        Args:
            capacity: Requested number of buckets (>= 0)

        Returns:
            Index into PRIMES
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError(f"Initial capacity must be an int, got {capacity!r}")
        if capacity < 0:
            raise ValueError("Initial capacity must be non-negative")
        return prime_index_for(capacity)

    def collection_index(self, count: int) -> int:
        """Index of the table size used when building from `count` elements."""
        return prime_index_for(capacity_for_collection(count, self.load_factor))

    def should_grow(self, count: int, index: int) -> bool:
        return count / PRIMES[index] > self.load_factor

    def grow(self, index: int) -> int:
        if index + 1 >= len(PRIMES):
            raise CapacityExhaustedError(
                f"Cannot grow past maximum capacity {MAX_CAPACITY:,}"
            )
        return index + 1

    def should_shrink(self, count: int, index: int) -> bool:
        return index > 0 and count <= PRIMES[index] // 4

    def shrink(self, index: int) -> int:
        # Single step back, floored at the smallest prime.
        return max(index - 1, 0)

    def __repr__(self) -> str:
        return f"PrimeCapacityPolicy(load_factor={self.load_factor})"
