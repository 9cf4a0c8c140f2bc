"""
Prime-sized, separately chained hash set and its capacity policy.
"""

from .errors import CapacityExhaustedError, ConcurrentModificationError, HashSetError
from .prime_capacity import (
    DEFAULT_LOAD_FACTOR,
    MAX_CAPACITY,
    MIN_CAPACITY,
    PRIMES,
    PrimeCapacityPolicy,
)
from .prime_hashset import BucketState, PrimeHashSet, PrimeHashSetIterator

__all__ = [
    "BucketState",
    "CapacityExhaustedError",
    "ConcurrentModificationError",
    "DEFAULT_LOAD_FACTOR",
    "HashSetError",
    "MAX_CAPACITY",
    "MIN_CAPACITY",
    "PRIMES",
    "PrimeCapacityPolicy",
    "PrimeHashSet",
    "PrimeHashSetIterator",
]
