"""
In-memory hash set with prime-sized capacity and separate chaining.

Layout:
- table: list of slots, len(table) == PRIMES[capacity_index]
- slot: None (absent bucket) or a non-empty list (chain) of elements
- index(e) = abs(hash(e)) % capacity, recomputed after every resize

Grow/shrink timing is delegated to PrimeCapacityPolicy; every grow or shrink
rebuilds the whole table at the new size.
"""

from collections.abc import Collection, Iterable, Iterator, MutableSet
from enum import Enum
from typing import Generic, Optional, TypeVar

from .errors import ConcurrentModificationError
from .prime_capacity import DEFAULT_LOAD_FACTOR, PRIMES, PrimeCapacityPolicy

E = TypeVar("E")


class BucketState(Enum):
    ABSENT = "absent"
    POPULATED = "populated"


class PrimeHashSet(MutableSet, Generic[E]):
    """
    Hash set of unique elements backed by a prime-sized bucket table.

    Elements must be hashable and not None. Iteration visits buckets in
    ascending index order and, within a bucket, elements in insertion order.
    Any structural change invalidates iterators created before it.
    """

    def __init__(
        self,
        elements: Optional[Iterable[E]] = None,
        initial_capacity: Optional[int] = None,
        load_factor: float = DEFAULT_LOAD_FACTOR,
    ):
        """
        Initialize the set, optionally filled from an iterable.

        Args:
            elements: Initial elements (duplicates are collapsed)
            initial_capacity: Requested bucket count, rounded up to a prime.
                When filling from elements, None or 0 sizes the table from
                the number of elements instead.
            load_factor: Maximum size / capacity ratio before growing
        """
        self._policy = PrimeCapacityPolicy(load_factor)

        if elements is not None and not isinstance(elements, Collection):
            elements = list(elements)

        requested = 0 if initial_capacity is None else initial_capacity
        self._capacity_index = self._policy.initial_index(requested)
        if elements is not None and requested == 0:
            self._capacity_index = self._policy.collection_index(len(elements))

        self._table: list[Optional[list[E]]] = [None] * PRIMES[self._capacity_index]
        self._size = 0
        self._mod_count = 0
        self.grow_count = 0
        self.shrink_count = 0

        if elements is not None:
            self.add_all(elements)

    @classmethod
    def from_iterable(
        cls, elements: Iterable[E], load_factor: float = DEFAULT_LOAD_FACTOR
    ) -> "PrimeHashSet[E]":
        """Build a set holding the distinct elements of a required iterable."""
        if elements is None:
            raise ValueError("Source collection cannot be None")
        return cls(elements, load_factor=load_factor)

    @property
    def capacity(self) -> int:
        """Current number of buckets (always a prime from PRIMES)."""
        return len(self._table)

    @property
    def capacity_index(self) -> int:
        return self._capacity_index

    @property
    def load_factor(self) -> float:
        return self._policy.load_factor

    def _index_of(self, element: E) -> int:
        if element is None:
            raise ValueError("Element cannot be None")
        return abs(hash(element)) % len(self._table)

    def _resize(self, new_index: int) -> None:
        """Rehash every element into a table sized PRIMES[new_index]."""
        capacity = PRIMES[new_index]
        new_table: list[Optional[list[E]]] = [None] * capacity

        for chain in self._table:
            if chain is None:
                continue
            for element in chain:
                index = abs(hash(element)) % capacity
                bucket = new_table[index]
                if bucket is None:
                    new_table[index] = [element]
                else:
                    bucket.append(element)

        self._table = new_table
        self._capacity_index = new_index
        self._mod_count += 1

    def _maybe_shrink(self) -> None:
        if self._policy.should_shrink(self._size, self._capacity_index):
            self._resize(self._policy.shrink(self._capacity_index))
            self.shrink_count += 1

    @staticmethod
    def _require_collection(collection) -> Collection:
        if collection is None:
            raise ValueError("Collection cannot be None")
        if not isinstance(collection, Collection):
            collection = list(collection)
        return collection

    def contains(self, element: E) -> bool:
        """
        Test whether an equal element is in the set.

        Args:
            element: The element to look up

        Returns:
            True if present, False otherwise
        """
        chain = self._table[self._index_of(element)]
        return chain is not None and element in chain

    def __contains__(self, element: object) -> bool:
        """Support 'in' operator. None is never a member."""
        if element is None:
            return False
        return self.contains(element)

    def add(self, element: E) -> bool:
        """
        Insert element. Return True if inserted, False if already present.
        """
        index = self._index_of(element)
        chain = self._table[index]
        if chain is None:
            self._table[index] = [element]
        elif element in chain:
            return False
        else:
            chain.append(element)

        self._size += 1
        self._mod_count += 1

        if self._policy.should_grow(self._size, self._capacity_index):
            self._resize(self._policy.grow(self._capacity_index))
            self.grow_count += 1
        return True

    def remove(self, element: E) -> bool:
        """
        Delete element. Return True if removed, False if it was not present.
        """
        index = self._index_of(element)
        chain = self._table[index]
        if chain is None or element not in chain:
            return False

        chain.remove(element)
        if not chain:
            self._table[index] = None
        self._size -= 1
        self._mod_count += 1

        self._maybe_shrink()
        return True

    def discard(self, element: E) -> None:
        self.remove(element)

    def add_all(self, elements: Iterable[E]) -> bool:
        """Add every element; True if the set gained at least one."""
        elements = self._require_collection(elements)
        before = self._size
        for element in elements:
            self.add(element)
        return self._size > before

    def remove_all(self, elements: Iterable[E]) -> bool:
        """Remove every listed element; True if any was present."""
        elements = self._require_collection(elements)
        if elements is self:
            changed = self._size > 0
            self.clear()
            return changed

        changed = False
        for element in elements:
            if self.remove(element):
                changed = True
        return changed

    def retain_all(self, elements: Iterable[E]) -> bool:
        """
        Keep only elements also contained in `elements` (in-place intersection).

        Shrink is evaluated once after the full pass rather than per removal.

        Args:
            elements: Collection of elements to keep; must not contain None

        Returns:
            True if any element was removed
        """
        keep = self._require_collection(elements)
        if keep is self:
            return False
        if any(item is None for item in keep):
            raise ValueError("Collection cannot contain None")

        modified = False
        for index, chain in enumerate(self._table):
            if chain is None:
                continue
            survivors = [element for element in chain if element in keep]
            if len(survivors) == len(chain):
                continue
            self._size -= len(chain) - len(survivors)
            self._table[index] = survivors or None
            modified = True

        if modified:
            self._mod_count += 1
            self._maybe_shrink()
        return modified

    def contains_all(self, elements: Iterable[E]) -> bool:
        elements = self._require_collection(elements)
        return all(self.contains(element) for element in elements)

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        """Remove all elements and reset to the smallest prime capacity."""
        self._capacity_index = 0
        self._table = [None] * PRIMES[0]
        self._size = 0
        self._mod_count += 1

    def bucket_state(self, index: int) -> BucketState:
        if self._table[index] is None:
            return BucketState.ABSENT
        return BucketState.POPULATED

    def __iter__(self) -> Iterator[E]:
        return PrimeHashSetIterator(self)

    def iterator(self) -> Iterator[E]:
        return iter(self)

    def to_list(self) -> list[E]:
        """Snapshot of the elements in iteration order."""
        return [
            element for chain in self._table if chain is not None for element in chain
        ]

    def hash_code(self) -> int:
        """
        Sum of element hashes. Equal sets always produce equal values, whatever
        their capacity or insertion order.
        """
        return sum(hash(element) for element in self.to_list())

    def clone(self) -> "PrimeHashSet[E]":
        """
        Independent copy with the same capacity and load factor.

        Chains are copied; the elements themselves are shared.
        """
        clone = self.__class__(
            initial_capacity=self.capacity, load_factor=self.load_factor
        )
        clone._table = [
            list(chain) if chain is not None else None for chain in self._table
        ]
        clone._capacity_index = self._capacity_index
        clone._size = self._size
        return clone

    def __copy__(self) -> "PrimeHashSet[E]":
        return self.clone()

    def get_stats(self) -> dict:
        """
        Get statistics about the bucket table.

        Returns:
            Dictionary with table statistics
        """
        chain_lengths = [len(chain) for chain in self._table if chain is not None]
        populated = len(chain_lengths)

        return {
            "capacity": self.capacity,
            "capacity_index": self._capacity_index,
            "size": self._size,
            "load_factor": self.load_factor,
            "current_load": self._size / self.capacity,
            "populated_buckets": populated,
            "empty_buckets": self.capacity - populated,
            "longest_chain": max(chain_lengths, default=0),
            "average_chain_length": self._size / populated if populated else 0.0,
            "grow_count": self.grow_count,
            "shrink_count": self.shrink_count,
        }

    def __str__(self) -> str:
        if self._size == 0:
            return "{ }"
        return "{" + ", ".join(str(element) for element in self.to_list()) + "}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.to_list()!r}, "
            f"capacity={self.capacity}, load_factor={self.load_factor})"
        )


class PrimeHashSetIterator(Generic[E]):
    """
    One-pass iterator over a PrimeHashSet.

    Captures the set's modification count at creation and raises
    ConcurrentModificationError on the next step after any structural change.
    """

    def __init__(self, owner: PrimeHashSet[E]):
        self._owner = owner
        self._expected_mod_count = owner._mod_count
        self._bucket = 0
        self._position = 0

    def __iter__(self) -> "PrimeHashSetIterator[E]":
        return self

    def __next__(self) -> E:
        if self._owner._mod_count != self._expected_mod_count:
            raise ConcurrentModificationError("Set changed during iteration")

        table = self._owner._table
        while self._bucket < len(table):
            chain = table[self._bucket]
            if chain is not None and self._position < len(chain):
                element = chain[self._position]
                self._position += 1
                return element
            self._bucket += 1
            self._position = 0
        raise StopIteration
