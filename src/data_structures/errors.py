class HashSetError(Exception):
    """Base class for PrimeHashSet failures that are not argument errors."""


class CapacityExhaustedError(HashSetError, RuntimeError):
    """Raised when a grow is requested past the largest supported prime."""


class ConcurrentModificationError(HashSetError, RuntimeError):
    """Raised when a set is structurally modified during iteration."""
