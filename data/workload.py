import random
import time
from typing import Iterator, Optional

from mimesis import Person
from mimesis.locales import Locale


class ElementGenerator:
    """Generates set workloads: username-like strings via mimesis, or integers."""

    def __init__(self, locale: Locale = Locale.EN, seed: Optional[int] = None):
        self.person = Person(locale=locale, seed=seed)
        self.random = random.Random(seed)
        self.basic = ["C", "c", "U", "u", "L", "l", "D", "d", ""]
        self.connectors = [".", "_", "-", ""]
        # mimesis username masks must contain at least one of these
        required_chars = {"C", "U", "l"}
        patterns_set = set()
        for first in self.basic:
            for second in self.basic:
                for connector in self.connectors:
                    pattern = f"{first}{connector}{second}"
                    if pattern and any(char in pattern for char in required_chars):
                        patterns_set.add(pattern)
        # sorted so a seed reproduces the same sequence across runs
        self.patterns = sorted(patterns_set)
        self.p_idx = 0

    def generate_element(self) -> str:
        """Generate a single string element of at most 20 characters."""
        pattern = self.patterns[self.p_idx]
        self.p_idx = (self.p_idx + 1) % len(self.patterns)
        return self.person.username(mask=pattern, drange=(0, 9999))[:20]

    def generate_batch(self, count: int) -> Iterator[str]:
        """Generate a batch of elements (duplicates possible)."""
        for _ in range(count):
            yield self.generate_element()

    def generate_unique(
        self, count: int, max_attempts: Optional[int] = None
    ) -> list[str]:
        """
        Generate `count` distinct elements, in generation order.

        Args:
            count: Number of distinct elements wanted
            max_attempts: Upper bound on generated candidates (default 20 * count)

        Returns:
            List of distinct strings
        """
        if count < 0:
            raise ValueError("Count must be non-negative")
        if max_attempts is None:
            max_attempts = max(20 * count, 100)

        seen: set[str] = set()
        elements: list[str] = []
        attempts = 0
        start_time = time.time()

        while len(elements) < count:
            if attempts >= max_attempts:
                raise RuntimeError(
                    f"Only {len(elements):,} distinct elements after "
                    f"{attempts:,} attempts"
                )
            candidate = self.generate_element()
            attempts += 1
            if candidate not in seen:
                seen.add(candidate)
                elements.append(candidate)

        if count >= 100_000:
            elapsed = time.time() - start_time
            print(f"Generated {count:,} distinct elements in {elapsed:.1f}s")
        return elements

    def generate_integers(
        self, count: int, low: int = 0, high: Optional[int] = None
    ) -> list[int]:
        """Generate `count` distinct integers drawn from [low, high)."""
        if high is None:
            high = low + max(count * 10, 1)
        if count < 0 or high - low < count:
            raise ValueError(
                f"Cannot draw {count} distinct integers from [{low}, {high})"
            )
        return self.random.sample(range(low, high), count)
