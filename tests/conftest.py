"""
Pytest configuration and fixtures for PrimeHashSet tests.

This file contains shared fixtures and configuration for all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class Collider:
    """Element with a caller-chosen hash, to force chains into one bucket."""

    def __init__(self, value, hash_value: int = 42):
        self.value = value
        self.hash_value = hash_value

    def __hash__(self):
        return self.hash_value

    def __eq__(self, other):
        return isinstance(other, Collider) and self.value == other.value

    def __repr__(self):
        return f"Collider({self.value!r}, {self.hash_value})"


@pytest.fixture
def sample_elements():
    """Provide a consistent set of integer elements for testing."""
    return [10, 20, 30, 40, 50]


@pytest.fixture
def sample_usernames():
    """Provide a consistent set of string elements for testing."""
    return ["alice", "bob", "charlie", "diana", "eve", "frank", "grace"]


@pytest.fixture
def populated_set():
    """A PrimeHashSet grown one add at a time to 50 integers."""
    from src.data_structures.prime_hashset import PrimeHashSet

    hashset = PrimeHashSet()
    for i in range(50):
        hashset.add(i)
    return hashset


@pytest.fixture
def collider_cls():
    return Collider


def assert_table_invariants(hashset):
    """Check the structural invariants that must hold after every mutation."""
    from src.data_structures.prime_capacity import PRIMES

    table = hashset._table
    assert hashset.capacity == PRIMES[hashset.capacity_index]
    assert len(table) == hashset.capacity

    chains = [chain for chain in table if chain is not None]
    # absent buckets are None, never empty lists
    assert all(len(chain) > 0 for chain in chains)
    assert sum(len(chain) for chain in chains) == len(hashset)

    for index, chain in enumerate(table):
        if chain is None:
            continue
        for position, element in enumerate(chain):
            assert abs(hash(element)) % hashset.capacity == index
            assert element not in chain[position + 1 :]

    assert len(hashset) / hashset.capacity <= hashset.load_factor


@pytest.fixture
def check_invariants():
    return assert_table_invariants


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# Custom collection modifiers
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "integration" in item.nodeid or "test_integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        # Match whole words of the test name
        words = getattr(item, "originalname", item.name).split("_")
        if any(keyword in words for keyword in ["performance", "stress"]):
            item.add_marker(pytest.mark.slow)

        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# Pytest options
def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="run slow tests"
    )


def pytest_runtest_setup(item):
    """Setup for individual test runs."""
    # Skip slow tests unless --run-slow is passed
    if "slow" in item.keywords and not item.config.getoption("--run-slow"):
        pytest.skip("need --run-slow option to run")
