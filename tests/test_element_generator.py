"""
Tests for ElementGenerator workloads.

Tests cover reproducibility, distinctness, and argument validation.
"""

import pytest
from mimesis.locales import Locale

from data.workload import ElementGenerator


class TestElementGenerator:
    """Test suite for ElementGenerator class."""

    def test_init_default(self):
        """Test default generator initialization."""
        generator = ElementGenerator()
        assert generator.person is not None
        assert len(generator.patterns) > 0
        assert generator.p_idx == 0

    def test_init_with_locale(self):
        """Test initialization with a custom locale."""
        generator = ElementGenerator(locale=Locale.DE, seed=1)
        assert isinstance(generator.generate_element(), str)

    def test_patterns_contain_required_tag(self):
        """Test that every mask contains a mimesis placeholder."""
        generator = ElementGenerator()
        assert all(any(tag in p for tag in "CUl") for p in generator.patterns)

    def test_reproducibility_with_seed(self):
        """Test that equal seeds produce equal elements."""
        first = ElementGenerator(seed=12345)
        second = ElementGenerator(seed=12345)
        assert [first.generate_element() for _ in range(10)] == [
            second.generate_element() for _ in range(10)
        ]

    def test_element_length_constraint(self):
        """Test that generated elements respect the length limit."""
        generator = ElementGenerator(seed=7)
        for _ in range(100):
            element = generator.generate_element()
            assert 0 < len(element) <= 20

    def test_pattern_cycling(self):
        """Test that generation draws from several masks."""
        generator = ElementGenerator(seed=42)
        count = len(generator.patterns) + 3
        elements = [generator.generate_element() for _ in range(count)]
        assert len(elements) == count
        assert generator.p_idx == 3

    @pytest.mark.parametrize("count", [0, 1, 10, 100])
    def test_generate_batch(self, count):
        """Test batch generation."""
        generator = ElementGenerator(seed=42)
        batch = generator.generate_batch(count)
        assert not isinstance(batch, list)
        assert len(list(batch)) == count

    @pytest.mark.parametrize("count", [0, 1, 50, 500])
    def test_generate_unique(self, count):
        """Test generation of distinct elements."""
        generator = ElementGenerator(seed=42)
        elements = generator.generate_unique(count)
        assert len(elements) == count
        assert len(set(elements)) == count

    def test_generate_unique_negative(self):
        """Test that a negative count is rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            ElementGenerator().generate_unique(-1)

    def test_generate_unique_gives_up(self):
        """Test that generation stops after the attempt limit."""
        generator = ElementGenerator(seed=42)
        with pytest.raises(RuntimeError, match="distinct elements"):
            generator.generate_unique(10, max_attempts=5)

    def test_generate_integers(self):
        """Test distinct integer generation."""
        generator = ElementGenerator(seed=42)
        values = generator.generate_integers(100, low=10, high=1000)
        assert len(values) == 100
        assert len(set(values)) == 100
        assert all(10 <= v < 1000 for v in values)

    def test_generate_integers_reproducible(self):
        """Test that integer generation is reproducible with a seed."""
        assert ElementGenerator(seed=3).generate_integers(20) == ElementGenerator(
            seed=3
        ).generate_integers(20)

    def test_generate_integers_default_range(self):
        """Test the default integer range."""
        values = ElementGenerator(seed=1).generate_integers(50)
        assert all(0 <= v < 500 for v in values)

    def test_generate_integers_range_too_small(self):
        """Test that a range smaller than the count is rejected."""
        with pytest.raises(ValueError, match="distinct integers"):
            ElementGenerator().generate_integers(10, low=0, high=5)
