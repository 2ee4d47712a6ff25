# tests/unit/test_generators.py
"""Unit tests for the built-in generators.

Covers bounds, construction errors, seeded determinism and seed recording.
"""

from __future__ import annotations

import threading

import pytest

from lawtest.errors import GeneratorConfigError
from lawtest.generators import (
    ALPHANUMERIC,
    SeededGenerator,
    bool_gen,
    float_gen,
    int_gen,
    seed_of,
    string_gen,
)

# =============================================================================
# int_gen
# =============================================================================


class TestIntGen:
    """Tests for the bounded integer generator."""

    def test_values_within_inclusive_bounds(self) -> None:
        gen = int_gen(-100, 100, seed=1)
        for _ in range(1000):
            v = gen()
            assert -100 <= v <= 100

    def test_both_bounds_reachable(self) -> None:
        """With a range of two values, both appear."""
        gen = int_gen(0, 1, seed=7)
        seen = {gen() for _ in range(200)}
        assert seen == {0, 1}

    def test_single_value_range(self) -> None:
        gen = int_gen(5, 5)
        assert all(gen() == 5 for _ in range(50))

    def test_min_greater_than_max_raises(self) -> None:
        with pytest.raises(GeneratorConfigError, match=r"min \(10\) must be <= max \(3\)"):
            int_gen(10, 3)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            int_gen(1, 0)


# =============================================================================
# float_gen / string_gen / bool_gen
# =============================================================================


class TestFloatGen:
    def test_values_within_bounds(self) -> None:
        gen = float_gen(1.0, 10.0, seed=3)
        for _ in range(1000):
            v = gen()
            assert 1.0 <= v <= 10.0

    def test_min_greater_than_max_raises(self) -> None:
        with pytest.raises(GeneratorConfigError):
            float_gen(2.5, -2.5)


class TestStringGen:
    def test_fixed_length_alphanumeric(self) -> None:
        gen = string_gen(8, seed=11)
        for _ in range(200):
            s = gen()
            assert len(s) == 8
            assert all(ch in ALPHANUMERIC for ch in s)

    def test_zero_length(self) -> None:
        assert string_gen(0)() == ""

    def test_negative_length_raises(self) -> None:
        with pytest.raises(GeneratorConfigError):
            string_gen(-1)


class TestBoolGen:
    def test_produces_both_values(self) -> None:
        gen = bool_gen(seed=5)
        seen = {gen() for _ in range(200)}
        assert seen == {True, False}


# =============================================================================
# Seeding
# =============================================================================


class TestSeeding:
    """Generators own their RNG; same seed means same stream."""

    def test_same_seed_same_sequence(self) -> None:
        gen1 = int_gen(-1000, 1000, seed=99)
        gen2 = int_gen(-1000, 1000, seed=99)
        assert [gen1() for _ in range(100)] == [gen2() for _ in range(100)]

    def test_generators_do_not_share_state(self) -> None:
        """Drawing from one generator does not shift another's stream."""
        first = int_gen(0, 10**6, seed=42)()
        noisy = int_gen(0, 10**6, seed=1)
        for _ in range(50):
            noisy()
        assert int_gen(0, 10**6, seed=42)() == first

    def test_seed_recorded_when_not_given(self) -> None:
        gen = int_gen(0, 10)
        assert isinstance(gen.seed, int)
        replay = int_gen(0, 10, seed=gen.seed)
        assert [gen() for _ in range(20)] == [replay() for _ in range(20)]

    def test_seed_of_plain_callable_is_none(self) -> None:
        assert seed_of(lambda: 1) is None

    def test_seed_of_seeded_generator(self) -> None:
        assert seed_of(bool_gen(seed=8)) == 8

    def test_repr_includes_seed(self) -> None:
        assert repr(SeededGenerator(lambda rng: rng.random(), seed=17)) == "SeededGenerator(seed=17)"


class TestThreadSafety:
    def test_concurrent_draws_stay_in_bounds(self) -> None:
        gen = int_gen(0, 9, seed=0)
        values: list[int] = []
        lock = threading.Lock()

        def draw() -> None:
            local = [gen() for _ in range(500)]
            with lock:
                values.extend(local)

        threads = [threading.Thread(target=draw) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(values) == 4000
        assert all(0 <= v <= 9 for v in values)
