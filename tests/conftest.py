# tests/conftest.py
"""Shared test fixtures and helpers.

Sample structures:
- IntAddMod: integers mod n under addition (a group for every n >= 1)
- IntAddition: (ℤ, +) restricted to a generator range
- StringConcat: strings under concatenation (a monoid, not a group)
- MaxSemigroup: max over integers (a semigroup without identity)
- BrokenIntMod: modular addition with an off-by-one inverse

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from lawtest.config import LawConfig
from lawtest.generators import int_gen, string_gen

pytest_plugins = ["pytester"]

# =============================================================================
# Sample Structures
# =============================================================================


class IntAddMod:
    """Addition modulo n."""

    def __init__(self, modulus: int, *, seed: int | None = None) -> None:
        self.modulus = modulus
        self._gen = int_gen(0, modulus - 1, seed=seed)

    @property
    def seed(self) -> int:
        return self._gen.seed

    def op(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def identity(self) -> int:
        return 0

    def inverse(self, a: int) -> int:
        return (self.modulus - a) % self.modulus

    def gen(self) -> int:
        return self._gen()


class IntAddition:
    """(ℤ, +) sampled from [-1000, 1000]."""

    def __init__(self, *, seed: int | None = None) -> None:
        self._gen = int_gen(-1000, 1000, seed=seed)

    @property
    def seed(self) -> int:
        return self._gen.seed

    def op(self, a: int, b: int) -> int:
        return a + b

    def identity(self) -> int:
        return 0

    def inverse(self, a: int) -> int:
        return -a

    def gen(self) -> int:
        return self._gen()


class StringConcat:
    """Strings under concatenation."""

    def __init__(self, *, seed: int | None = None) -> None:
        self._gen = string_gen(5, seed=seed)

    @property
    def seed(self) -> int:
        return self._gen.seed

    def op(self, a: str, b: str) -> str:
        return a + b

    def identity(self) -> str:
        return ""

    def gen(self) -> str:
        return self._gen()


class MaxSemigroup:
    """max(a, b) over positive integers."""

    def __init__(self, *, seed: int | None = None) -> None:
        self._gen = int_gen(1, 1000, seed=seed)

    @property
    def seed(self) -> int:
        return self._gen.seed

    def op(self, a: int, b: int) -> int:
        return max(a, b)

    def gen(self) -> int:
        return self._gen()


class BrokenIntMod(IntAddMod):
    """Modular addition whose inverse is off by one."""

    def inverse(self, a: int) -> int:
        return (self.modulus - a + 1) % self.modulus


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fast_config() -> LawConfig:
    """Small trial count for checks that are slow or expected to fail."""
    return LawConfig(test_cases=20, timeout_seconds=5.0)


@pytest.fixture
def mod12() -> IntAddMod:
    return IntAddMod(12, seed=12)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Checkers run many trials per example; timing varies
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
