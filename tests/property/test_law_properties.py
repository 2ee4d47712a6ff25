# tests/property/test_law_properties.py
"""Property-based tests for the law checkers and structure verifiers.

Tests invariants:
- Integer addition mod n is a group for every n
- An off-by-one inverse is caught for every n >= 2, and only the inverse
- Passing checks run exactly config.test_cases trials
- A reported counterexample reproduces the failure and replays from its seed
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lawtest.config import LawConfig
from lawtest.equivalence import check_equivalent
from lawtest.errors import LawViolation, StructureViolation
from lawtest.generators import int_gen
from lawtest.laws import check_associative, check_commutative
from lawtest.structures import check_group
from tests.conftest import BrokenIntMod, IntAddMod
from tests.property.conftest import moduli, seeds, trial_counts
from tests.property.settings import CHECKER_SETTINGS, STANDARD_SETTINGS

# =============================================================================
# Groups
# =============================================================================


class TestModularGroups:
    """Property: (ℤ/n, +) satisfies the group laws for any modulus."""

    @given(modulus=moduli, seed=seeds)
    @CHECKER_SETTINGS
    def test_addition_mod_n_is_group(self, modulus: int, seed: int) -> None:
        report = check_group(IntAddMod(modulus, seed=seed), config=LawConfig(test_cases=50))
        assert set(report.results) == {"Associativity", "Identity", "Inverse", "Closure"}

    @given(modulus=st.integers(min_value=2, max_value=200), seed=seeds)
    @CHECKER_SETTINGS
    def test_off_by_one_inverse_always_caught(self, modulus: int, seed: int) -> None:
        """a + ((n - a + 1) mod n) is 1 mod n, never the identity."""
        with pytest.raises(StructureViolation) as exc_info:
            check_group(BrokenIntMod(modulus, seed=seed), config=LawConfig(test_cases=20))
        assert list(exc_info.value.failures) == ["Inverse"]


# =============================================================================
# Trial Accounting
# =============================================================================


class TestTrialCount:
    """Property: a passing check reports exactly the configured trials."""

    @given(trials=trial_counts)
    @STANDARD_SETTINGS
    def test_trials_match_config(self, trials: int) -> None:
        result = check_commutative(lambda a, b: a * b, int_gen(-50, 50), config=LawConfig(test_cases=trials))
        assert result.trials == trials

    @given(trials=trial_counts)
    @STANDARD_SETTINGS
    def test_generator_called_once_per_operand(self, trials: int) -> None:
        calls = 0

        def counting_gen() -> int:
            nonlocal calls
            calls += 1
            return calls

        check_associative(lambda a, b: a + b, counting_gen, config=LawConfig(test_cases=trials))
        assert calls == 3 * trials


# =============================================================================
# Counterexamples
# =============================================================================


class TestCounterexamples:
    """Property: violations are reproducible."""

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_subtraction_counterexample_reproduces(self, seed: int) -> None:
        with pytest.raises(LawViolation) as exc_info:
            check_associative(lambda a, b: a - b, int_gen(1, 1000, seed=seed))

        violation = exc_info.value
        a, b, c = violation.operands["a"], violation.operands["b"], violation.operands["c"]
        assert (a - b) - c != a - (b - c)
        assert violation.results == {"left": (a - b) - c, "right": a - (b - c)}
        assert violation.seed == seed

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_replay_from_reported_seed(self, seed: int) -> None:
        with pytest.raises(LawViolation) as first:
            check_commutative(lambda a, b: a - b, int_gen(0, 100, seed=seed))
        with pytest.raises(LawViolation) as replay:
            check_commutative(lambda a, b: a - b, int_gen(0, 100, seed=first.value.seed))

        assert replay.value.operands == first.value.operands
        assert replay.value.trial == first.value.trial

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_function_equivalent_to_itself(self, seed: int) -> None:
        def square(x: int) -> int:
            return x * x

        check_equivalent(square, square, int_gen(-(10**6), 10**6, seed=seed))
