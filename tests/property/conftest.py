"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import seeds, int_bounds

    @given(seed=seeds, bounds=int_bounds)
    def test_generator_in_range(seed: int, bounds: tuple[int, int]) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

seeds = st.integers(min_value=0, max_value=2**32 - 1)

# Ordered (low, high) pairs, including single-value ranges
int_bounds = st.tuples(
    st.integers(min_value=-(10**9), max_value=10**9),
    st.integers(min_value=0, max_value=10**6),
).map(lambda pair: (pair[0], pair[0] + pair[1]))

moduli = st.integers(min_value=1, max_value=200)

trial_counts = st.integers(min_value=1, max_value=300)
