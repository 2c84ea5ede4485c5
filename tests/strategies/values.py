"""Bound-value strategies for plural and selectordinal arguments."""

from __future__ import annotations

from decimal import Decimal

from hypothesis import strategies as st

# Numbers accepted by plural and selectordinal arguments
plural_numbers = st.one_of(
    st.integers(min_value=0, max_value=1_000_000),
    st.decimals(min_value=0, max_value=1000, places=2, allow_nan=False, allow_infinity=False),
)

# Numbers that have no plural category
non_finite_numbers = st.sampled_from(
    [
        float("inf"),
        float("-inf"),
        float("nan"),
        Decimal("Infinity"),
        Decimal("-Infinity"),
        Decimal("NaN"),
    ]
)
