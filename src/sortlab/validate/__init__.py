"""
Validation utilities public API.

Re-exports the property checks:
    is_nondecreasing
    first_nondecreasing_violation_index
    is_permutation
    permutation_counter_diff
    check_sorted
"""

from .properties import (
    check_sorted,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
)

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "check_sorted",
]
