"""Derivation and aggregation engine."""

from .derivation import PRIORITY_WEIGHTS, derive_one, derive_sorted, sort_all
from .metrics import aggregate

__all__ = ['PRIORITY_WEIGHTS', 'derive_one', 'derive_sorted', 'sort_all', 'aggregate']
