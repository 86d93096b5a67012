"""Utilities for expression trees."""

from .validator import ExpressionValidator
from .canonicalizer import ExpressionCanonicalizer, CanonicalizationError
from .sympy_utils import SymPyVerifier
from .tree_utils import get_leaf_values, recompute_value

__all__ = [
    'ExpressionValidator', 'ExpressionCanonicalizer', 'CanonicalizationError',
    'SymPyVerifier',
    'get_leaf_values', 'recompute_value'
]
