"""Core expression tree components."""

from .node import Node, NumberNode, BinaryOpNode, make_operation
from .operators import (
    NodeType, OpType, ALL_OPS, BINARY_OP_MAP, OP_SYMBOLS, INT_MIN, INT_MAX,
    apply_operator, checked_power, is_redundant, is_commutative, binds_looser,
    needs_parentheses, reverse_operation, are_operations_reverse
)

__all__ = [
    'Node', 'NumberNode', 'BinaryOpNode', 'make_operation',
    'NodeType', 'OpType', 'ALL_OPS', 'BINARY_OP_MAP', 'OP_SYMBOLS', 'INT_MIN', 'INT_MAX',
    'apply_operator', 'checked_power', 'is_redundant', 'is_commutative', 'binds_looser',
    'needs_parentheses', 'reverse_operation', 'are_operations_reverse'
]
