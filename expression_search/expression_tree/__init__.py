"""Expression Tree Module

Core expression tree functionality for arithmetic expression search.
"""

from .expression import Expression
from .core.node import (
    Node,
    NumberNode,
    BinaryOpNode,
    make_operation
)
from .core.operators import (
    NodeType,
    OpType,
    ALL_OPS,
    BINARY_OP_MAP,
    OP_SYMBOLS,
    apply_operator,
    checked_power
)
from .utils import (
    ExpressionValidator, ExpressionCanonicalizer, CanonicalizationError, SymPyVerifier
)

__all__ = [
    "Expression",
    "Node", "NumberNode", "BinaryOpNode", "make_operation",
    "NodeType", "OpType", "ALL_OPS",
    "BINARY_OP_MAP", "OP_SYMBOLS",
    "apply_operator", "checked_power",
    "ExpressionValidator", "ExpressionCanonicalizer", "CanonicalizationError",
    "SymPyVerifier"
]
