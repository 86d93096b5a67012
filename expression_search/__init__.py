"""Expression Search Package

Exhaustive search for arithmetic expressions over an ordered list of numbers
that reach a target value, with duplicate solutions collapsed and the rest
ranked by complexity.
"""

from .expression_tree import (
  Expression, Node, NumberNode, BinaryOpNode, OpType, BINARY_OP_MAP, make_operation,
  ExpressionValidator, ExpressionCanonicalizer, CanonicalizationError, SymPyVerifier
)
from .generator import ExpressionGenerator, filter_target
from .solver import TargetSolver, solve, DEFAULT_TARGET
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "NumberNode", "BinaryOpNode", "OpType", "BINARY_OP_MAP", "make_operation",
  "ExpressionValidator", "ExpressionCanonicalizer", "CanonicalizationError",
  "SymPyVerifier",
  "ExpressionGenerator", "filter_target",
  "TargetSolver", "solve", "DEFAULT_TARGET",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
