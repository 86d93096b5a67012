from typing import Callable, List, Optional, Tuple
from ..core.node import Node, BinaryOpNode
from ..core.operators import (
  OpType, is_commutative, reverse_operation, are_operations_reverse
)
from .validator import ExpressionValidator
from ...logging_system import LogLevel, get_logger, log_warning, log_debug


class CanonicalizationError(RuntimeError):
  """Rewrite passes did not reach a fixpoint within the pass limit"""


class ExpressionCanonicalizer:
  """Normalizes trees so algebraically equivalent solutions converge to one shape.

  A pass rewrites the children first and then tries every local rule at the
  current node, each rule seeing the result of the previous one. Passes repeat
  until one fires no rule at all. Rewrites preserve the value of every
  subtree; a rewrite whose rebuilt nodes the validator rejects is skipped.
  """

  def __init__(self, validator: Optional[ExpressionValidator] = None,
               max_passes: int = 1000, strict: bool = True):
    if max_passes < 1:
      raise ValueError(f"max_passes must be positive, got {max_passes}")
    self.validator = validator if validator is not None else ExpressionValidator()
    self.max_passes = max_passes
    self.strict = strict
    self.last_pass_count = 0
    self.last_rewrite_count = 0

    self._rules: List[Callable[[BinaryOpNode], Optional[BinaryOpNode]]] = [
      self._commutative_sort,
      self._left_reverse_lift,
      self._right_reverse_lift,
      self._right_reverse_fold,
      self._right_same_fold,
      self._chain_ordering,
      self._reverse_tie_break,
    ]

  def canonicalize(self, node: Node) -> Node:
    """Rewrite until a pass changes nothing"""
    total_rewrites = 0
    for pass_index in range(self.max_passes):
      node, rewrites = self.rewrite_pass(node)
      total_rewrites += rewrites
      if rewrites == 0:
        self.last_pass_count = pass_index + 1
        self.last_rewrite_count = total_rewrites
        return node

    self.last_pass_count = self.max_passes
    self.last_rewrite_count = total_rewrites
    message = (f"Canonicalization of '{node.to_string()}' did not converge "
               f"after {self.max_passes} passes")
    if self.strict:
      get_logger().critical(message)
      raise CanonicalizationError(message)
    log_warning(message)
    return node

  def rewrite_pass(self, node: Node) -> Tuple[Node, int]:
    """One bottom-up pass, returns the new tree and the number of rewrites fired"""
    if not isinstance(node, BinaryOpNode):
      return node, 0

    left, left_rewrites = self.rewrite_pass(node.left)
    right, right_rewrites = self.rewrite_pass(node.right)
    rewrites = left_rewrites + right_rewrites
    if rewrites:
      node = BinaryOpNode(node.operator, left, right, node.value)

    trace = get_logger().is_enabled(LogLevel.VERBOSE)
    for rule in self._rules:
      rewritten = rule(node)
      if rewritten is not None:
        if trace:
          log_debug(f"{rule.__name__}: {node.to_string()} -> {rewritten.to_string()}")
        node = rewritten
        rewrites += 1

    return node, rewrites

  def _build(self, operator: OpType, left: Node, right: Node) -> Optional[BinaryOpNode]:
    return self.validator.combine(left, right, operator)

  def _commutative_sort(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # x + y -> y + x when x ranks lower
    if is_commutative(node.operator) and node.left.ranks_below(node.right):
      return self._build(node.operator, node.right, node.left)
    return None

  def _left_reverse_lift(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # (a - x) + y -> (a + y) - x
    if not is_commutative(node.operator):
      return None
    left = node.left
    if not isinstance(left, BinaryOpNode) or not are_operations_reverse(left.operator, node.operator):
      return None
    inner = self._build(node.operator, left.left, node.right)
    if inner is None:
      return None
    return self._build(left.operator, inner, left.right)

  def _right_reverse_lift(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # y + (a - x) -> (y + a) - x
    if not is_commutative(node.operator):
      return None
    right = node.right
    if not isinstance(right, BinaryOpNode) or not are_operations_reverse(right.operator, node.operator):
      return None
    inner = self._build(node.operator, node.left, right.left)
    if inner is None:
      return None
    return self._build(right.operator, inner, right.right)

  def _right_reverse_fold(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # a - (b + c) -> (a - c) - b
    if node.operator not in (OpType.SUB, OpType.DIV):
      return None
    right = node.right
    if not isinstance(right, BinaryOpNode) or not are_operations_reverse(node.operator, right.operator):
      return None
    inner = self._build(node.operator, node.left, right.right)
    if inner is None:
      return None
    return self._build(node.operator, inner, right.left)

  def _right_same_fold(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # a - (b - c) -> (a + c) - b
    if node.operator not in (OpType.SUB, OpType.DIV):
      return None
    right = node.right
    if not isinstance(right, BinaryOpNode) or right.operator != node.operator:
      return None
    inner = self._build(reverse_operation(node.operator), node.left, right.right)
    if inner is None:
      return None
    return self._build(node.operator, inner, right.left)

  def _chain_ordering(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # (a + x) + y -> (a + y) + x when x ranks lower than y
    left = node.left
    if not isinstance(left, BinaryOpNode) or left.operator != node.operator:
      return None
    if not left.right.ranks_below(node.right):
      return None
    inner = self._build(node.operator, left.left, node.right)
    if inner is None:
      return None
    return self._build(node.operator, inner, left.right)

  def _reverse_tie_break(self, node: BinaryOpNode) -> Optional[BinaryOpNode]:
    # (a + x) - y -> (a + y) - x when x and y are equal in value
    left = node.left
    if not isinstance(left, BinaryOpNode) or not are_operations_reverse(left.operator, node.operator):
      return None
    if left.right.value != node.right.value or not left.right.ranks_below(node.right):
      return None
    inner = self._build(left.operator, left.left, node.right)
    if inner is None:
      return None
    return self._build(node.operator, inner, left.right)
