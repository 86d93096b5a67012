from typing import Optional
from ..core.node import Node, NumberNode, BinaryOpNode, make_operation
from ..core.operators import OpType, apply_operator, is_redundant


class ExpressionValidator:
  """Gatekeeper for new operation nodes.

  Hard validity (division by zero, inexact division, negative differences,
  negative exponents, overflow) is always enforced. Redundant forms such as
  `x - 0` or `x / 1` are only rejected when `prune_redundant` is set.
  """

  def __init__(self, prune_redundant: bool = True):
    self.prune_redundant = prune_redundant

  def combine(self, left: Node, right: Node, operator: OpType) -> Optional[BinaryOpNode]:
    if self.prune_redundant and is_redundant(operator, left.value, right.value):
      return None
    return make_operation(operator, left, right)

  @staticmethod
  def is_valid_expression(node: Node, prune_redundant: bool = False) -> bool:
    """Recursively check cached values and construction rules for a whole tree"""
    if isinstance(node, NumberNode):
      return True

    elif isinstance(node, BinaryOpNode):
      if not (ExpressionValidator.is_valid_expression(node.left, prune_redundant) and
              ExpressionValidator.is_valid_expression(node.right, prune_redundant)):
        return False

      expected = apply_operator(node.operator, node.left.value, node.right.value)
      if expected is None or expected != node.value:
        return False

      if prune_redundant and is_redundant(node.operator, node.left.value, node.right.value):
        return False

      return True

    return False
