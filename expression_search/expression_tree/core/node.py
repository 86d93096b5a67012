import sympy as sp
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple
from .operators import (
  NodeType, OpType, OP_SYMBOLS, apply_operator, is_commutative, needs_parentheses
)

# Complexity weights: a leaf costs a flat amount, operators scale the cost of
# their children and every parenthesized child adds a penalty
LEAF_COMPLEXITY = 10
PARENTHESES_PENALTY = 10
COMPLEXITY_MULTIPLIERS: Dict[OpType, int] = {
  OpType.ADD: 1,
  OpType.SUB: 1,
  OpType.MUL: 2,
  OpType.DIV: 2,
  OpType.POW: 5,
}


class Node(ABC):
  """Base node class with a cached integer value.

  Nodes are immutable once built. Rewrites construct new nodes, so the cached
  value, depth, complexity and string always describe the current tree.
  """

  __slots__ = ('value', '_depth_cache', '_complexity_cache', '_string_cache')

  def __init__(self, value: int):
    self.value = value
    self._depth_cache: Optional[int] = None
    self._complexity_cache: Optional[int] = None
    self._string_cache: Optional[str] = None

  @property
  def is_leaf(self) -> bool:
    return False

  def evaluate(self) -> int:
    return self.value

  def depth(self) -> int:
    """Leaves have depth 1"""
    if self._depth_cache is None:
      self._depth_cache = self._compute_depth()
    return self._depth_cache

  def complexity(self) -> int:
    """Ranking cost, lower is simpler"""
    if self._complexity_cache is None:
      self._complexity_cache = self._compute_complexity()
    return self._complexity_cache

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self._compute_string()
    return self._string_cache

  def rank_key(self) -> Tuple[int, int]:
    """Ordering used by the canonicalizer: depth first, then value"""
    return (self.depth(), self.value)

  def ranks_below(self, other: 'Node') -> bool:
    return self.rank_key() < other.rank_key()

  @abstractmethod
  def to_string_child(self, parent_op: OpType, is_left: bool) -> str:
    pass

  @abstractmethod
  def complexity_in_context(self, parent_op: OpType, is_left: bool) -> int:
    pass

  @abstractmethod
  def is_equivalent(self, other: 'Node') -> bool:
    pass

  @abstractmethod
  def to_sympy(self, evaluate: bool = True) -> sp.Expr:
    pass

  @abstractmethod
  def structure(self) -> tuple:
    """Hashable structural key, exact shape with no algebraic folding"""
    pass

  @abstractmethod
  def _compute_depth(self) -> int:
    pass

  @abstractmethod
  def _compute_complexity(self) -> int:
    pass

  @abstractmethod
  def _compute_string(self) -> str:
    pass

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r} = {self.value})"


class NumberNode(Node):
  __slots__ = ()

  def __init__(self, value: int):
    super().__init__(value)

  @property
  def is_leaf(self) -> bool:
    return True

  def to_string_child(self, parent_op: OpType, is_left: bool) -> str:
    if self.value < 0:
      return f"({self.value})"
    return str(self.value)

  def complexity_in_context(self, parent_op: OpType, is_left: bool) -> int:
    return self.complexity()

  def is_equivalent(self, other: Node) -> bool:
    return isinstance(other, NumberNode) and self.value == other.value

  def to_sympy(self, evaluate: bool = True) -> sp.Expr:
    return sp.Integer(self.value)

  def structure(self) -> tuple:
    return (NodeType.NUMBER, self.value)

  def _compute_depth(self) -> int:
    return 1

  def _compute_complexity(self) -> int:
    return LEAF_COMPLEXITY

  def _compute_string(self) -> str:
    return str(self.value)


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: OpType, left: Node, right: Node, value: Optional[int] = None):
    if value is None:
      value = apply_operator(operator, left.value, right.value)
      if value is None:
        raise ValueError(
          f"Invalid operation: {left.value} {OP_SYMBOLS[operator]} {right.value}"
        )
    super().__init__(value)
    self.operator = operator
    self.left = left
    self.right = right

  def to_string_child(self, parent_op: OpType, is_left: bool) -> str:
    if needs_parentheses(self.operator, parent_op, is_left):
      return f"({self.to_string()})"
    return self.to_string()

  def complexity_in_context(self, parent_op: OpType, is_left: bool) -> int:
    complexity = self.complexity()
    if needs_parentheses(self.operator, parent_op, is_left):
      complexity += PARENTHESES_PENALTY
    return complexity

  def is_equivalent(self, other: Node) -> bool:
    if not isinstance(other, BinaryOpNode) or self.operator != other.operator:
      return False

    if self.left.is_equivalent(other.left) and self.right.is_equivalent(other.right):
      return True

    # a + b == b + a
    if is_commutative(self.operator):
      if self.left.is_equivalent(other.right) and self.right.is_equivalent(other.left):
        return True

    # Operations with an identity or absorbing operand collapse whatever the other side is
    op = self.operator
    if op == OpType.POW:
      if self.left.value == 1 and other.left.value == 1:
        return True
      if self.right.value == 0 and other.right.value == 0:
        return True
    elif op == OpType.DIV:
      if self.right.value == 1 and other.right.value == 1:
        return True
      if self.left.value == 0 and other.left.value == 0:
        return True
    elif op == OpType.MUL:
      if self.left.value == 0 and other.left.value == 0:
        return True
      if self.right.value == 0 and other.right.value == 0:
        return True

    return False

  def to_sympy(self, evaluate: bool = True) -> sp.Expr:
    left = self.left.to_sympy(evaluate)
    right = self.right.to_sympy(evaluate)
    if self.operator == OpType.ADD:
      return sp.Add(left, right, evaluate=evaluate)
    elif self.operator == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right, evaluate=evaluate), evaluate=evaluate)
    elif self.operator == OpType.MUL:
      return sp.Mul(left, right, evaluate=evaluate)
    elif self.operator == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1, evaluate=evaluate), evaluate=evaluate)
    elif self.operator == OpType.POW:
      return sp.Pow(left, right, evaluate=evaluate)
    else:
      raise RuntimeWarning(f"to_sympy reached unexpected operation at node {type(self)}")

  def structure(self) -> tuple:
    return (NodeType.BINARY_OP, self.operator, self.left.structure(), self.right.structure())

  def _compute_depth(self) -> int:
    return 1 + max(self.left.depth(), self.right.depth())

  def _compute_complexity(self) -> int:
    left = self.left.complexity_in_context(self.operator, True)
    right = self.right.complexity_in_context(self.operator, False)
    return (left + right) * COMPLEXITY_MULTIPLIERS[self.operator]

  def _compute_string(self) -> str:
    left = self.left.to_string_child(self.operator, True)
    right = self.right.to_string_child(self.operator, False)
    return f"{left} {OP_SYMBOLS[self.operator]} {right}"


def make_operation(operator: OpType, left: Node, right: Node) -> Optional[BinaryOpNode]:
  """Build an operation node, or None if the arithmetic is invalid"""
  value = apply_operator(operator, left.value, right.value)
  if value is None:
    return None
  return BinaryOpNode(operator, left, right, value)
