from operator import index
from typing import Iterable, Iterator, Sequence, Tuple
from .expression_tree import Node, NumberNode, OpType, ALL_OPS
from .expression_tree.core.operators import is_commutative
from .expression_tree.utils.validator import ExpressionValidator


class ExpressionGenerator:
  """Exhaustive expression generator over an ordered sequence of numbers.

  Every candidate uses all numbers exactly once. The numbers are only ever
  grouped by contiguous split points; within one operation node both operand
  orders are tried for the non-commutative operators.

  Candidates are produced lazily. For each split, the expressions of the
  smaller side (the suffix when both are the same length) are collected into
  a list and the larger side is streamed once, so memory tracks the smaller
  partition instead of the cross product. A collected expression is the left
  operand of the first orientation tried. Subtrees from the collected side
  are shared between candidates, which is safe because nodes are never
  mutated.
  """

  def __init__(self, prune_redundant: bool = True, operators: Iterable[OpType] = ALL_OPS):
    self.validator = ExpressionValidator(prune_redundant=prune_redundant)
    self.operators: Tuple[OpType, ...] = tuple(operators)

  def generate(self, numbers: Sequence[int]) -> Iterator[Node]:
    """Lazily yield every valid expression over `numbers`; empty input yields nothing"""
    values = tuple(index(n) for n in numbers)
    if not values:
      return iter(())
    return self._generate(values)

  def _generate(self, values: Tuple[int, ...]) -> Iterator[Node]:
    if len(values) == 1:
      yield NumberNode(values[0])
      return

    for split in range(1, len(values)):
      prefix, suffix = values[:split], values[split:]
      if len(prefix) < len(suffix):
        collected_side, streamed_side = prefix, suffix
      else:
        collected_side, streamed_side = suffix, prefix

      collected = list(self._generate(collected_side))
      for streamed_expr in self._generate(streamed_side):
        for collected_expr in collected:
          yield from self._combine(collected_expr, streamed_expr)

  def _combine(self, left: Node, right: Node) -> Iterator[Node]:
    for op in self.operators:
      node = self.validator.combine(left, right, op)
      if node is not None:
        yield node

      # Swapping equal operands would only repeat the same shape
      if not is_commutative(op) and left.value != right.value:
        node = self.validator.combine(right, left, op)
        if node is not None:
          yield node


def filter_target(candidates: Iterable[Node], target: int) -> Iterator[Node]:
  """Lazily keep the candidates that evaluate to target"""
  return (candidate for candidate in candidates if candidate.value == target)
