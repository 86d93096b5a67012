from .core.node import Node


class Expression:
  """Solution wrapper around a root node"""

  __slots__ = ('root',)

  def __init__(self, root: Node):
    self.root = root

  @property
  def value(self) -> int:
    return self.root.value

  def evaluate(self) -> int:
    return self.root.evaluate()

  def to_string(self) -> str:
    return self.root.to_string()

  def depth(self) -> int:
    return self.root.depth()

  def complexity(self) -> int:
    """Weighted complexity score"""
    return self.root.complexity()

  def is_equivalent(self, other: 'Expression') -> bool:
    return self.root.is_equivalent(other.root)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"
