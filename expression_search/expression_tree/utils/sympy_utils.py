import sympy as sp
from typing import Optional
from ..core.node import Node


class SymPyVerifier:
  """Independent exact check of rendered solutions using SymPy arithmetic"""

  def evaluate_text(self, expr_string: str) -> sp.Expr:
    """Evaluate an infix string with standard precedence"""
    sympy_string = expr_string.replace('^', '**')
    return sp.sympify(sympy_string)

  def text_value(self, expr_string: str) -> Optional[sp.Expr]:
    try:
      return self.evaluate_text(expr_string)
    except (sp.SympifyError, SyntaxError, TypeError):
      return None

  def verify(self, expr_string: str, target: int) -> bool:
    """True when the rendered string evaluates exactly to target"""
    value = self.text_value(expr_string)
    if value is None:
      return False
    return sp.simplify(value - sp.Integer(target)) == 0

  def tree_value(self, node: Node) -> sp.Expr:
    return node.to_sympy(evaluate=True)

  def matches_tree(self, node: Node) -> bool:
    """The rendered string and the tree agree on their exact value"""
    value = self.text_value(node.to_string())
    if value is None:
      return False
    return value == self.tree_value(node) == sp.Integer(node.value)
