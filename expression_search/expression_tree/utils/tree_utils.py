"""
Tree Utility Functions

Traversal and from-scratch evaluation helpers for expression trees.
"""

from typing import List

from ..core.node import Node, BinaryOpNode, NumberNode
from ..core.operators import OpType


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first traversal (recursive, pre-order)"""
    nodes = [node]

    if isinstance(node, BinaryOpNode):
        nodes.extend(_depth_first_traversal(node.left))
        nodes.extend(_depth_first_traversal(node.right))

    return nodes


def get_leaf_values(node: Node) -> List[int]:
    """Leaf values in left-to-right order"""
    return [n.value for n in _depth_first_traversal(node) if isinstance(n, NumberNode)]


def recompute_value(node: Node) -> int:
    """Evaluate the tree from scratch, ignoring cached values"""
    if isinstance(node, BinaryOpNode):
        left = recompute_value(node.left)
        right = recompute_value(node.right)
        if node.operator == OpType.ADD:
            return left + right
        elif node.operator == OpType.SUB:
            return left - right
        elif node.operator == OpType.MUL:
            return left * right
        elif node.operator == OpType.DIV:
            return left // right
        return left ** right
    return node.value
