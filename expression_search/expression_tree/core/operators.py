import numpy as np
import numba
from enum import IntEnum
from typing import Dict, Optional, Tuple

class NodeType(IntEnum):
  NUMBER = 0
  BINARY_OP = 1

class OpType(IntEnum):
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4

# Generation order
ALL_OPS: Tuple[OpType, ...] = (OpType.ADD, OpType.SUB, OpType.MUL, OpType.DIV, OpType.POW)

# Mapping dictionaries
BINARY_OP_MAP: Dict[str, OpType] = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW}
OP_SYMBOLS: Dict[OpType, str] = {op: sym for sym, op in BINARY_OP_MAP.items()}

COMMUTATIVE_OPS = frozenset({OpType.ADD, OpType.MUL})

# Binding strength, higher binds tighter
PRECEDENCE: Dict[OpType, int] = {
  OpType.ADD: 1,
  OpType.SUB: 1,
  OpType.MUL: 2,
  OpType.DIV: 2,
  OpType.POW: 3,
}

REVERSE_OP: Dict[OpType, OpType] = {
  OpType.ADD: OpType.SUB,
  OpType.SUB: OpType.ADD,
  OpType.MUL: OpType.DIV,
  OpType.DIV: OpType.MUL,
}

# Signed 32-bit value range
INT_MIN = int(np.iinfo(np.int32).min)
INT_MAX = int(np.iinfo(np.int32).max)


def is_commutative(op: OpType) -> bool:
  return op in COMMUTATIVE_OPS


def binds_looser(op: OpType, parent_op: OpType) -> bool:
  """True when `op` has lower precedence than `parent_op`"""
  return PRECEDENCE[op] < PRECEDENCE[parent_op]


def reverse_operation(op: OpType) -> OpType:
  if op not in REVERSE_OP:
    raise ValueError(f"No reverse operation for {op.name}")
  return REVERSE_OP[op]


def are_operations_reverse(op1: OpType, op2: OpType) -> bool:
  return REVERSE_OP.get(op1) == op2


def needs_parentheses(child_op: OpType, parent_op: OpType, is_left: bool) -> bool:
  """Parenthesization test shared by rendering and complexity scoring"""
  if binds_looser(child_op, parent_op) or not is_left:
    return True
  # a ^ b ^ c reads right to left
  return child_op == OpType.POW and parent_op == OpType.POW


def in_range(value: int) -> bool:
  return INT_MIN <= value <= INT_MAX


@numba.njit(cache=True)
def _checked_pow_kernel(base, exponent, lo, hi):
  result = 1
  for _ in range(exponent):
    result *= base
    if result > hi or result < lo:
      return False, 0
  return True, result


def checked_power(base: int, exponent: int) -> Optional[int]:
  """Integer power, or None when the exponent is negative or the result leaves the range"""
  if exponent < 0:
    return None
  if exponent == 0:
    return 1
  if base == 0 or base == 1:
    return base
  if base == -1:
    return 1 if exponent % 2 == 0 else -1
  # |base| >= 2 from here, so 2**32 already overflows
  if exponent >= 32 or not in_range(base):
    return None
  ok, result = _checked_pow_kernel(base, exponent, INT_MIN, INT_MAX)
  if not ok:
    return None
  return int(result)


def apply_operator(op: OpType, left: int, right: int) -> Optional[int]:
  """Evaluate one operator on two integers, None if the combination is invalid.

  Invalid means: division by zero or inexact division, a negative difference,
  a negative exponent, or any result outside the 32-bit range.
  """
  if op == OpType.ADD:
    result = left + right
  elif op == OpType.SUB:
    if left < right:
      return None
    result = left - right
  elif op == OpType.MUL:
    result = left * right
  elif op == OpType.DIV:
    if right == 0 or left % right != 0:
      return None
    result = left // right
  elif op == OpType.POW:
    return checked_power(left, right)
  else:
    raise ValueError(f"Unknown operator: {op!r}")

  if not in_range(result):
    return None
  return result


def is_redundant(op: OpType, left: int, right: int) -> bool:
  """Valid but redundant combinations that are produced another way.

  Dividing zero (kept as multiply by zero), dividing by one, subtracting zero
  and raising to the first power all equal a simpler expression.
  """
  if op == OpType.DIV:
    return left == 0 or right == 1
  if op == OpType.SUB:
    return right == 0
  if op == OpType.POW:
    return right == 1
  return False
