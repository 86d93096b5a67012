import time
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence
from .expression_tree import Expression, Node, ExpressionValidator, ExpressionCanonicalizer, SymPyVerifier
from .expression_tree.utils import get_leaf_values, recompute_value
from .generator import ExpressionGenerator, filter_target
from .logging_system import LogLevel, get_logger, set_log_level, log_milestone, log_info

DEFAULT_TARGET = 10


class TargetSolver:
  """Finds every distinct way to combine an ordered list of numbers into a target value.

  The pipeline is generate -> keep values equal to the target -> canonicalize
  -> drop equivalent duplicates -> stable sort by complexity -> render.
  """

  def __init__(self,
               target: int = DEFAULT_TARGET,
               prune_redundant: bool = True,
               max_canonical_passes: int = 1000,
               strict_convergence: bool = True,
               verify_results: bool = False,
               log_level: Optional[LogLevel] = None):

    self.target = target
    self.prune_redundant = prune_redundant
    self.verify_results = verify_results

    if log_level is not None:
      set_log_level(log_level)

    self.generator = ExpressionGenerator(prune_redundant=prune_redundant)
    self.canonicalizer = ExpressionCanonicalizer(
      validator=ExpressionValidator(prune_redundant=prune_redundant),
      max_passes=max_canonical_passes,
      strict=strict_convergence
    )
    self.verifier = SymPyVerifier() if verify_results else None
    self.last_stats: Dict[str, Any] = {}

  def solve_expressions(self, numbers: Sequence[int]) -> List[Expression]:
    """Ranked, deduplicated solutions as expression objects"""
    start_time = time.time()
    stats: Dict[str, Any] = {
      'numbers': len(numbers),
      'target': self.target,
      'generated': 0,
      'matched': 0,
      'unique': 0,
      'canonical_passes': 0,
      'rewrites': 0,
    }

    candidates = self._count_generated(self.generator.generate(numbers), stats)

    kept: List[Node] = []
    for match in filter_target(candidates, self.target):
      stats['matched'] += 1
      canonical = self.canonicalizer.canonicalize(match)
      stats['canonical_passes'] += self.canonicalizer.last_pass_count
      stats['rewrites'] += self.canonicalizer.last_rewrite_count

      if any(canonical.is_equivalent(existing) for existing in kept):
        continue
      kept.append(canonical)

    # sorted() is stable, so equal scores keep discovery order
    ranked = sorted(kept, key=lambda node: node.complexity())
    stats['unique'] = len(ranked)

    if self.verifier is not None:
      self._verify(ranked, numbers)

    elapsed = time.time() - start_time
    self.last_stats = stats
    log_milestone(
      f"{list(numbers)} -> {self.target}: {stats['unique']} unique of "
      f"{stats['matched']} matching, {stats['generated']} generated ({elapsed:.3f}s)"
    )
    get_logger().search_summary(stats, elapsed)

    return [Expression(node) for node in ranked]

  def solve(self, numbers: Sequence[int]) -> List[str]:
    """Rendered solutions, simplest first"""
    expressions = self.solve_expressions(numbers)
    return [expression.to_string() for expression in expressions]

  def _verify(self, solutions: List[Node], numbers: Sequence[int]):
    """Re-check every solution independently of the cached values"""
    expected_leaves = sorted(numbers)
    for node in solutions:
      text = node.to_string()
      problem = None
      if sorted(get_leaf_values(node)) != expected_leaves:
        problem = f"uses {get_leaf_values(node)} instead of {list(numbers)}"
      elif not ExpressionValidator.is_valid_expression(node, prune_redundant=self.prune_redundant):
        problem = "contains an invalid operation"
      elif recompute_value(node) != self.target:
        problem = f"recomputes to {recompute_value(node)}"
      elif not self.verifier.verify(text, self.target) or not self.verifier.matches_tree(node):
        problem = f"does not evaluate to {self.target} as rendered"

      if problem is not None:
        message = f"Solution '{text}' {problem}"
        get_logger().critical(message)
        raise RuntimeError(message)
    log_info("All rendered solutions verified", LogLevel.DETAILED)

  @staticmethod
  def _count_generated(candidates: Iterable[Node], stats: Dict[str, Any]) -> Iterator[Node]:
    for candidate in candidates:
      stats['generated'] += 1
      yield candidate


def solve(numbers: Sequence[int], target: int = DEFAULT_TARGET) -> List[str]:
  """All distinct expressions over `numbers`, in order, that evaluate to `target`.

  Returns rendered infix strings ranked simplest first; empty if there is no
  solution or no input.
  """
  return TargetSolver(target=target).solve(numbers)
