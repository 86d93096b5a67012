import pytest

from expression_search import (
    TargetSolver, ExpressionGenerator, ExpressionValidator, ExpressionCanonicalizer,
    SymPyVerifier, BinaryOpNode, NumberNode, OpType, filter_target, solve
)

SAMPLE_INPUTS = [
    ([1, 2, 3, 4], 10),
    ([2, 3, 5], 10),
    ([6, 2, 2], 10),
    ([8, 2, 6, 1], 24),
]


def test_two_equal_numbers():
    assert solve([5, 5], 10) == ["5 + 5"]


def test_single_number():
    assert solve([10], 10) == ["10"]
    assert solve([3], 10) == []


def test_empty_input():
    assert solve([], 10) == []


def test_negative_number_is_rendered_in_parentheses():
    assert solve([-2, 12], 10) == ["12 + (-2)"]


def test_non_integer_input_raises():
    with pytest.raises(TypeError):
        solve([1.5, 2])


def test_default_target_is_ten():
    assert solve([5, 5]) == solve([5, 5], 10)


def test_addition_orders_are_collapsed():
    solutions = solve([1, 2, 3, 4], 10)
    assert "4 + 3 + 2 + 1" in solutions
    assert len(solutions) == len(set(solutions))


def test_solutions_are_ranked_by_complexity():
    for numbers, target in SAMPLE_INPUTS:
        scores = [expr.complexity() for expr in TargetSolver(target=target).solve_expressions(numbers)]
        assert scores == sorted(scores)


def test_solutions_evaluate_to_target():
    verifier = SymPyVerifier()
    for numbers, target in SAMPLE_INPUTS:
        solutions = solve(numbers, target)
        assert solutions
        for solution in solutions:
            assert verifier.verify(solution, target), solution


def test_solutions_are_pairwise_distinct():
    for numbers, target in SAMPLE_INPUTS:
        expressions = TargetSolver(target=target).solve_expressions(numbers)
        for i, first in enumerate(expressions):
            for second in expressions[i + 1:]:
                assert not first.is_equivalent(second)


def test_solutions_are_valid_and_canonical():
    canonicalizer = ExpressionCanonicalizer()
    for numbers, target in SAMPLE_INPUTS:
        for expr in TargetSolver(target=target).solve_expressions(numbers):
            assert ExpressionValidator.is_valid_expression(expr.root, prune_redundant=True)
            assert canonicalizer.canonicalize(expr.root).structure() == expr.root.structure()


def test_unpruned_search_keeps_redundant_forms():
    pruned = solve([6, 1], 6)
    unpruned = TargetSolver(target=6, prune_redundant=False).solve([6, 1])
    assert pruned == ["6 * 1"]
    assert set(unpruned) == {"6 * 1", "6 / 1", "6 ^ 1"}


def test_stats_are_recorded():
    solver = TargetSolver(target=10)
    solutions = solver.solve([5, 5])
    stats = solver.last_stats
    assert stats['numbers'] == 2
    assert stats['target'] == 10
    assert stats['generated'] == 5
    assert stats['matched'] == 1
    assert stats['unique'] == len(solutions) == 1
    assert stats['canonical_passes'] >= 1


def test_verified_search():
    solver = TargetSolver(target=24, verify_results=True)
    solutions = solver.solve([8, 2, 6, 1])
    assert solutions
    assert solver.verifier is not None


FIVE_NUMBER_INPUTS = [
    [2, 2, 1, 8, 1],
    [1, 2, 3, 4, 5],
    [3, 1, 4, 1, 5],
]


def test_rendered_solutions_are_unique():
    for numbers in FIVE_NUMBER_INPUTS:
        out = solve(numbers, 10)
        assert len(set(out)) == len(out), numbers


def test_equal_scores_keep_discovery_order():
    canonicalizer = ExpressionCanonicalizer()
    for numbers, target in SAMPLE_INPUTS + [([2, 2, 1, 8, 1], 10)]:
        discovered = []
        for match in filter_target(ExpressionGenerator().generate(numbers), target):
            canonical = canonicalizer.canonicalize(match)
            if not any(canonical.is_equivalent(seen) for seen in discovered):
                discovered.append(canonical)
        position = {node.structure(): i for i, node in enumerate(discovered)}

        out = TargetSolver(target=target).solve_expressions(numbers)
        assert len(out) == len(discovered)
        for first, second in zip(out, out[1:]):
            if first.complexity() == second.complexity():
                assert position[first.root.structure()] < position[second.root.structure()]


def test_failed_verification_raises():
    solver = TargetSolver(target=10, verify_results=True)
    wrong = BinaryOpNode(OpType.ADD, NumberNode(3), NumberNode(2))
    with pytest.raises(RuntimeError):
        solver._verify([wrong], [3, 2])

    missing_leaf = BinaryOpNode(OpType.MUL, NumberNode(5), NumberNode(2))
    with pytest.raises(RuntimeError):
        solver._verify([missing_leaf], [5, 2, 1])
