from collections.abc import Iterator

import pytest

from expression_search import ExpressionGenerator, ExpressionValidator, NumberNode, OpType, filter_target
from expression_search.expression_tree.utils.tree_utils import get_leaf_values


def test_single_number_yields_one_leaf():
    candidates = list(ExpressionGenerator().generate([7]))
    assert len(candidates) == 1
    assert isinstance(candidates[0], NumberNode)
    assert candidates[0].value == 7


def test_empty_input_yields_nothing():
    assert list(ExpressionGenerator().generate([])) == []


def test_generation_is_lazy():
    candidates = ExpressionGenerator().generate([1, 2, 3, 4, 5, 6])
    assert isinstance(candidates, Iterator)
    first = next(candidates)
    assert sorted(get_leaf_values(first)) == [1, 2, 3, 4, 5, 6]


def test_two_numbers_all_operators():
    strings = [c.to_string() for c in ExpressionGenerator().generate([2, 3])]
    assert strings == ["3 + 2", "3 - 2", "3 * 2", "3 ^ 2", "2 ^ 3"]


def test_equal_operands_are_not_swapped():
    strings = [c.to_string() for c in ExpressionGenerator().generate([4, 4])]
    assert strings == ["4 + 4", "4 - 4", "4 * 4", "4 / 4", "4 ^ 4"]


def test_redundant_forms_are_pruned_by_default():
    pruned = [c.to_string() for c in ExpressionGenerator().generate([6, 1])]
    assert pruned == ["1 + 6", "6 - 1", "1 * 6", "1 ^ 6"]

    unpruned = [c.to_string() for c in ExpressionGenerator(prune_redundant=False).generate([6, 1])]
    assert unpruned == ["1 + 6", "6 - 1", "1 * 6", "6 / 1", "1 ^ 6", "6 ^ 1"]


def test_every_candidate_uses_every_number_and_is_valid():
    count = 0
    for candidate in ExpressionGenerator().generate([1, 2, 3, 4]):
        count += 1
        assert sorted(get_leaf_values(candidate)) == [1, 2, 3, 4]
        assert ExpressionValidator.is_valid_expression(candidate, prune_redundant=True)
    assert count > 0


def test_only_contiguous_groups_are_combined():
    allowed = [{1}, {2, 3}, {1, 2}, {3}]
    for candidate in ExpressionGenerator().generate([1, 2, 3]):
        assert set(get_leaf_values(candidate.left)) in allowed
        assert set(get_leaf_values(candidate.right)) in allowed


def test_operator_subset():
    generator = ExpressionGenerator(operators=[OpType.ADD, OpType.MUL])
    strings = [c.to_string() for c in generator.generate([2, 3])]
    assert strings == ["3 + 2", "3 * 2"]


def test_non_integer_input_raises():
    with pytest.raises(TypeError):
        ExpressionGenerator().generate([1.5, 2])


def test_filter_target():
    matches = list(filter_target(ExpressionGenerator().generate([2, 3]), 6))
    assert [m.to_string() for m in matches] == ["3 * 2"]
    assert list(filter_target(ExpressionGenerator().generate([2, 3]), 100)) == []


def test_validator_style_rules_are_configurable():
    strict = ExpressionValidator()
    relaxed = ExpressionValidator(prune_redundant=False)

    for left, right, operator in [(0, 5, OpType.DIV), (6, 1, OpType.DIV),
                                  (4, 0, OpType.SUB), (3, 1, OpType.POW)]:
        assert strict.combine(NumberNode(left), NumberNode(right), operator) is None
        assert relaxed.combine(NumberNode(left), NumberNode(right), operator) is not None

    # hard validity does not depend on the setting
    for left, right, operator in [(5, 0, OpType.DIV), (3, 5, OpType.SUB), (2, -1, OpType.POW)]:
        assert strict.combine(NumberNode(left), NumberNode(right), operator) is None
        assert relaxed.combine(NumberNode(left), NumberNode(right), operator) is None


def test_tree_validity_check():
    node = ExpressionValidator(prune_redundant=False).combine(NumberNode(4), NumberNode(0), OpType.SUB)
    assert ExpressionValidator.is_valid_expression(node)
    assert not ExpressionValidator.is_valid_expression(node, prune_redundant=True)


def test_collected_side_is_the_left_operand():
    first = next(ExpressionGenerator().generate([1, 2, 3]))
    assert first.to_string() == "1 + (3 + 2)"

    # equal halves collect the suffix
    first = next(ExpressionGenerator().generate([1, 2, 3, 4]))
    assert get_leaf_values(first.left) == [1]
    splits = [(sorted(get_leaf_values(c.left)), sorted(get_leaf_values(c.right)))
              for c in ExpressionGenerator(operators=[OpType.ADD]).generate([1, 2, 3, 4])]
    assert ([3, 4], [1, 2]) in splits
    assert ([1, 2], [3, 4]) not in splits
