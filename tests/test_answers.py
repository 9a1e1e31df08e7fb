"""
Tests for reset, reveal, verify and learner edits.
"""

import pytest

from abtutor.answers import (
    parse_value,
    reset_tree,
    reveal_solution,
    set_value_text,
    toggle_edge_pruned,
    verify,
)
from abtutor.search import compile_search
from abtutor.tree import NodeKind
from tests.helpers import random_tree


def _interior(tree):
    return [n for n in tree.walk() if not n.is_leaf]


class TestResetTree:
    def test_clears_visible_state_and_keeps_leaves(self, sample):
        compile_search(sample)
        reveal_solution(sample)
        leaf_values = [n.value for n in sample.leaves()]
        sample.nodes[3].entered = True
        reset_tree(sample)
        for node in _interior(sample):
            assert (node.value, node.alpha, node.beta, node.pruned) == (None, None, None, False)
        assert [n.value for n in sample.leaves()] == leaf_values
        assert sample.nodes[3].entered is False
        assert not any(e.pruned or e.entered for e in sample.edges.values())

    def test_keeps_solution(self, sample):
        compile_search(sample)
        reset_tree(sample)
        assert sample.solution.node(1).value == 3


class TestRevealAndVerify:
    def test_reveal_copies_solution(self, sample):
        compile_search(sample)
        reveal_solution(sample)
        assert sample.nodes[1].value == 3
        assert (sample.nodes[6].alpha, sample.nodes[6].beta) == (3, 2)
        assert sample.nodes[6].pruned is True
        assert sample.edges[8].pruned and sample.edges[9].pruned
        assert not sample.edges[7].pruned
        assert verify(sample)

    def test_reset_tree_does_not_verify(self, sample):
        compile_search(sample)
        assert verify(sample) is False

    @pytest.mark.parametrize("seed", [3, 8, 21])
    def test_any_wrong_interior_value_fails(self, seed):
        tree = random_tree(seed, NodeKind.MIN, 4, 3)
        compile_search(tree)
        reveal_solution(tree)
        assert verify(tree)
        for node in _interior(tree):
            saved = node.value
            node.value = 999 if saved is None else saved + 1
            assert verify(tree) is False
            node.value = saved
        assert verify(tree)

    def test_unmarked_pruned_edge_fails(self, sample):
        compile_search(sample)
        reveal_solution(sample)
        sample.edges[9].pruned = False
        assert verify(sample) is False

    def test_extra_pruned_marks_are_not_checked(self, sample):
        compile_search(sample)
        reveal_solution(sample)
        sample.edges[12].pruned = True
        assert verify(sample)

    def test_leaf_values_are_not_checked(self, sample):
        compile_search(sample)
        reveal_solution(sample)
        sample.nodes[3].value = 100
        assert verify(sample)

    def test_requires_compiled_solution(self, sample):
        with pytest.raises(ValueError):
            verify(sample)
        with pytest.raises(ValueError):
            reveal_solution(sample)


class TestParseValue:
    @pytest.mark.parametrize("text", ["", "-", ".", "-.", "  "])
    def test_blank_inputs(self, text):
        assert parse_value(text) is None

    @pytest.mark.parametrize("text, expected", [("4", 4), ("-7", -7), ("2.5", 2.5), ("3.0", 3), (" 12 ", 12)])
    def test_numbers(self, text, expected):
        value = parse_value(text)
        assert value == expected
        assert type(value) is type(expected)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_value("abc")


class TestLearnerEdits:
    def test_set_value(self, sample):
        assert set_value_text(sample, 2, "3")
        assert sample.nodes[2].value == 3

    def test_partial_input_clears(self, sample):
        sample.nodes[2].value = 5
        assert set_value_text(sample, 2, "-")
        assert sample.nodes[2].value is None

    def test_unparseable_keeps_prior_value(self, sample):
        sample.nodes[2].value = 5
        assert set_value_text(sample, 2, "5x") is False
        assert sample.nodes[2].value == 5

    def test_edits_blocked_when_immutable(self, sample):
        sample.mutable = False
        assert set_value_text(sample, 2, "1") is False
        assert toggle_edge_pruned(sample, 3) is False
        assert sample.nodes[2].value is None
        assert sample.edges[3].pruned is False

    def test_toggle_edge(self, sample):
        assert toggle_edge_pruned(sample, 8)
        assert sample.edges[8].pruned is True
        assert toggle_edge_pruned(sample, 8)
        assert sample.edges[8].pruned is False

    def test_root_has_no_edge_to_toggle(self, sample):
        assert toggle_edge_pruned(sample, sample.root_id) is False

    def test_learner_answer_verifies(self, sample):
        compile_search(sample)
        for nid, text in {1: "3", 2: "3", 6: "2", 10: "2"}.items():
            set_value_text(sample, nid, text)
        toggle_edge_pruned(sample, 8)
        assert verify(sample) is False
        toggle_edge_pruned(sample, 9)
        assert verify(sample)
