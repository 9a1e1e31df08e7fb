"""
Tests for the tree model and generator.
"""

import random

import pytest

from abtutor.tree import NodeKind, create_tree, generate_root, tree_from_leaves
from tests.helpers import random_tree


class TestNodeKind:
    def test_opposite_swaps_max_and_min(self):
        assert NodeKind.MAX.opposite() is NodeKind.MIN
        assert NodeKind.MIN.opposite() is NodeKind.MAX

    def test_opposite_keeps_other_kinds(self):
        assert NodeKind.LEAF.opposite() is NodeKind.LEAF
        assert NodeKind.RAND.opposite() is NodeKind.RAND


class TestGenerateRoot:
    def test_node_count_matches_shape(self):
        """A complete tree has sum(bf**i) nodes for i < depth."""
        tree = random_tree(3, depth=4, branching_factor=3)
        assert len(tree.nodes) == 1 + 3 + 9 + 27
        assert len(tree.edges) == len(tree.nodes) - 1
        assert len(tree.leaves()) == 27

    def test_kinds_alternate_and_leaves_at_depth(self):
        tree = random_tree(5, kind=NodeKind.MIN, depth=4, branching_factor=2)
        for node in tree.walk():
            if node.depth == tree.depth:
                assert node.kind is NodeKind.LEAF
                assert not node.children
            else:
                expected = NodeKind.MIN if node.depth % 2 == 1 else NodeKind.MAX
                assert node.kind is expected
                assert len(node.children) == node.child_slots == 2

    def test_parent_and_edge_links(self):
        tree = random_tree(11)
        root = tree.root
        assert root.parent is None
        assert tree.edge_to_parent(root.id) is None
        for node in tree.walk():
            if node.id == root.id:
                continue
            parent = tree.nodes[node.parent]
            assert node.id in parent.children
            assert node.depth == parent.depth + 1
            edge = tree.edges[node.id]
            assert (edge.parent, edge.child) == (parent.id, node.id)
            assert edge.pruned is False and edge.entered is False

    def test_leaf_values_in_range_and_interior_empty(self):
        tree = random_tree(2, depth=5, branching_factor=2)
        for node in tree.walk():
            if node.is_leaf:
                assert -20 <= node.value <= 20
                assert isinstance(node.value, int)
            else:
                assert node.value is None and node.alpha is None and node.beta is None

    def test_seeded_generation_is_deterministic(self):
        a, b = random_tree(99), random_tree(99)
        assert [n.value for n in a.leaves()] == [n.value for n in b.leaves()]

    def test_regeneration_replaces_arena(self):
        """Ids restart for each generation pass and the old solution is dropped."""
        tree = create_tree(NodeKind.MAX, 3, 2)
        generate_root(tree, rng=random.Random(0))
        tree.solution = object()
        root = generate_root(tree, rng=random.Random(1))
        assert root.id == 1
        assert sorted(tree.nodes) == list(range(1, 8))
        assert tree.solution is None

    def test_root_is_returned_and_assigned(self):
        tree = create_tree(NodeKind.MAX, 3, 2)
        root = generate_root(tree, rng=random.Random(0))
        assert tree.root is root
        assert root.kind is NodeKind.MAX and root.depth == 1


class TestTreeFromLeaves:
    def test_builds_left_to_right(self, small_max_tree):
        assert small_max_tree.depth == 3
        assert [n.value for n in small_max_tree.leaves()] == [3, 5, 2, 9]
        assert [n.id for n in small_max_tree.walk()] == list(range(1, 8))

    @pytest.mark.parametrize("leaves, bf", [([1, 2, 3], 2), ([1], 2), ([1, 2, 3, 4, 5, 6], 3)])
    def test_rejects_incomplete_leaf_counts(self, leaves, bf):
        with pytest.raises(ValueError):
            tree_from_leaves(NodeKind.MAX, bf, leaves)

    def test_rejects_small_branching(self):
        with pytest.raises(ValueError):
            tree_from_leaves(NodeKind.MAX, 1, [1, 2])


class TestSnapshot:
    def test_snapshot_tracks_visible_fields(self, small_max_tree):
        before = small_max_tree.snapshot()
        small_max_tree.edges[3].entered = True
        assert small_max_tree.snapshot() != before
        small_max_tree.edges[3].entered = False
        assert small_max_tree.snapshot() == before
