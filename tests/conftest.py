"""
Shared fixtures for tutor tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from abtutor.tree import NodeKind, sample_tree, tree_from_leaves


@pytest.fixture
def small_max_tree():
    """Depth 3, branching 2, MAX root, leaves 3 5 2 9 (ids 1..7 in pre-order)."""
    return tree_from_leaves(NodeKind.MAX, 2, [3, 5, 2, 9])


@pytest.fixture
def small_min_tree():
    return tree_from_leaves(NodeKind.MIN, 2, [3, 5, 2, 9])


@pytest.fixture
def sample():
    """MAX root over three MIN nodes: leaves 3 12 8 | 2 4 6 | 14 5 2."""
    return sample_tree()
