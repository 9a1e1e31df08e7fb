"""Game tree model and random tree generation.

Nodes and edges live in per-tree tables keyed by integer id. The edge that
connects a node to its parent is stored under the child's id, so every
non-root node has exactly one incoming edge and the root has none.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

from . import config

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    MAX = "MAX"
    MIN = "MIN"
    RAND = "RAND"  # declared but never generated or searched
    LEAF = "LEAF"

    def opposite(self) -> "NodeKind":
        if self is NodeKind.MAX:
            return NodeKind.MIN
        if self is NodeKind.MIN:
            return NodeKind.MAX
        return self


# =========================
# Data structures
# =========================
@dataclass
class Node:
    id: int
    kind: NodeKind
    depth: int                   # 1 = root
    child_slots: int
    children: List[int] = field(default_factory=list)
    parent: Optional[int] = None
    # visible state, what the learner sees and edits
    value: Optional[float] = None
    alpha: Optional[float] = None
    beta: Optional[float] = None
    entered: bool = False
    pruned: bool = False

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF


@dataclass
class Edge:
    parent: int
    child: int
    pruned: bool = False
    entered: bool = False


@dataclass
class NodeSolution:
    value: Optional[float] = None
    alpha: Optional[float] = None
    beta: Optional[float] = None
    pruned: bool = False


@dataclass
class Solution:
    """Ground truth recorded by one search run, keyed by node id / edge child id."""
    nodes: Dict[int, NodeSolution] = field(default_factory=dict)
    edges: Dict[int, bool] = field(default_factory=dict)

    def node(self, node_id: int) -> NodeSolution:
        if node_id not in self.nodes:
            self.nodes[node_id] = NodeSolution()
        return self.nodes[node_id]

    def edge_pruned(self, child_id: int) -> bool:
        return self.edges.get(child_id, False)


@dataclass
class Tree:
    kind: NodeKind = NodeKind.MAX
    depth: int = config.DEFAULT_DEPTH
    branching_factor: int = config.DEFAULT_BRANCHING_FACTOR
    mutable: bool = True
    root_id: Optional[int] = None
    nodes: Dict[int, Node] = field(default_factory=dict)
    edges: Dict[int, Edge] = field(default_factory=dict)
    solution: Optional[Solution] = None
    _next_id: int = 1

    @property
    def root(self) -> Optional[Node]:
        if self.root_id is None:
            return None
        return self.nodes[self.root_id]

    def clear(self) -> None:
        self.root_id = None
        self.nodes = {}
        self.edges = {}
        self.solution = None
        self._next_id = 1

    def add_node(self, kind: NodeKind, depth: int, parent: Optional[int] = None) -> Node:
        node = Node(self._next_id, kind, depth, self.branching_factor, parent=parent)
        self._next_id += 1
        self.nodes[node.id] = node
        if parent is None:
            self.root_id = node.id
        else:
            self.nodes[parent].children.append(node.id)
            self.edges[node.id] = Edge(parent, node.id)
        return node

    def edge_to_parent(self, node_id: int) -> Optional[Edge]:
        return self.edges.get(node_id)

    def walk(self, node_id: Optional[int] = None) -> Iterator[Node]:
        """Pre-order traversal, children in slot order."""
        start = self.root_id if node_id is None else node_id
        if start is None:
            return
        stack = [start]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> List[Node]:
        return [n for n in self.walk() if n.is_leaf]

    def snapshot(self) -> dict:
        """Every visible field of every node and edge."""
        return {
            "nodes": {
                nid: (n.value, n.alpha, n.beta, n.entered, n.pruned)
                for nid, n in self.nodes.items()
            },
            "edges": {cid: (e.pruned, e.entered) for cid, e in self.edges.items()},
        }


# =========================
# Construction
# =========================
def create_tree(kind: NodeKind = NodeKind.MAX,
                depth: int = config.DEFAULT_DEPTH,
                branching_factor: int = config.DEFAULT_BRANCHING_FACTOR) -> Tree:
    return Tree(kind=NodeKind(kind), depth=depth, branching_factor=branching_factor)


def generate_root(tree: Tree,
                  min_val: int = config.MIN_VALUE,
                  max_val: int = config.MAX_VALUE,
                  rng: Optional[random.Random] = None) -> Node:
    """Replace the tree's nodes with a complete tree of random leaf scores.

    Kinds alternate MAX/MIN level by level starting from ``tree.kind``; nodes
    at ``tree.depth`` become leaves with an integer drawn uniformly from
    ``[min_val, max_val]``. The caller clamps depth >= 1 and branching >= 2.
    """
    rng = rng or random
    tree.clear()

    def rec(parent: Optional[int], kind: NodeKind, depth: int) -> Node:
        if depth == tree.depth:
            node = tree.add_node(NodeKind.LEAF, depth, parent)
            node.value = rng.randint(min_val, max_val)
            return node
        node = tree.add_node(kind, depth, parent)
        for _ in range(tree.branching_factor):
            rec(node.id, kind.opposite(), depth + 1)
        return node

    root = rec(None, tree.kind, 1)
    logger.info("Generated %s tree depth=%d branching=%d (%d nodes)",
                tree.kind.value, tree.depth, tree.branching_factor, len(tree.nodes))
    return root


def tree_from_leaves(kind: NodeKind, branching_factor: int, leaves: Sequence[float]) -> Tree:
    """Build a complete tree whose leaves, left to right, carry ``leaves``."""
    if branching_factor < 2:
        raise ValueError(f"branching factor must be >= 2, got {branching_factor}")
    count, depth = len(leaves), 1
    while count > 1 and count % branching_factor == 0:
        count //= branching_factor
        depth += 1
    if count != 1 or depth < 2:
        raise ValueError(
            f"{len(leaves)} leaves is not a power of branching factor {branching_factor}")

    tree = create_tree(kind, depth, branching_factor)
    values = iter(leaves)

    def rec(parent: Optional[int], kind: NodeKind, depth: int) -> None:
        if depth == tree.depth:
            tree.add_node(NodeKind.LEAF, depth, parent).value = next(values)
            return
        node = tree.add_node(kind, depth, parent)
        for _ in range(branching_factor):
            rec(node.id, kind.opposite(), depth + 1)

    rec(None, tree.kind, 1)
    return tree


# Sample tree for the tutorial page: three MIN nodes under a MAX root.
SAMPLE_LEAVES = [3, 12, 8, 2, 4, 6, 14, 5, 2]


def sample_tree() -> Tree:
    return tree_from_leaves(NodeKind.MAX, 3, SAMPLE_LEAVES)
