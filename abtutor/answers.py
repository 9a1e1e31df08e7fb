"""Learner annotations: editing, resetting, revealing and checking them."""

import logging
from typing import Optional

from .tree import Solution, Tree

logger = logging.getLogger(__name__)

# partial input that means "no value yet"
_BLANK_INPUTS = {"", "-", ".", "-."}


def _require_solution(tree: Tree) -> Solution:
    if tree.solution is None:
        raise ValueError("tree has no solution; compile a search first")
    return tree.solution


def reset_tree(tree: Tree) -> None:
    """Clear interior values/bounds and all highlight and prune flags.

    Leaf scores and the solution table are left alone.
    """
    for node in tree.walk():
        node.entered = False
        node.pruned = False
        edge = tree.edge_to_parent(node.id)
        if edge is not None:
            edge.entered = False
            edge.pruned = False
        if node.is_leaf:
            continue
        node.value = None
        node.alpha = None
        node.beta = None


def reveal_solution(tree: Tree) -> None:
    solution = _require_solution(tree)
    for node in tree.walk():
        edge = tree.edge_to_parent(node.id)
        if edge is not None:
            edge.pruned = solution.edge_pruned(node.id)
        if node.is_leaf:
            continue
        shadow = solution.nodes.get(node.id)
        if shadow is None:
            # never searched: lies inside a pruned subtree
            node.value = node.alpha = node.beta = None
            node.pruned = False
            continue
        node.value = shadow.value
        node.alpha = shadow.alpha
        node.beta = shadow.beta
        node.pruned = shadow.pruned


def verify(tree: Tree) -> bool:
    """True when every interior value and every pruned edge matches the solution.

    Leaves always count as correct. Edges the search did not prune are not
    checked, so marking extra edges pruned is not penalised.
    """
    solution = _require_solution(tree)
    for node in tree.walk():
        if solution.edge_pruned(node.id) and not tree.edges[node.id].pruned:
            return False
        if node.is_leaf:
            continue
        shadow = solution.nodes.get(node.id)
        expected = shadow.value if shadow is not None else None
        if node.value != expected:
            return False
    return True


# =========================
# Learner edits
# =========================
def parse_value(text: str) -> Optional[float]:
    """Parse node input text; ``None`` for blank input, ``ValueError`` if malformed."""
    text = text.strip()
    if text in _BLANK_INPUTS:
        return None
    num = float(text)
    return int(num) if num.is_integer() else num


def set_value_text(tree: Tree, node_id: int, text: str) -> bool:
    """Set a node's visible value from typed text.

    Blank or partial input clears the value. Text that does not parse keeps
    the previous value. Returns False when the edit was rejected.
    """
    if not tree.mutable:
        return False
    try:
        value = parse_value(text)
    except ValueError:
        logger.debug("Ignoring unparseable value %r for node %d", text, node_id)
        return False
    tree.nodes[node_id].value = value
    return True


def toggle_edge_pruned(tree: Tree, child_id: int) -> bool:
    """Flip the pruned mark on the edge above ``child_id``."""
    if not tree.mutable:
        return False
    edge = tree.edge_to_parent(child_id)
    if edge is None:
        return False
    edge.pruned = not edge.pruned
    return True
