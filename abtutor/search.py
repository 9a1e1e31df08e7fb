"""Alpha-beta search compiled into a replayable step log.

``compile_search`` runs one alpha-beta search over a tree and returns a
``StepQueue`` whose steps, played in order from a reset tree, reproduce every
highlight, bound and value change the search makes. As a side effect it writes
the search's answers into ``tree.solution``, which playback never touches.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .actions import Action, EdgeField, NodeField, Step, StepQueue
from .tree import NodeKind, Solution, Tree

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    algorithm: str
    visited: int = 0
    prunes: int = 0              # child subtrees skipped by a cutoff
    time_s: float = 0.0


@dataclass
class _Frame:
    """Result of searching one subtree."""
    value: float
    enter: Step
    inner: List[Step] = field(default_factory=list)
    exit: Step = field(default_factory=list)


def compile_search(tree: Tree, stats: Optional[SearchStats] = None) -> StepQueue:
    queue = StepQueue(tree)
    if tree.root_id is None:
        return queue
    stats = stats or SearchStats("Alpha–Beta")
    solution = Solution()

    def prune_subtree(child_id: int) -> Step:
        actions: Step = []
        for n in tree.walk(child_id):
            actions.append(Action.edge(n.id, EdgeField.PRUNED, False, True))
            solution.edges[n.id] = True
        return actions

    def visit(node_id: int, a: float, b: float, maximizing: bool) -> _Frame:
        node = tree.nodes[node_id]
        stats.visited += 1
        has_edge = node_id in tree.edges
        enter: Step = []
        if has_edge:
            enter.append(Action.edge(node_id, EdgeField.ENTERED, False, True))
        enter.append(Action.node(node_id, NodeField.ENTERED, False, True))

        if node.is_leaf:
            solution.node(node_id).value = node.value
            leave = [Action.edge(node_id, EdgeField.ENTERED, True, False)] if has_edge else []
            return _Frame(node.value, enter, [], leave)

        shadow = solution.node(node_id)
        enter.append(Action.node(node_id, NodeField.ALPHA, None, a))
        enter.append(Action.node(node_id, NodeField.BETA, None, b))
        shadow.alpha, shadow.beta = a, b

        best = -math.inf if maximizing else math.inf
        inner: List[Step] = []
        carry: Step = []        # exit actions of the last child actually searched
        cut = pruned_any = False
        for child_id in node.children:
            if cut:
                stats.prunes += 1
                pruned_any = True
                carry.extend(prune_subtree(child_id))
                continue
            child = visit(child_id, a, b, not maximizing)
            updates: Step = []
            if (child.value > best) if maximizing else (child.value < best):
                updates.append(Action.node(node_id, NodeField.VALUE, shadow.value, child.value))
                best = shadow.value = child.value
            if maximizing and child.value > a:
                updates.append(Action.node(node_id, NodeField.ALPHA, a, child.value))
                a = shadow.alpha = child.value
            elif not maximizing and child.value < b:
                updates.append(Action.node(node_id, NodeField.BETA, b, child.value))
                b = shadow.beta = child.value
            # a leaf's evaluation and its parent's bookkeeping share one step
            if child.inner:
                child.exit.extend(updates)
            else:
                child.enter.extend(updates)
            # the previous sibling's exit plays together with this child's entry
            inner.append(carry + child.enter)
            inner.extend(child.inner)
            carry = child.exit
            if b <= a:
                cut = True

        if pruned_any:
            carry.append(Action.node(node_id, NodeField.PRUNED, False, True))
            shadow.pruned = True
        inner.append(carry)

        leave: Step = []
        if has_edge:
            leave.append(Action.edge(node_id, EdgeField.ENTERED, True, False))
        leave.append(Action.node(node_id, NodeField.ENTERED, True, False))
        return _Frame(best, enter, inner, leave)

    t0 = time.perf_counter()
    res = visit(tree.root_id, -math.inf, math.inf, tree.kind is NodeKind.MAX)
    stats.time_s = time.perf_counter() - t0

    queue.push_step(res.enter)
    queue.push_steps(res.inner)
    queue.push_step(res.exit)
    tree.solution = solution
    logger.debug("Compiled search: %d steps, root value %s, visited %d, pruned %d",
                 len(queue), res.value, stats.visited, stats.prunes)
    return queue


def minimax_value(tree: Tree, node_id: Optional[int] = None,
                  stats: Optional[SearchStats] = None) -> Tuple[float, SearchStats]:
    """Plain minimax without pruning; independent of any compiled log."""
    stats = stats or SearchStats("Minimax")
    start = tree.root_id if node_id is None else node_id
    if start is None:
        return math.nan, stats

    def mm(nid: int, maximizing: bool) -> float:
        stats.visited += 1
        node = tree.nodes[nid]
        if node.is_leaf:
            return node.value
        vals = [mm(ch, not maximizing) for ch in node.children]
        return max(vals) if maximizing else min(vals)

    maximizing = tree.nodes[start].kind is NodeKind.MAX
    t0 = time.perf_counter()
    val = mm(start, maximizing)
    stats.time_s = time.perf_counter() - t0
    return val, stats
