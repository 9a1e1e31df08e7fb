"""Diagram and step-text rendering for the tutorial page."""

import math
from collections import defaultdict
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import networkx as nx

from .actions import EdgeField, NodeField, Step
from .tree import NodeKind, Tree

COLOR_ENTERED = "#ffd166"
COLOR_PRUNED = "#eeeeee"
COLOR_VALUED = "#90ee90"
COLOR_UNTOUCHED = "#c5d6ff"
EDGE_DEFAULT = "#333333"
EDGE_ENTERED = "#e07a00"
EDGE_PRUNED = "#cccccc"

NODE_SHAPES = {NodeKind.MAX: "^", NodeKind.MIN: "v", NodeKind.LEAF: "s", NodeKind.RAND: "o"}


def fmt_inf(x) -> str:
    if x is None:
        return ""
    if x == math.inf:
        return "∞"
    if x == -math.inf:
        return "-∞"
    return str(x)


def to_graph(tree: Tree) -> nx.DiGraph:
    G = nx.DiGraph()
    for n in tree.walk():
        G.add_node(n.id)
        for ch in n.children:
            G.add_edge(n.id, ch)
    return G


def hierarchy_pos(G, root, width=2.8, vert_gap=0.28, vert_loc=1.0, xcenter=0.0, sibling_sep=0.0):
    """Place nodes in a tidy top-down hierarchy."""
    children = defaultdict(list)
    for u, v in G.edges():
        children[u].append(v)

    subtree_leaves = {}
    def count_leaves(n):
        if not children[n]:
            subtree_leaves[n] = 1
        else:
            subtree_leaves[n] = sum(count_leaves(c) for c in children[n])
        return subtree_leaves[n]
    count_leaves(root)

    pos = {}
    def place(n, left, right, y):
        pos[n] = ((left + right) / 2.0, y)
        k = len(children[n])
        if k == 0:
            return
        avail = max((right - left) - sibling_sep * (k - 1), 0.0)
        start = left
        for i, c in enumerate(children[n]):
            w = avail * subtree_leaves[c] / subtree_leaves[n]
            place(c, start, start + w, y - vert_gap)
            start += w
            if i < k - 1:
                start += sibling_sep

    place(root, xcenter - width/2, xcenter + width/2, vert_loc)
    return pos


def bound_lines(tree: Tree, node_id: int, use_ab: bool) -> List[str]:
    """α/β labels, or the single cutoff range in cutoff mode."""
    node = tree.nodes[node_id]
    if node.is_leaf:
        return []
    a, b = node.alpha, node.beta
    if a is None or b is None:
        return []
    if use_ab:
        return [f"α: {fmt_inf(a)}", f"β: {fmt_inf(b)}"]
    if node.kind is NodeKind.MAX:
        return [f"c ≥ {fmt_inf(b)}"]
    if node.kind is NodeKind.MIN:
        return [f"c ≤ {fmt_inf(a)}"]
    return []


def node_label(tree: Tree, node_id: int, use_ab: bool) -> str:
    node = tree.nodes[node_id]
    lines = [fmt_inf(node.value) if node.value is not None else "·"]
    lines.extend(bound_lines(tree, node_id, use_ab))
    return "\n".join(lines)


def node_color(tree: Tree, node_id: int) -> str:
    node = tree.nodes[node_id]
    edge = tree.edge_to_parent(node_id)
    if node.entered and not node.is_leaf:
        return COLOR_ENTERED
    if node.is_leaf and edge is not None and edge.entered:
        return COLOR_ENTERED
    if node.pruned or (edge is not None and edge.pruned):
        return COLOR_PRUNED
    if node.value is not None:
        return COLOR_VALUED
    return COLOR_UNTOUCHED


def edge_color(tree: Tree, child_id: int) -> str:
    edge = tree.edges[child_id]
    if edge.pruned:
        return EDGE_PRUNED
    if edge.entered:
        return EDGE_ENTERED
    return EDGE_DEFAULT


def draw_tree(tree: Tree, use_ab: bool = True, title: str = "", compact: bool = True):
    """Draw the tree's visible state; returns the matplotlib figure."""
    n_leaves = len(tree.leaves())
    fig_w = 8.0 if compact else 10.5
    fig_h = 5.0 if compact else 6.2
    node_size = max(500, 1600 - 40 * n_leaves) if compact else 2000
    font_size = 8 if compact else 10

    fig = plt.figure(figsize=(fig_w, fig_h))
    ax = plt.gca()
    ax.margins(0.05 if compact else 0.15)
    ax.set_axis_off()
    if tree.root_id is None:
        return fig

    G = to_graph(tree)
    pos = hierarchy_pos(G, tree.root_id, width=5.0, vert_gap=0.34, sibling_sep=0.10)

    for style, pruned in (("solid", False), ("dashed", True)):
        edgelist = [(u, v) for u, v in G.edges() if tree.edges[v].pruned is pruned]
        if not edgelist:
            continue
        nx.draw_networkx_edges(
            G, pos, edgelist=edgelist, ax=ax, arrows=False, style=style,
            edge_color=[edge_color(tree, v) for _, v in edgelist],
            width=[2.4 if tree.edges[v].entered else 1.2 for _, v in edgelist],
        )
    by_shape: Dict[str, List[int]] = defaultdict(list)
    for n in tree.walk():
        by_shape[NODE_SHAPES[n.kind]].append(n.id)
    for shape, ids in by_shape.items():
        nx.draw_networkx_nodes(
            G, pos, nodelist=ids, ax=ax, node_shape=shape, node_size=node_size,
            node_color=[node_color(tree, nid) for nid in ids], edgecolors="#555555",
        )
    nx.draw_networkx_labels(
        G, pos, {nid: node_label(tree, nid, use_ab) for nid in G.nodes()},
        ax=ax, font_size=font_size,
    )
    ax.set_title(title)
    fig.tight_layout()
    return fig


# =========================
# Step explainer
# =========================
def describe_step(tree: Tree, step: Optional[Step]) -> List[str]:
    """Readable lines for one playback step, in the order its actions play."""
    if not step:
        return []
    lines: List[str] = []
    for action in step:
        nid = action.target
        if nid is None:
            continue
        node = tree.nodes[nid]
        f = action.field
        if f is NodeField.ENTERED and action.new:
            if node.is_leaf:
                lines.append(f"Evaluate leaf {nid} = {fmt_inf(node.value)}.")
            else:
                lines.append(f"Enter {node.kind.value} node {nid}.")
        elif f is NodeField.ENTERED:
            lines.append(f"Leave node {nid}.")
        elif f is NodeField.VALUE:
            lines.append(f"Node {nid} value → {fmt_inf(action.new)}.")
        elif f in (NodeField.ALPHA, NodeField.BETA):
            name = "α" if f is NodeField.ALPHA else "β"
            lines.append(f"Node {nid} {name} = {fmt_inf(action.new)}.")
        elif f is NodeField.PRUNED:
            lines.append(f"Cutoff at node {nid} (β ≤ α): remaining children pruned.")
        elif f is EdgeField.PRUNED:
            lines.append(f"Prune edge {tree.edges[nid].parent}→{nid}.")
    return lines
