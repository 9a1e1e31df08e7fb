from .actions import Action, EdgeField, NodeField, StepQueue
from .answers import reset_tree, reveal_solution, set_value_text, toggle_edge_pruned, verify
from .playback import PlaybackState, Tutor
from .search import SearchStats, compile_search, minimax_value
from .tree import (
    Edge,
    Node,
    NodeKind,
    NodeSolution,
    Solution,
    Tree,
    create_tree,
    generate_root,
    sample_tree,
    tree_from_leaves,
)

__version__ = "0.1.0"
