"""Session controller: owns the tree and its step log and gates playback."""

import logging
import random
from enum import Enum
from typing import Optional

from . import config
from .actions import StepQueue
from .answers import reset_tree, reveal_solution, set_value_text, toggle_edge_pruned, verify
from .search import SearchStats, compile_search
from .tree import NodeKind, Tree, create_tree, generate_root, sample_tree

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"          # no log yet
    ARMED = "armed"        # log compiled, not playing
    PLAYING = "playing"


def _clamp(val: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, val))


class Tutor:
    def __init__(self, kind: NodeKind = NodeKind.MAX,
                 depth: int = config.DEFAULT_DEPTH,
                 branching_factor: int = config.DEFAULT_BRANCHING_FACTOR,
                 rng: Optional[random.Random] = None):
        self.rng = rng
        self.tree: Tree = create_tree(kind, depth, branching_factor)
        self.queue: Optional[StepQueue] = None
        self.stats: Optional[SearchStats] = None
        self.regenerate()

    # ---- state ----
    @property
    def state(self) -> PlaybackState:
        if self.queue is None:
            return PlaybackState.IDLE
        if self.queue.in_action:
            return PlaybackState.PLAYING
        return PlaybackState.ARMED

    @property
    def playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def progress(self) -> float:
        return self.queue.progress if self.queue is not None else 0.0

    def _discard_queue(self) -> None:
        self.queue = None
        self.stats = None
        self.tree.mutable = True

    # ---- tree shape ----
    def regenerate(self) -> None:
        generate_root(self.tree, config.MIN_VALUE, config.MAX_VALUE, rng=self.rng)
        self._discard_queue()

    def load_sample(self) -> None:
        self.tree = sample_tree()
        self._discard_queue()

    def change_depth(self, delta: int) -> None:
        self.tree.depth = _clamp(self.tree.depth + delta, config.MIN_DEPTH, config.MAX_DEPTH)
        self.regenerate()

    def change_branching_factor(self, delta: int) -> None:
        self.tree.branching_factor = _clamp(self.tree.branching_factor + delta,
                                            config.MIN_BRANCHING_FACTOR,
                                            config.MAX_BRANCHING_FACTOR)
        self.regenerate()

    def flip_kind(self) -> None:
        self.tree.kind = self.tree.kind.opposite()
        self.regenerate()

    # ---- playback ----
    def ensure_queue(self) -> StepQueue:
        if self.queue is None:
            self.stats = SearchStats("Alpha–Beta")
            self.queue = compile_search(self.tree, self.stats)
        return self.queue

    def toggle_playback(self) -> PlaybackState:
        """Start or stop the animation; the tree is reset either way."""
        queue = self.ensure_queue()
        if queue.in_action:
            queue.go_to_beginning()
            queue.in_action = False
            reset_tree(self.tree)
            self.tree.mutable = True
            logger.info("Playback stopped")
        else:
            reset_tree(self.tree)
            queue.last_action = -1
            queue.in_action = True
            self.tree.mutable = False
            logger.info("Playback started (%d steps)", len(queue))
        return self.state

    def step_forward(self) -> bool:
        return self.queue is not None and self.queue.step_forward()

    def step_backward(self) -> bool:
        return self.queue is not None and self.queue.step_backward()

    def go_to_beginning(self) -> bool:
        return self.queue is not None and self.queue.go_to_beginning()

    def go_to_end(self) -> bool:
        return self.queue is not None and self.queue.go_to_end()

    # ---- learner tools ----
    def check_answer(self) -> bool:
        self.ensure_queue()
        return verify(self.tree)

    def reset(self) -> bool:
        if self.playing:
            return False
        reset_tree(self.tree)
        return True

    def show_solution(self) -> bool:
        if self.playing:
            return False
        self.ensure_queue()
        reveal_solution(self.tree)
        return True

    def set_value_text(self, node_id: int, text: str) -> bool:
        return set_value_text(self.tree, node_id, text)

    def toggle_edge(self, child_id: int) -> bool:
        return toggle_edge_pruned(self.tree, child_id)
