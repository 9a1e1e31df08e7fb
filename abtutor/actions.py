"""Reversible field mutations grouped into playback steps."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from .tree import Tree

logger = logging.getLogger(__name__)


class NodeField(Enum):
    VALUE = "value"
    ALPHA = "alpha"
    BETA = "beta"
    ENTERED = "entered"
    PRUNED = "pruned"


class EdgeField(Enum):
    PRUNED = "pruned"
    ENTERED = "entered"


Field = Union[NodeField, EdgeField]


@dataclass(frozen=True)
class Action:
    """Write ``new`` to one field of a node or edge; ``reverse`` writes ``old`` back.

    Edge targets are addressed by the id of the edge's child node. A ``None``
    target makes the action a no-op.
    """
    target: Optional[int]
    field: Field
    old: Any
    new: Any

    @classmethod
    def node(cls, node_id: int, field: NodeField, old: Any, new: Any) -> "Action":
        return cls(node_id, field, old, new)

    @classmethod
    def edge(cls, child_id: Optional[int], field: EdgeField, old: Any, new: Any) -> "Action":
        return cls(child_id, field, old, new)

    def _write(self, tree: Tree, val: Any) -> None:
        if self.target is None:
            return
        if isinstance(self.field, NodeField):
            obj = tree.nodes[self.target]
        else:
            obj = tree.edges[self.target]
        setattr(obj, self.field.value, val)

    def apply(self, tree: Tree) -> None:
        self._write(tree, self.new)

    def reverse(self, tree: Tree) -> None:
        self._write(tree, self.old)


Step = List[Action]


class StepQueue:
    """Cursor-addressed undo/redo log over a tree.

    ``last_action`` is the index of the last applied step, -1 before any.
    Steps can only be appended while ``in_action`` is false; stepping is only
    allowed while it is true.
    """

    def __init__(self, tree: Tree):
        self.tree = tree
        self.in_action = False
        self.last_action = -1
        self.steps: List[Step] = []

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def length(self) -> int:
        return len(self.steps)

    @property
    def progress(self) -> float:
        """Fraction of steps applied, 0.0 .. 1.0."""
        if not self.steps:
            return 0.0
        return (self.last_action + 1) / len(self.steps)

    def push_step(self, step: Step) -> bool:
        if self.in_action:
            return False
        self.steps.append(list(step))
        return True

    def push_steps(self, steps: Iterable[Step]) -> bool:
        if self.in_action:
            return False
        self.steps.extend(list(s) for s in steps)
        return True

    def current_step(self) -> Optional[Step]:
        if self.last_action < 0:
            return None
        return self.steps[self.last_action]

    def step_forward(self) -> bool:
        if not self.in_action or self.last_action == len(self.steps) - 1:
            return False
        self.last_action += 1
        for action in self.steps[self.last_action]:
            action.apply(self.tree)
        return True

    def step_backward(self) -> bool:
        if not self.in_action or self.last_action == -1:
            return False
        for action in reversed(self.steps[self.last_action]):
            action.reverse(self.tree)
        self.last_action -= 1
        return True

    def go_to_end(self) -> bool:
        moved = False
        while self.step_forward():
            moved = True
        return moved

    def go_to_beginning(self) -> bool:
        moved = False
        while self.step_backward():
            moved = True
        return moved
