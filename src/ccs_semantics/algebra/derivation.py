"""Derivation records produced while deriving a transition.

A derivation is built bottom-up during the recursive descent of the
transition rules: each rule appends its own ``Step`` after the steps of
the premises it used. Reversing it yields the root-to-leaf order used
for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .ccs import Action, Term


class OperandKind(Enum):
    """What the operand of a derivation step refers to."""

    ACTION = auto()
    LEFT = auto()
    RIGHT = auto()
    SYNC = auto()
    BOUND = auto()
    NONE = auto()


@dataclass(frozen=True)
class Operand:
    """Information attached to a step.

    For ``Choice`` this says whether the left or right branch was taken,
    for ``Action`` it is the concrete action fired, for a synchronization
    the channel, and for a recursion the bound name.
    """

    kind: OperandKind
    action: Action | None = None
    label: str = ""

    @classmethod
    def of_action(cls, action: Action) -> Operand:
        return cls(kind=OperandKind.ACTION, action=action)

    @classmethod
    def left(cls) -> Operand:
        return cls(kind=OperandKind.LEFT)

    @classmethod
    def right(cls) -> Operand:
        return cls(kind=OperandKind.RIGHT)

    @classmethod
    def sync(cls, channel: str) -> Operand:
        return cls(kind=OperandKind.SYNC, label=channel)

    @classmethod
    def bound(cls, bound: str) -> Operand:
        return cls(kind=OperandKind.BOUND, label=bound)

    @classmethod
    def none(cls) -> Operand:
        return cls(kind=OperandKind.NONE)

    def __str__(self) -> str:
        if self.kind is OperandKind.ACTION and self.action is not None:
            return self.action.describe()
        if self.kind is OperandKind.LEFT:
            return "Left"
        if self.kind is OperandKind.RIGHT:
            return "Right"
        if self.kind is OperandKind.SYNC:
            return f"Sync on {self.label}"
        return self.label


@dataclass(frozen=True)
class Step:
    """A single rule application in a derivation.

    Attributes:
        operation: Rule name such as ``Action``, ``Choice``, ``Parallel``.
            An empty operation marks the start of one side of a
            synchronization search.
        operand: See :class:`Operand`.
        result: Text of the term the step refers to.
    """

    operation: str
    operand: Operand
    result: str

    @property
    def is_boundary(self) -> bool:
        return not self.operation


Trace = tuple[Step, ...]


@dataclass
class UnsupportedConstructError(Exception):
    """A construct the engine refuses to handle.

    Raised instead of computing an unsound transition, e.g. a relabeling
    met while searching for a synchronization partner.

    Attributes:
        message: Error message
        term: The offending term, if known
    """

    message: str
    term: Term | None = None

    def __str__(self) -> str:
        if self.term is not None:
            return f"{self.message}: {self.term!r}"
        return self.message


__all__ = [
    "OperandKind",
    "Operand",
    "Step",
    "Trace",
    "UnsupportedConstructError",
]
