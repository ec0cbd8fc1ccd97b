"""CCS (Calculus of Communicating Systems) term model.

Based on Milner (1980) - A Calculus of Communicating Systems, in the
presentation of Bruni & Montanari - Models of Computation.

This module provides:
- Actions (input α / output !α on a named channel)
- Process terms (nil, names, prefix, choice, parallel composition,
  restriction, relabeling, recursion)
- Recursion substitution
- Canonical infix and tree rendering

Key Concepts:
- Channel: bare identifier shared by complementary actions
- Complement: α and !α synchronize with each other
- Term: immutable process tree; every transformation rebuilds it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto

# =============================================================================
# Actions
# =============================================================================


class Direction(Enum):
    """Direction of an action on its channel."""

    INPUT = auto()
    OUTPUT = auto()


@dataclass(frozen=True)
class Action:
    """A directional label on a channel.

    ``Action("a", Direction.INPUT)`` is written ``a``,
    ``Action("a", Direction.OUTPUT)`` is written ``!a``.
    """

    channel: str
    direction: Direction = Direction.INPUT

    @classmethod
    def parse(cls, token: str) -> Action:
        """Build an action from its textual form (``a`` or ``!a``)."""
        if token.startswith("!"):
            return cls(channel=token[1:], direction=Direction.OUTPUT)
        return cls(channel=token, direction=Direction.INPUT)

    @property
    def is_output(self) -> bool:
        return self.direction is Direction.OUTPUT

    def complement(self) -> Action:
        """Return the action on the same channel with opposite direction."""
        flipped = Direction.INPUT if self.is_output else Direction.OUTPUT
        return Action(channel=self.channel, direction=flipped)

    def renamed(self, channel: str) -> Action:
        """Return the action with the same direction on another channel."""
        return Action(channel=channel, direction=self.direction)

    def describe(self) -> str:
        """Operand form used in derivation traces: ``In(a)`` / ``Out(a)``."""
        return f"Out({self.channel})" if self.is_output else f"In({self.channel})"

    def __repr__(self) -> str:
        return f"!{self.channel}" if self.is_output else self.channel


def complement(action: Action) -> Action:
    """Functional form of :meth:`Action.complement`."""
    return action.complement()


# =============================================================================
# Term Base Class
# =============================================================================


class TermKind(Enum):
    """Classification of term variants."""

    NIL = auto()
    NAME = auto()
    PREFIX = auto()
    CHOICE = auto()
    COMPOSE = auto()
    RESTRICT = auto()
    RELABEL = auto()
    RECURSE = auto()


class Term(ABC):
    """Abstract base class for CCS process terms.

    Variants are frozen dataclasses, so terms compare and hash
    structurally and can be stored in sets for revisit detection.
    """

    @property
    @abstractmethod
    def kind(self) -> TermKind:
        """Term classification."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        pass


# =============================================================================
# Leaves
# =============================================================================


@dataclass(frozen=True)
class Nil(Term):
    """nil - the inactive process. It has no transitions."""

    @property
    def kind(self) -> TermKind:
        return TermKind.NIL

    def __repr__(self) -> str:
        return "nil"


@dataclass(frozen=True)
class Name(Term):
    """x - reference to a recursion-bound name.

    Only meaningful below a ``Recurse`` binding the same name; on its own
    it has no transitions.
    """

    name: str

    @property
    def kind(self) -> TermKind:
        return TermKind.NAME

    def __repr__(self) -> str:
        return self.name


# =============================================================================
# Composite Terms
# =============================================================================


@dataclass(frozen=True)
class Prefix(Term):
    """α.P - perform α, then behave as P."""

    action: Action
    continuation: Term

    @property
    def kind(self) -> TermKind:
        return TermKind.PREFIX

    def __repr__(self) -> str:
        return f"{self.action!r}.{self.continuation!r}"


@dataclass(frozen=True)
class Choice(Term):
    """P + Q - behave as either P or Q."""

    left: Term
    right: Term

    @property
    def kind(self) -> TermKind:
        return TermKind.CHOICE

    def __repr__(self) -> str:
        return f"({self.left!r} + {self.right!r})"


@dataclass(frozen=True)
class Compose(Term):
    """P | Q - P and Q in parallel, synchronizing on complementary actions."""

    left: Term
    right: Term

    @property
    def kind(self) -> TermKind:
        return TermKind.COMPOSE

    def __repr__(self) -> str:
        return f"({self.left!r} | {self.right!r})"


@dataclass(frozen=True)
class Restrict(Term):
    """P\\α - P with the channel of α hidden from the environment."""

    body: Term
    action: Action

    @property
    def kind(self) -> TermKind:
        return TermKind.RESTRICT

    def __repr__(self) -> str:
        return f"({self.body!r}\\{self.action!r})"


@dataclass(frozen=True)
class Relabel(Term):
    """P[β/α] - P with channel α renamed to β.

    The mapping is kept as a tuple of ``(key, value)`` channel pairs so the
    term stays hashable. Keys are unique.
    """

    body: Term
    mapping: tuple[tuple[str, str], ...]

    @classmethod
    def from_dict(cls, body: Term, mapping: dict[str, str]) -> Relabel:
        """Convenience constructor from a dict."""
        return cls(body=body, mapping=tuple(mapping.items()))

    def as_dict(self) -> dict[str, str]:
        return dict(self.mapping)

    @property
    def kind(self) -> TermKind:
        return TermKind.RELABEL

    def __repr__(self) -> str:
        pairs = ", ".join(f"{value}/{key}" for key, value in self.mapping)
        return f"({self.body!r}[{pairs}])"


@dataclass(frozen=True)
class Recurse(Term):
    """_rec x.P - recursive process, x is bound in P.

    Recursion is assumed guarded: every occurrence of x sits below a prefix.
    """

    bound: str
    body: Term

    @property
    def kind(self) -> TermKind:
        return TermKind.RECURSE

    def unfold(self) -> Term:
        """Unfold one level of recursion."""
        return substitute(self.body, self.bound, self)

    def __repr__(self) -> str:
        return f"_rec {self.bound}.{self.body!r}"


# =============================================================================
# Substitution
# =============================================================================


def substitute(term: Term, name: str, replacement: Term) -> Term:
    """Replace every ``Name(name)`` leaf in *term* with *replacement*.

    Nested ``Recurse`` nodes are entered even when they bind the same
    name: there is no shadowing, so reusing a bound name inside its own
    scope is not capture-safe.

    Args:
        term: The term to rebuild.
        name: Bound name to replace.
        replacement: Term substituted for each occurrence.

    Returns:
        A new term with all matching names replaced.
    """
    if isinstance(term, Name):
        return replacement if term.name == name else term
    elif isinstance(term, Prefix):
        return Prefix(
            action=term.action,
            continuation=substitute(term.continuation, name, replacement),
        )
    elif isinstance(term, Choice):
        return Choice(
            left=substitute(term.left, name, replacement),
            right=substitute(term.right, name, replacement),
        )
    elif isinstance(term, Compose):
        return Compose(
            left=substitute(term.left, name, replacement),
            right=substitute(term.right, name, replacement),
        )
    elif isinstance(term, Restrict):
        return Restrict(
            body=substitute(term.body, name, replacement),
            action=term.action,
        )
    elif isinstance(term, Relabel):
        return Relabel(
            body=substitute(term.body, name, replacement),
            mapping=term.mapping,
        )
    elif isinstance(term, Recurse):
        return Recurse(
            bound=term.bound,
            body=substitute(term.body, name, replacement),
        )
    # Nil
    return term


# =============================================================================
# Rendering
# =============================================================================


def infix(term: Term) -> str:
    """Canonical infix text of a term, for display only."""
    return repr(term)


def render_tree(term: Term, indent: str = "  ") -> str:
    """Render the syntax tree of *term*, one node per line."""
    lines: list[str] = []
    _tree_lines(term, 0, indent, lines)
    return "\n".join(lines)


def _tree_lines(term: Term, depth: int, indent: str, lines: list[str]) -> None:
    pad = indent * depth
    if isinstance(term, Nil):
        lines.append(f"{pad}Nil")
    elif isinstance(term, Name):
        lines.append(f"{pad}Name({term.name})")
    elif isinstance(term, Prefix):
        lines.append(f"{pad}Prefix({term.action.describe()})")
        _tree_lines(term.continuation, depth + 1, indent, lines)
    elif isinstance(term, (Choice, Compose)):
        lines.append(f"{pad}{type(term).__name__}")
        _tree_lines(term.left, depth + 1, indent, lines)
        _tree_lines(term.right, depth + 1, indent, lines)
    elif isinstance(term, Restrict):
        lines.append(f"{pad}Restrict({term.action.channel})")
        _tree_lines(term.body, depth + 1, indent, lines)
    elif isinstance(term, Relabel):
        pairs = ", ".join(f"{key} -> {value}" for key, value in term.mapping)
        lines.append(f"{pad}Relabel({pairs})")
        _tree_lines(term.body, depth + 1, indent, lines)
    elif isinstance(term, Recurse):
        lines.append(f"{pad}Recurse({term.bound})")
        _tree_lines(term.body, depth + 1, indent, lines)


# =============================================================================
# Convenience Constructors
# =============================================================================


def _as_action(action: str | Action) -> Action:
    return action if isinstance(action, Action) else Action.parse(action)


def nil() -> Nil:
    """Create the inactive process."""
    return Nil()


def name(identifier: str) -> Name:
    """Create a reference to a bound name."""
    return Name(name=identifier)


def prefix(action: str | Action, continuation: Term) -> Prefix:
    """Create prefix: action.continuation (``"!a"`` for an output)."""
    return Prefix(action=_as_action(action), continuation=continuation)


def choice(left: Term, right: Term) -> Choice:
    """Create choice: left + right."""
    return Choice(left=left, right=right)


def compose(left: Term, right: Term) -> Compose:
    """Create parallel composition: left | right."""
    return Compose(left=left, right=right)


def restrict(body: Term, action: str | Action) -> Restrict:
    """Create restriction: body\\action."""
    return Restrict(body=body, action=_as_action(action))


def relabel(body: Term, mapping: dict[str, str]) -> Relabel:
    """Create relabeling from an old-channel -> new-channel dict."""
    return Relabel.from_dict(body, mapping)


def rec(bound: str, body: Term) -> Recurse:
    """Create recursion: _rec bound.body."""
    return Recurse(bound=bound, body=body)


__all__ = [
    # Actions
    "Direction",
    "Action",
    "complement",
    # Terms
    "TermKind",
    "Term",
    "Nil",
    "Name",
    "Prefix",
    "Choice",
    "Compose",
    "Restrict",
    "Relabel",
    "Recurse",
    # Substitution
    "substitute",
    # Rendering
    "infix",
    "render_tree",
    # Constructors
    "nil",
    "name",
    "prefix",
    "choice",
    "compose",
    "restrict",
    "relabel",
    "rec",
]
