"""Structural operational semantics for CCS.

This module derives a single transition of a term:

    Act:   α.P ─α→ P
    Sum:   P ─α→ P'  implies  P + Q ─α→ P'   (and symmetrically for Q)
    Par:   P ─α→ P'  implies  P | Q ─α→ P' | Q (and symmetrically for Q)
    Com:   P ─α→ P', Q ─!α→ Q'  implies  P | Q ─τ→ P' | Q'
    Res:   P ─α→ P', chan(α) ∉ L  implies  P\\L ─α→ P'\\L
    Rel:   P ─α→ P'  implies  P[f] ─f(α)→ P'[f]
    Rec:   P{rec x.P / x} ─α→ P'  implies  rec x.P ─α→ P'

Exactly one transition is derived per call, with a fixed priority:
synchronization before interleaving, left before right. Restriction and
relabeling are carried down the descent in a ``Context`` value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .ccs import (
    Choice,
    Compose,
    Name,
    Nil,
    Prefix,
    Recurse,
    Relabel,
    Restrict,
    Term,
    substitute,
)
from .derivation import Operand, Step, Trace, UnsupportedConstructError
from .synchronization import find_sync

logger = logging.getLogger(__name__)

# =============================================================================
# Context
# =============================================================================


@dataclass(frozen=True)
class Context:
    """Modifications applied above the node being stepped.

    Attributes:
        restricted: Channels hidden by an enclosing restriction
        relabeling: Flat channel renaming, as ``(old, new)`` pairs
    """

    restricted: frozenset[str] = field(default_factory=frozenset)
    relabeling: tuple[tuple[str, str], ...] = ()

    def restrict(self, channel: str) -> Context:
        """Return a context that also hides *channel*."""
        return Context(restricted=self.restricted | {channel}, relabeling=self.relabeling)

    def relabel(self, mapping: tuple[tuple[str, str], ...]) -> Context:
        """Return a context extended with *mapping*; its entries win on collision."""
        merged = dict(self.relabeling)
        merged.update(mapping)
        return Context(restricted=self.restricted, relabeling=tuple(merged.items()))

    def resolve(self, channel: str) -> str:
        """Apply the relabeling to a channel (single lookup, not transitive)."""
        return dict(self.relabeling).get(channel, channel)

    def is_restricted(self, channel: str) -> bool:
        return channel in self.restricted


EMPTY_CONTEXT = Context()

# =============================================================================
# Transition Rules
# =============================================================================


def step(term: Term, context: Context = EMPTY_CONTEXT) -> tuple[Trace, Term] | None:
    """Derive one transition of *term*.

    Args:
        term: The term to step.
        context: Restriction and relabeling in force above *term*.

    Returns:
        ``(trace, result)`` with the derivation steps in bottom-up order,
        or None if the term has no transition.

    Raises:
        UnsupportedConstructError: If deriving the transition requires a
            synchronization through a relabeling.
    """
    derived = _derive(term, context)
    if derived is None:
        return None
    steps, result = derived
    return tuple(steps), result


def _derive(term: Term, context: Context) -> tuple[list[Step], Term] | None:
    if isinstance(term, Recurse):
        # Step the body as-is; the produced term gets the recursion put back
        # wherever the bound name is still unconsumed
        derived = _derive(term.body, context)
        if derived is None:
            return None
        steps, result = derived
        result = substitute(result, term.bound, term)
        steps.append(Step("Recurse on", Operand.bound(term.bound), repr(result)))
        return steps, result

    elif isinstance(term, Restrict):
        derived = _derive(term.body, context.restrict(term.action.channel))
        if derived is None:
            return None
        steps, result = derived
        return steps, Restrict(body=result, action=term.action)

    elif isinstance(term, Relabel):
        derived = _derive(term.body, context.relabel(term.mapping))
        if derived is None:
            return None
        steps, result = derived
        return steps, Relabel(body=result, mapping=term.mapping)

    elif isinstance(term, Compose):
        synced = find_sync(term.left, term.right)
        if synced is not None:
            return synced
        return _interleave(term, context)

    elif isinstance(term, Choice):
        derived = _derive(term.left, context)
        if derived is not None:
            steps, result = derived
            steps.append(Step("Choice", Operand.left(), repr(term.left)))
            return steps, result

        derived = _derive(term.right, context)
        if derived is not None:
            steps, result = derived
            steps.append(Step("Choice", Operand.right(), repr(term.right)))
            return steps, result
        return None

    elif isinstance(term, Prefix):
        action = term.action
        channel = context.resolve(action.channel)
        if channel != action.channel:
            action = action.renamed(channel)

        if context.is_restricted(channel):
            logger.debug("Action %r blocked by restriction", action)
            return None

        fired = Step("Action", Operand.of_action(action), repr(term.continuation))
        return [fired], term.continuation

    elif isinstance(term, (Name, Nil)):
        return None

    raise UnsupportedConstructError("Unknown term variant", term=term)


def _interleave(term: Compose, context: Context) -> tuple[list[Step], Term] | None:
    """Move one side of a composition independently, left side first."""
    derived = _derive(term.left, context)
    if derived is not None:
        steps, result = derived
        steps.append(Step("Parallel", Operand.left(), repr(term.left)))
        return steps, Compose(left=result, right=term.right)

    derived = _derive(term.right, context)
    if derived is not None:
        steps, result = derived
        steps.append(Step("Parallel", Operand.right(), repr(term.right)))
        return steps, Compose(left=term.left, right=result)
    return None


__all__ = [
    "Context",
    "EMPTY_CONTEXT",
    "step",
]
