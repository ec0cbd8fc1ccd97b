"""Synchronization search across parallel composition.

Two terms composed in parallel can make a silent move when one of them
offers an action and the other offers its complement. The search
collects every action reachable from each side without committing to a
branch, then pairs the first complementary actions found.

Restriction and relabeling context is not applied to the candidate
actions: a restricted channel can still synchronize, and a relabeling
met during the search is refused with ``UnsupportedConstructError``.
"""

from __future__ import annotations

import logging

from .ccs import (
    Action,
    Choice,
    Compose,
    Name,
    Nil,
    Prefix,
    Recurse,
    Relabel,
    Restrict,
    Term,
)
from .derivation import Operand, Step, UnsupportedConstructError

logger = logging.getLogger(__name__)

ActionMap = dict[Action, Term]


def reachable_actions(term: Term) -> tuple[list[Step], ActionMap]:
    """Collect the actions immediately reachable from *term*.

    Args:
        term: Term to search.

    Returns:
        The search steps (bottom-up) and an insertion-ordered mapping from
        each reachable action to the term reached by taking it, rebuilt in
        the context of *term*.

    Raises:
        UnsupportedConstructError: If a ``Relabel`` node is reached.
    """
    if isinstance(term, Recurse):
        # Exploratory unfolding only; nothing is committed
        steps, actions = reachable_actions(term.unfold())
        steps.append(Step("Recurse", Operand.none(), "Compose does not apply recursions"))
        return steps, actions

    elif isinstance(term, Restrict):
        steps, actions = reachable_actions(term.body)
        steps.append(Step("Restrict", Operand.none(), "Compose ignores restrictions"))
        return steps, actions

    elif isinstance(term, Relabel):
        raise UnsupportedConstructError(
            "Relabelling inside synchronization is not supported", term=term
        )

    elif isinstance(term, Compose):
        merged: ActionMap = {}

        left_steps, left_actions = reachable_actions(term.left)
        for action, reached in left_actions.items():
            merged[action] = Compose(left=reached, right=term.right)
        left_steps.append(Step("Parallel", Operand.left(), repr(term.left)))

        right_steps, right_actions = reachable_actions(term.right)
        for action, reached in right_actions.items():
            merged[action] = Compose(left=term.left, right=reached)
        right_steps.append(Step("Parallel", Operand.right(), repr(term.right)))

        return left_steps + right_steps, merged

    elif isinstance(term, Choice):
        merged = {}

        left_steps, left_actions = reachable_actions(term.left)
        merged.update(left_actions)
        left_steps.append(Step("Choice", Operand.left(), repr(term.left)))

        right_steps, right_actions = reachable_actions(term.right)
        merged.update(right_actions)
        right_steps.append(Step("Choice", Operand.right(), repr(term.right)))

        return left_steps + right_steps, merged

    elif isinstance(term, Prefix):
        step = Step("Action", Operand.of_action(term.action), repr(term.continuation))
        return [step], {term.action: term.continuation}

    elif isinstance(term, (Name, Nil)):
        return [], {}

    raise UnsupportedConstructError("Unknown term variant", term=term)


def find_sync(left: Term, right: Term) -> tuple[list[Step], Term] | None:
    """Find a synchronization between two terms composed in parallel.

    The left side's actions are scanned in the order they were found, and
    the first one whose complement the right side offers is taken. No
    alternative pairing is explored.

    Args:
        left: Left operand of the composition.
        right: Right operand of the composition.

    Returns:
        ``(steps, result)`` where result is the composition of both
        continuations, or None if no complementary pair exists.

    Raises:
        UnsupportedConstructError: If either side contains a reachable
            ``Relabel``.
    """
    left_steps, left_actions = reachable_actions(left)
    right_steps, right_actions = reachable_actions(right)

    for action, left_reached in left_actions.items():
        partner = action.complement()
        if partner not in right_actions:
            continue

        result = Compose(left=left_reached, right=right_actions[partner])
        logger.debug("Synchronizing on %s: %r", action.channel, result)

        steps = left_steps
        steps.append(Step("", Operand.left(), repr(left)))
        steps.extend(right_steps)
        steps.append(Step("", Operand.right(), repr(right)))
        steps.append(Step("Compose", Operand.sync(action.channel), repr(result)))
        return steps, result

    return None


__all__ = [
    "reachable_actions",
    "find_sync",
]
