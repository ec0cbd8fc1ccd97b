"""Trace driver: repeatedly step a term and print each derivation.

The driver stops when the current term has no transition, or when a
transition reaches a term already visited. Revisit detection is purely
syntactic (structural equality of terms), not behavioral equivalence.

There is no step limit: a term family that keeps producing new distinct
terms (e.g. unguarded recursion under parallel composition) runs until
interrupted.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO

from .ccs import Term
from .derivation import Trace
from .semantics import step

logger = logging.getLogger(__name__)

SEPARATOR = "#" * 66

# =============================================================================
# Result Types
# =============================================================================


class HaltReason(Enum):
    """Why a trace stopped."""

    NO_TRANSITION = auto()
    CYCLE = auto()


@dataclass(frozen=True)
class Transition:
    """A derived transition: source ─steps→ target."""

    source: Term
    steps: Trace
    target: Term

    def __repr__(self) -> str:
        return f"{self.source!r} --> {self.target!r}"


@dataclass
class TraceResult:
    """Outcome of running a term to completion.

    Attributes:
        reason: Why the run halted
        transitions: Every transition taken, in order
        final: The last term reached (not advanced past a cycle)
    """

    reason: HaltReason
    transitions: list[Transition] = field(default_factory=list)
    final: Term | None = None

    @property
    def count(self) -> int:
        """Number of transitions taken."""
        return len(self.transitions)


# =============================================================================
# Formatting
# =============================================================================


def format_transition(transition: Transition, show_derivations: bool = True) -> list[str]:
    """Format a transition and its derivation, root rule first.

    A step with an empty operation opens one side of a synchronization
    search: it is printed as a header, and the steps below it are indented
    and numbered from zero again.
    """
    lines = [SEPARATOR, f"Trans: {transition.source!r} -> {transition.target!r}"]
    if show_derivations:
        tab = ""
        index = 0
        for entry in reversed(transition.steps):
            if entry.is_boundary:
                lines.append(f"---\n--- {entry.operand}: {entry.result} ---\n")
                tab = "\t"
                index = 0
                continue
            lines.append(
                f"{tab}{index} | {entry.operation}: {entry.operand} \t-> {entry.result}"
            )
            index += 1
    lines.append("#")
    return lines


# =============================================================================
# Driver
# =============================================================================


class Tracer:
    """Drives the transition engine from an initial term.

    States: running, halted with no transition, halted on a cycle.
    """

    def __init__(self, stream: TextIO | None = None, show_derivations: bool = True):
        """Initialize the tracer.

        Args:
            stream: Where the trace is printed (default: stdout)
            show_derivations: Print the rule applications of each transition
        """
        self.stream = stream
        self.show_derivations = show_derivations

    def _print(self, line: str) -> None:
        print(line, file=self.stream if self.stream is not None else sys.stdout)

    def run(self, term: Term) -> TraceResult:
        """Step *term* until it halts, printing every transition.

        Args:
            term: The initial term

        Returns:
            The TraceResult describing the run

        Raises:
            UnsupportedConstructError: If a transition cannot be derived
                soundly.
        """
        current = term
        visited: set[Term] = {term}
        transitions: list[Transition] = []
        reason = HaltReason.NO_TRANSITION

        while True:
            derived = step(current)
            if derived is None:
                logger.info("No transition from %r", current)
                break

            steps, target = derived
            transition = Transition(source=current, steps=steps, target=target)
            transitions.append(transition)
            for line in format_transition(transition, self.show_derivations):
                self._print(line)

            if target in visited:
                logger.info("Revisited %r after %d transition(s)", target, len(transitions))
                self._print("Cycle found: terminating")
                reason = HaltReason.CYCLE
                break

            visited.add(target)
            current = target

        self._print(f"CCS-process terminated in {len(transitions)} transition(s)")
        return TraceResult(reason=reason, transitions=transitions, final=current)


def trace(term: Term, stream: TextIO | None = None) -> TraceResult:
    """Run a term to completion and print its trace.

    Args:
        term: The initial term
        stream: Output stream (default: stdout)

    Returns:
        The TraceResult
    """
    return Tracer(stream=stream).run(term)


__all__ = [
    "HaltReason",
    "Transition",
    "TraceResult",
    "format_transition",
    "Tracer",
    "trace",
]
