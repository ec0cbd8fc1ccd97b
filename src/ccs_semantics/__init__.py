"""
ccs-semantics -- Operational-semantics tracer for the Calculus of
Communicating Systems.

Parses a one-line CCS process, derives its transitions one at a time and
prints the derivation of each, until no transition is left or a term
recurs.
"""

from ccs_semantics._version import __version__
from ccs_semantics.algebra import (
    Action,
    Choice,
    Compose,
    Context,
    Direction,
    HaltReason,
    Name,
    Nil,
    Prefix,
    Recurse,
    Relabel,
    Restrict,
    Term,
    Tracer,
    TraceResult,
    UnsupportedConstructError,
    find_sync,
    step,
    substitute,
    trace,
)
from ccs_semantics.parser import ParseError, parse

# NOTE: Full subpackage APIs are accessible via direct imports:
#   from ccs_semantics.algebra import reachable_actions, format_transition, ...

__all__ = [
    "__version__",
    # Terms
    "Direction",
    "Action",
    "Term",
    "Nil",
    "Name",
    "Prefix",
    "Choice",
    "Compose",
    "Restrict",
    "Relabel",
    "Recurse",
    "substitute",
    # Semantics
    "Context",
    "step",
    "find_sync",
    "UnsupportedConstructError",
    # Tracing
    "HaltReason",
    "TraceResult",
    "Tracer",
    "trace",
    # Parsing
    "ParseError",
    "parse",
]
