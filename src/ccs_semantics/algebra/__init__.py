"""Process algebra module: CCS terms and their operational semantics.

This module provides:
- CCS actions and process terms
- Recursion substitution
- Synchronization search across parallel composition
- Single-step structural operational semantics
- A trace driver that runs a term until it halts or revisits a term

Based on:
- Milner (1980) - A Calculus of Communicating Systems
- Bruni & Montanari (2017) - Models of Computation
"""

from __future__ import annotations

from .ccs import (
    Action,
    Choice,
    Compose,
    Direction,
    Name,
    Nil,
    Prefix,
    Recurse,
    Relabel,
    Restrict,
    Term,
    TermKind,
    choice,
    complement,
    compose,
    infix,
    name,
    nil,
    prefix,
    rec,
    relabel,
    render_tree,
    restrict,
    substitute,
)
from .derivation import (
    Operand,
    OperandKind,
    Step,
    Trace,
    UnsupportedConstructError,
)
from .semantics import (
    EMPTY_CONTEXT,
    Context,
    step,
)
from .synchronization import (
    find_sync,
    reachable_actions,
)
from .tracer import (
    HaltReason,
    Tracer,
    TraceResult,
    Transition,
    format_transition,
    trace,
)

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
    "substitute",
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
    # Derivations
    "OperandKind",
    "Operand",
    "Step",
    "Trace",
    "UnsupportedConstructError",
    # Semantics
    "Context",
    "EMPTY_CONTEXT",
    "step",
    "reachable_actions",
    "find_sync",
    # Tracing
    "HaltReason",
    "Transition",
    "TraceResult",
    "Tracer",
    "format_transition",
    "trace",
]
