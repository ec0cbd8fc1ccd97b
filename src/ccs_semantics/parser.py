"""Parser for single-line CCS sources.

Syntax, loosest binding first:

    P | Q      P + Q        parallel composition and choice (left-assoc)
    P\\a       P[b/a, ...]  restriction and relabeling (postfix)
    a.P   !a.P   _rec x.P   prefix and recursion
    nil   x   (P)           atoms

A recursion body stops at the next ``|``, ``+``, ``\\`` or ``[``, so
``_rec x.a.x | b.nil`` is ``(_rec x.a.x) | b.nil``. Parenthesize the
body to extend it.

Actions are single letters (latin or greek); names are lowercase
identifiers other than ``nil``. Relabel pairs are written ``new/old``.

Only the first non-empty line that is not a ``//`` comment is read.

Example:
    (α.nil + β.nil) | (!α.nil + γ.nil)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedInput, VisitError

from ccs_semantics.algebra.ccs import (
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

logger = logging.getLogger(__name__)

GRAMMAR = r"""
    ?start: process

    ?process: composition

    ?composition: composition "|" postfix   -> compose
                | composition "+" postfix   -> choice
                | postfix

    ?postfix: postfix "\\" action           -> restrict
            | postfix "[" mapping "]"       -> relabel
            | prefixed

    ?prefixed: action "." prefixed          -> prefix
             | "_rec" NAME "." prefixed     -> recursion
             | atom

    ?atom: NIL                              -> nil
         | NAME                             -> name
         | "(" process ")"

    action: ACTION
    mapping: pair ("," pair)*
    pair: action "/" action

    NIL: "nil"
    NAME: /(?!nil\b)[a-z][a-z0-9_]*/
    ACTION: /!?[A-Za-zα-ω]/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %ignore /[ \t]+/
"""


@dataclass
class ParseError(Exception):
    """Error while reading a CCS source.

    Attributes:
        message: Error message
        line: 1-based line in the parsed text, if known
        column: 1-based column in the parsed text, if known
    """

    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} at line {self.line}, column {self.column}"
        return self.message


@v_args(inline=True)
class TermBuilder(Transformer):
    """Turns the lark parse tree into Term values."""

    def action(self, token: Token) -> Action:
        return Action.parse(str(token))

    def pair(self, value: Action, key: Action) -> tuple[str, str]:
        return key.channel, value.channel

    def mapping(self, *pairs: tuple[str, str]) -> dict[str, str]:
        return dict(pairs)

    def nil(self, _token: Token) -> Nil:
        return Nil()

    def name(self, token: Token) -> Name:
        return Name(name=str(token))

    def prefix(self, action: Action, continuation: Term) -> Prefix:
        return Prefix(action=action, continuation=continuation)

    def recursion(self, bound: Token, body: Term) -> Recurse:
        return Recurse(bound=str(bound), body=body)

    def compose(self, left: Term, right: Term) -> Compose:
        return Compose(left=left, right=right)

    def choice(self, left: Term, right: Term) -> Choice:
        return Choice(left=left, right=right)

    def restrict(self, body: Term, action: Action) -> Restrict:
        return Restrict(body=body, action=action)

    def relabel(self, body: Term, mapping: dict[str, str]) -> Relabel:
        return Relabel.from_dict(body, mapping)


_parser = Lark(GRAMMAR, parser="earley", ambiguity="resolve")


def parse_process(line: str) -> Term:
    """Parse one line of CCS into a term.

    Args:
        line: The process text

    Returns:
        The parsed term

    Raises:
        ParseError: If the text is not a well-formed process
    """
    try:
        tree = _parser.parse(line)
    except UnexpectedInput as e:
        raise ParseError(
            f"Invalid CCS process {line.strip()!r}",
            line=getattr(e, "line", None),
            column=getattr(e, "column", None),
        ) from e
    try:
        return TermBuilder().transform(tree)
    except VisitError as e:
        raise ParseError(f"Invalid CCS process {line.strip()!r}: {e.orig_exc}") from e


def parse(source: str) -> Term:
    """Parse a CCS source, reading only its first process line.

    Args:
        source: Source text; empty lines and ``//`` comment lines are skipped

    Returns:
        The parsed term

    Raises:
        ParseError: If the source has no process line or it is malformed
    """
    lines = [
        line
        for line in source.splitlines()
        if line.strip() and not line.lstrip().startswith("//")
    ]
    if not lines:
        raise ParseError("Input has to have at least one non-empty, non-comment line")
    if len(lines) > 1:
        logger.warning("Only reading the first non-empty, non-comment line")

    logger.info(f"Parsing input: {lines[0].strip()}")
    return parse_process(lines[0])


__all__ = [
    "GRAMMAR",
    "ParseError",
    "TermBuilder",
    "parse_process",
    "parse",
]
