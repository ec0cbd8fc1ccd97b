"""Property-based tests for the CCS model and semantics using Hypothesis.

Generates random process trees and checks laws that must hold for every
term:
- complement is an involution
- substitution is idempotent once the name no longer occurs
- stepping is a pure function
- synchronization search ignores restriction

Generator restrictions:
- No Relabel below a Compose, since the synchronization search refuses it.
- Recursion bodies are guarded by a prefix so unfolding terminates.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from ccs_semantics.algebra.ccs import (
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
    complement,
    substitute,
)
from ccs_semantics.algebra.semantics import Context, step
from ccs_semantics.algebra.synchronization import find_sync

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

CHANNELS = ["a", "b", "c"]
NAMES = ["x", "y"]

actions = st.builds(
    Action,
    channel=st.sampled_from(CHANNELS),
    direction=st.sampled_from(list(Direction)),
)


@st.composite
def term_strategy(draw: st.DrawFn, max_depth: int = 3, allow_relabel: bool = True) -> Term:
    """Generate a random CCS term.

    Depth is bounded to keep terms small.
    """
    if max_depth <= 0:
        return draw(st.sampled_from([Nil(), Name("x"), Name("y")]))

    kinds = ["leaf", "prefix", "prefix", "choice", "compose", "restrict", "recurse"]
    if allow_relabel:
        kinds.append("relabel")
    kind = draw(st.sampled_from(kinds))

    if kind == "leaf":
        return draw(term_strategy(max_depth=0))
    elif kind == "prefix":
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=allow_relabel)
        return Prefix(action=draw(actions), continuation=draw(sub))
    elif kind == "choice":
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=allow_relabel)
        return Choice(left=draw(sub), right=draw(sub))
    elif kind == "compose":
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=False)
        return Compose(left=draw(sub), right=draw(sub))
    elif kind == "restrict":
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=allow_relabel)
        return Restrict(body=draw(sub), action=draw(actions))
    elif kind == "recurse":
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=allow_relabel)
        body = Prefix(action=draw(actions), continuation=draw(sub))
        return Recurse(bound=draw(st.sampled_from(NAMES)), body=body)
    else:  # relabel
        sub = term_strategy(max_depth=max_depth - 1, allow_relabel=allow_relabel)
        mapping = draw(
            st.dictionaries(st.sampled_from(CHANNELS), st.sampled_from(CHANNELS), max_size=2)
        )
        return Relabel.from_dict(draw(sub), mapping)


def _names(term: Term) -> set[str]:
    if isinstance(term, Name):
        return {term.name}
    if isinstance(term, Prefix):
        return _names(term.continuation)
    if isinstance(term, (Choice, Compose)):
        return _names(term.left) | _names(term.right)
    if isinstance(term, (Restrict, Relabel, Recurse)):
        return _names(term.body)
    return set()


terms = term_strategy()
relabel_free = term_strategy(allow_relabel=False)


# ---------------------------------------------------------------------------
# Laws
# ---------------------------------------------------------------------------


class TestActionLaws:
    """Laws for actions."""

    @given(a=actions)
    def test_complement_involution(self, a):
        """complement(complement(a)) == a."""
        assert complement(complement(a)) == a

    @given(a=actions)
    def test_complement_differs(self, a):
        """An action is never its own complement."""
        assert complement(a) != a
        assert complement(a).channel == a.channel

    @given(a=actions, channel=st.sampled_from(CHANNELS))
    def test_renamed_commutes_with_complement(self, a, channel):
        """renamed and complement commute."""
        assert a.renamed(channel).complement() == a.complement().renamed(channel)


class TestSubstitutionLaws:
    """Laws for substitution."""

    @given(term=terms)
    @settings(max_examples=100)
    def test_idempotent(self, term):
        """Substituting a closed term twice equals substituting once."""
        once = substitute(term, "x", Nil())
        assert "x" not in _names(once)
        assert substitute(once, "x", Nil()) == once

    @given(term=terms)
    @settings(max_examples=100)
    def test_identity_without_occurrence(self, term):
        """Substitution for an absent name is the identity."""
        assert substitute(term, "z", Nil()) == term


class TestStepLaws:
    """Laws for the transition engine."""

    @given(term=relabel_free)
    @settings(max_examples=100)
    def test_pure(self, term):
        """Repeated calls give identical results."""
        assert step(term) == step(term)

    @given(term=relabel_free, channel=st.sampled_from(CHANNELS))
    @settings(max_examples=100)
    def test_restriction_never_adds_transitions(self, term, channel):
        """A restricted term moves only if the unrestricted one does."""
        if step(term) is None:
            assert step(term, Context().restrict(channel)) is None

    @given(left=relabel_free, right=relabel_free, channel=st.sampled_from(CHANNELS))
    @settings(max_examples=100)
    def test_sync_ignores_restriction(self, left, right, channel):
        """Wrapping an operand in a restriction does not change sync success."""
        plain = find_sync(left, right)
        hidden = find_sync(Restrict(body=left, action=Action(channel)), right)
        assert (plain is None) == (hidden is None)
        if plain is not None:
            assert plain[1] == hidden[1]
