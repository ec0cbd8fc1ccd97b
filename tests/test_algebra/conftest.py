"""Test fixtures for CCS semantics tests."""

from __future__ import annotations

import pytest

from ccs_semantics.algebra import (
    choice,
    compose,
    name,
    nil,
    prefix,
    rec,
    relabel,
    restrict,
)


@pytest.fixture
def simple_prefix():
    """Simple prefix process: a.nil."""
    return prefix("a", nil())


@pytest.fixture
def sync_process():
    """Synchronizing choices: (α.nil + β.nil) | (!α.nil + γ.nil)."""
    return compose(
        choice(prefix("α", nil()), prefix("β", nil())),
        choice(prefix("!α", nil()), prefix("γ", nil())),
    )


@pytest.fixture
def recursive_process():
    """Recursive process: _rec x.a.x."""
    return rec("x", prefix("a", name("x")))


@pytest.fixture
def relabeled_process():
    """Relabeled prefix: a.nil[b/a]."""
    return relabel(prefix("a", nil()), {"a": "b"})


@pytest.fixture
def restricted_handshake():
    """Private handshake: (a.nil | !a.nil)\\a."""
    return restrict(compose(prefix("a", nil()), prefix("!a", nil())), "a")
