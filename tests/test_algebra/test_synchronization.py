"""Tests for the synchronization search."""

from __future__ import annotations

import pytest

from ccs_semantics.algebra import (
    Action,
    OperandKind,
    UnsupportedConstructError,
    choice,
    compose,
    find_sync,
    name,
    nil,
    prefix,
    rec,
    reachable_actions,
    relabel,
    restrict,
)


class TestReachableActions:
    """Tests for collecting reachable actions."""

    def test_prefix(self):
        """Test a prefix offers its action."""
        steps, actions = reachable_actions(prefix("a", prefix("b", nil())))
        assert actions == {Action.parse("a"): prefix("b", nil())}
        assert steps[-1].operation == "Action"

    def test_nil_and_name(self):
        """Test inactive terms offer nothing."""
        assert reachable_actions(nil()) == ([], {})
        assert reachable_actions(name("x")) == ([], {})

    def test_choice_offers_both_sides(self):
        """Test choice does not commit to a branch."""
        _, actions = reachable_actions(choice(prefix("a", nil()), prefix("!b", nil())))
        assert list(actions) == [Action.parse("a"), Action.parse("!b")]

    def test_compose_rebuilds_context(self):
        """Test reached terms keep the untouched side of a composition."""
        _, actions = reachable_actions(compose(prefix("a", nil()), prefix("b", nil())))
        assert actions[Action.parse("a")] == compose(nil(), prefix("b", nil()))
        assert actions[Action.parse("b")] == compose(prefix("a", nil()), nil())

    def test_restriction_passes_through(self):
        """Test restriction does not hide actions from the search."""
        steps, actions = reachable_actions(restrict(prefix("a", nil()), "a"))
        assert actions == {Action.parse("a"): nil()}
        assert steps[-1].operation == "Restrict"
        assert steps[-1].result == "Compose ignores restrictions"

    def test_recursion_is_unfolded(self):
        """Test recursion is explored through its unfolding."""
        term = rec("x", prefix("a", name("x")))
        steps, actions = reachable_actions(term)
        assert actions == {Action.parse("a"): term}
        assert steps[-1].operation == "Recurse"
        assert steps[-1].operand.kind is OperandKind.NONE

    def test_relabel_is_refused(self):
        """Test relabeling aborts the search."""
        with pytest.raises(UnsupportedConstructError) as excinfo:
            reachable_actions(choice(nil(), relabel(prefix("a", nil()), {"a": "b"})))
        assert "Relabelling" in str(excinfo.value)


class TestFindSync:
    """Tests for pairing complementary actions."""

    def test_sync_on_complement(self, sync_process):
        """Test (α.nil + β.nil) | (!α.nil + γ.nil) synchronizes on α."""
        found = find_sync(sync_process.left, sync_process.right)
        assert found is not None
        steps, result = found
        assert result == compose(nil(), nil())
        assert steps[-1].operation == "Compose"
        assert str(steps[-1].operand) == "Sync on α"

    def test_no_complement(self):
        """Test no synchronization between unrelated actions."""
        assert find_sync(prefix("a", nil()), prefix("b", nil())) is None

    def test_same_direction_does_not_sync(self):
        """Test two inputs on one channel do not synchronize."""
        assert find_sync(prefix("a", nil()), prefix("a", nil())) is None

    def test_output_on_left(self):
        """Test the output may be on either side."""
        found = find_sync(prefix("!a", prefix("b", nil())), prefix("a", nil()))
        assert found is not None
        assert found[1] == compose(prefix("b", nil()), nil())

    def test_first_left_action_wins(self):
        """Test the left side's first matching action is taken."""
        left = choice(prefix("a", prefix("p", nil())), prefix("b", prefix("q", nil())))
        right = choice(prefix("!b", nil()), prefix("!a", nil()))
        steps, result = find_sync(left, right)
        assert result == compose(prefix("p", nil()), nil())
        assert steps[-1].operand.label == "a"

    def test_search_boundaries(self, sync_process):
        """Test each side of the search is introduced by a boundary step."""
        steps, _ = find_sync(sync_process.left, sync_process.right)
        boundaries = [entry for entry in steps if entry.is_boundary]
        assert [entry.operand.kind for entry in boundaries] == [
            OperandKind.LEFT,
            OperandKind.RIGHT,
        ]
        assert boundaries[0].result == repr(sync_process.left)
        assert boundaries[1].result == repr(sync_process.right)

    def test_ignores_restriction(self):
        """Test a restricted channel still synchronizes, dropping the restriction."""
        found = find_sync(restrict(prefix("a", nil()), "a"), prefix("!a", nil()))
        assert found is not None
        assert found[1] == compose(nil(), nil())

    def test_nested_composition(self):
        """Test partners are found inside nested compositions."""
        left = compose(prefix("b", nil()), prefix("a", nil()))
        found = find_sync(left, prefix("!a", nil()))
        assert found is not None
        assert found[1] == compose(compose(prefix("b", nil()), nil()), nil())

    def test_recursion_partner(self):
        """Test a recursion synchronizes through its unfolding."""
        server = rec("x", prefix("a", name("x")))
        found = find_sync(server, prefix("!a", nil()))
        assert found is not None
        assert found[1] == compose(server, nil())

    def test_relabel_raises(self):
        """Test relabeling on either side is refused."""
        with pytest.raises(UnsupportedConstructError):
            find_sync(prefix("!b", nil()), relabel(prefix("a", nil()), {"a": "b"}))
