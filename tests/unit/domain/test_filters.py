"""Tests for filter expressions and bound filters."""

from modelsync.domain.scopes import And, BoundFilter, Eq, In, Range
from tests.fakes import Todo


class TestEq:
    """Test equality filter."""

    def test_matches_equal_value(self):
        assert Eq("status", "open").matches(Todo(status="open"))

    def test_rejects_other_value(self):
        assert not Eq("status", "open").matches(Todo(status="closed"))

    def test_none_compares_as_value(self):
        """A None attribute matches Eq(field, None)."""
        assert Eq("owner_id", None).matches(Todo())


class TestIn:
    """Test membership filter."""

    def test_values_are_frozen(self):
        expression = In("priority", ["high", "urgent"])
        assert expression.values == frozenset({"high", "urgent"})

    def test_matches_any_value(self):
        expression = In("priority", {"high", "urgent"})

        assert expression.matches(Todo(priority="urgent"))
        assert not expression.matches(Todo(priority="low"))

    def test_is_hashable(self):
        assert hash(In("priority", ["a"])) == hash(In("priority", ("a",)))


class TestRange:
    """Test range filter."""

    def test_inclusive_bounds(self):
        expression = Range("priority", lower=1, upper=3)

        assert expression.matches(Todo(priority=1))
        assert expression.matches(Todo(priority=3))
        assert not expression.matches(Todo(priority=4))
        assert not expression.matches(Todo(priority=0))

    def test_exclusive_upper_bound(self):
        expression = Range("priority", lower=1, upper=3, include_upper=False)
        assert not expression.matches(Todo(priority=3))

    def test_open_bounds(self):
        assert Range("priority", lower=5).matches(Todo(priority=100))
        assert Range("priority", upper=5).matches(Todo(priority=-100))

    def test_none_never_matches(self):
        assert not Range("priority").matches(Todo(priority=None))


class TestAnd:
    """Test conjunction."""

    def test_all_clauses_must_match(self):
        expression = Eq("status", "open") & Eq("owner_id", 1)

        assert expression.matches(Todo(status="open", owner_id=1))
        assert not expression.matches(Todo(status="open", owner_id=2))

    def test_operator_flattens_nested_conjunctions(self):
        expression = Eq("status", "open") & Eq("owner_id", 1) & Eq("priority", 2)

        assert isinstance(expression, And)
        assert len(expression.clauses) == 3

    def test_empty_conjunction_matches_everything(self):
        assert And().matches(Todo())


class TestBoundFilter:
    """Test the bound filter capabilities used by the diff engine."""

    def test_valid_with_expression(self):
        bound = BoundFilter(Eq("status", "open"), "/todos/open")

        assert bound.valid
        assert bound.contains(Todo(status="open"))
        assert bound.channel_identity == "/todos/open"

    def test_invalid_contains_nothing(self):
        bound = BoundFilter(None, "/todos/by_owner/owner_id/~null")

        assert not bound.valid
        assert not bound.contains(Todo(owner_id=None))

    def test_unknown_field_contains_nothing(self, caplog):
        bound = BoundFilter(Eq("stauts", "open"), "/todos/typo")

        with caplog.at_level("WARNING", logger="modelsync.scopes"):
            assert not bound.contains(Todo(status="open"))

        assert "Scope filter failed" in caplog.text

    def test_incomparable_value_contains_nothing(self):
        bound = BoundFilter(Range("priority", lower=1), "/todos/urgent")
        assert not bound.contains(Todo(priority="high"))
