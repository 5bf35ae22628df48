"""Filter expressions evaluated in memory against a single record.

Scope predicates return one of these tagged variants instead of arbitrary
code, so membership can be tested against before/after snapshots without
querying the store:

    Eq("status", "open")
    In("priority", {"high", "urgent"})
    Range("due_day", lower=1, upper=7)
    Eq("project_id", project_id) & Eq("complete", False)
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("modelsync.scopes")


class FilterExpression(ABC):
    """A predicate over the attributes of one record."""

    @abstractmethod
    def matches(self, entity: Any) -> bool:
        """Test a single record."""

    def __and__(self, other: "FilterExpression") -> "And":
        return And.of(self, other)


@dataclass(frozen=True)
class Eq(FilterExpression):
    """Attribute equals a value."""

    field: str
    value: Any

    def matches(self, entity: Any) -> bool:
        return entity.sync_attribute(self.field) == self.value


@dataclass(frozen=True)
class In(FilterExpression):
    """Attribute is one of a set of values."""

    field: str
    values: frozenset[Any]

    def __init__(self, field: str, values: Iterable[Any]) -> None:
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "values", frozenset(values))

    def matches(self, entity: Any) -> bool:
        return entity.sync_attribute(self.field) in self.values


@dataclass(frozen=True)
class Range(FilterExpression):
    """Attribute lies within bounds. Missing bounds are open; None never matches."""

    field: str
    lower: Any = None
    upper: Any = None
    include_upper: bool = True

    def matches(self, entity: Any) -> bool:
        value = entity.sync_attribute(self.field)
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None:
            return value <= self.upper if self.include_upper else value < self.upper
        return True


@dataclass(frozen=True)
class And(FilterExpression):
    """All clauses match. An empty conjunction matches every record."""

    clauses: tuple[FilterExpression, ...] = ()

    @classmethod
    def of(cls, *clauses: FilterExpression) -> "And":
        flat: list[FilterExpression] = []
        for clause in clauses:
            if isinstance(clause, And):
                flat.extend(clause.clauses)
            else:
                flat.append(clause)
        return cls(tuple(flat))

    def matches(self, entity: Any) -> bool:
        return all(clause.matches(entity) for clause in self.clauses)


@dataclass(frozen=True)
class BoundFilter:
    """A scope's filter bound to concrete arguments.

    Exposes the capabilities the diff engine relies on: a membership test,
    a validity check and the channel identity. A filter that fails against
    a record does not contain it.
    """

    expression: FilterExpression | None
    channel_identity: str

    @property
    def valid(self) -> bool:
        return self.expression is not None

    def contains(self, entity: Any) -> bool:
        if self.expression is None:
            return False
        try:
            return self.expression.matches(entity)
        except Exception:
            logger.warning(
                "Scope filter failed, treating record as outside the scope",
                extra={"channel": self.channel_identity},
                exc_info=True,
            )
            return False
