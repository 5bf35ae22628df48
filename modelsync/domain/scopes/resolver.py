"""Attribute resolver - binds scope parameters to values read from a record."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Final

logger = logging.getLogger("modelsync.resolver")


class ParameterKind(StrEnum):
    """How a scope parameter is read from a record."""

    ATTRIBUTE = "attribute"
    RELATION = "relation"


@dataclass(frozen=True)
class ScopeParameter:
    """One entry of a scope's parameter schema."""

    name: str
    kind: ParameterKind


class _Unresolved:
    """Marker for a parameter that could not be read from a record."""

    _instance: "_Unresolved | None" = None

    def __new__(cls) -> "_Unresolved":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED: Final = _Unresolved()


def classify_parameter(owner_type: type, name: str) -> ScopeParameter | None:
    """Decide at declaration time whether a name is an attribute or a relation.

    Attributes win over relations; None means the owner has neither.
    """
    if name in owner_type.sync_attribute_names():
        return ScopeParameter(name, ParameterKind.ATTRIBUTE)
    if name in owner_type.sync_relation_names():
        return ScopeParameter(name, ParameterKind.RELATION)
    return None


def resolve(entity: Any, parameter: ScopeParameter) -> Any:
    """Read a parameter value from a record.

    Returns the attribute value, the related record (None when the relation
    is empty) or UNRESOLVED when the record cannot provide it.
    """
    try:
        if parameter.kind is ParameterKind.ATTRIBUTE:
            return entity.sync_attribute(parameter.name)
        return entity.sync_relation(parameter.name)
    except Exception:
        logger.debug(
            "Scope parameter unresolved",
            extra={"parameter": parameter.name, "kind": str(parameter.kind)},
            exc_info=True,
        )
        return UNRESOLVED


def is_resolved(value: Any) -> bool:
    """Whether a bound argument can take part in a membership test."""
    return value is not None and value is not UNRESOLVED
