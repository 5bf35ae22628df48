"""Detached record - the pre-mutation state of a record."""

from collections.abc import Collection
from typing import Any


class DetachedRecord:
    """Structurally detached copy of a record.

    Carries the record's attributes with the about-to-change attributes reset
    to their original values. Relations are read through to the source record
    once and cached, so they must be resolved before the mutation is applied
    (snapshot capture does this when deriving scopes).
    """

    def __init__(
        self,
        source: Any,
        attributes: dict[str, Any],
        relations: dict[str, Any] | None = None,
    ) -> None:
        self._owner_type = type(source)
        self._source = source
        self._identity = source.sync_identity()
        self._attributes = dict(attributes)
        self._relations = dict(relations or {})

    @classmethod
    def from_entity(cls, entity: Any) -> "DetachedRecord":
        """Copy an entity and overlay the pre-mutation values of changed attributes."""
        changed = entity.sync_changed_attributes()
        attribute_names = set(entity.sync_attribute_names())
        attributes = entity.sync_attributes()
        relations: dict[str, Any] = {}
        for name, value in changed.items():
            if name in attribute_names:
                attributes[name] = value
            else:
                relations[name] = value
        return cls(entity, attributes, relations)

    @property
    def owner_type(self) -> type:
        return self._owner_type

    def sync_resource_name(self) -> str:
        return self._owner_type.sync_resource_name()

    def sync_attribute_names(self) -> Collection[str]:
        return self._owner_type.sync_attribute_names()

    def sync_relation_names(self) -> Collection[str]:
        return self._owner_type.sync_relation_names()

    def sync_identity(self) -> Any:
        return self._identity

    def sync_attribute(self, name: str) -> Any:
        try:
            return self._attributes[name]
        except KeyError:
            raise AttributeError(name) from None

    def sync_relation(self, name: str) -> Any:
        if name not in self._relations:
            self._relations[name] = self._source.sync_relation(name)
        return self._relations[name]

    def sync_attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def sync_changed_attributes(self) -> dict[str, Any]:
        return {}

    def sync_reload(self) -> "DetachedRecord":
        return self

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found normally; exposes attributes to renderers.
        attributes = self.__dict__.get("_attributes", {})
        if name in attributes:
            return attributes[name]
        raise AttributeError(name)

    def __repr__(self) -> str:
        return f"DetachedRecord({self._owner_type.__name__}, id={self._identity!r})"
