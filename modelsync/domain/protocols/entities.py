"""Entity store protocol - what the sync engine reads from a persistent record."""

from collections.abc import Collection
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SyncEntity(Protocol):
    """Abstract interface for a record whose mutations are synced.

    The engine only ever reads through this interface. Class-level methods
    describe the record type; instance methods read one record.
    """

    @classmethod
    def sync_resource_name(cls) -> str:
        """Plural resource name used in channel identities (e.g. 'todos')."""
        ...

    @classmethod
    def sync_attribute_names(cls) -> Collection[str]:
        """Names of the direct attributes (columns) of the type."""
        ...

    @classmethod
    def sync_relation_names(cls) -> Collection[str]:
        """Names of the named relations of the type."""
        ...

    def sync_identity(self) -> Any:
        """Stable identity (primary key) of the record."""
        ...

    def sync_attribute(self, name: str) -> Any:
        """Current value of a direct attribute."""
        ...

    def sync_relation(self, name: str) -> Any:
        """Related record for a named relation, or None when absent."""
        ...

    def sync_attributes(self) -> dict[str, Any]:
        """All direct attribute values."""
        ...

    def sync_changed_attributes(self) -> dict[str, Any]:
        """Pre-mutation values of the attributes about to change."""
        ...

    def sync_reload(self) -> "SyncEntity":
        """Return the record with its state re-read from the store."""
        ...
