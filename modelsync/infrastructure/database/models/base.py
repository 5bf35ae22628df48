"""SQLAlchemy declarative base and the sync entity mixin."""

from typing import Any

from sqlalchemy import event, inspect
from sqlalchemy.orm import DeclarativeBase, LoaderCallableStatus

from modelsync.domain.scopes.resolver import UNRESOLVED


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _track_previous_value(target: Any, value: Any, oldvalue: Any, initiator: Any) -> None:
    """No-op set listener; registering it with active history is the point."""


class SyncModelMixin:
    """Implements the SyncEntity protocol for a mapped class.

    Attributes are the mapped columns, relations the mapped relationships.
    Pre-mutation values come from SQLAlchemy's attribute history, so they
    are only available until the session flushes.

    Every tracked attribute is registered with active history: assigning to
    an expired column or an unloaded many-to-one relation loads the previous
    value first, so the before-image of a record is never guessed.
    """

    @classmethod
    def __declare_last__(cls) -> None:
        for key in cls._sync_tracked_keys():
            attribute = getattr(cls, key)
            if not event.contains(attribute, "set", _track_previous_value):
                event.listen(attribute, "set", _track_previous_value, active_history=True)

    @classmethod
    def _sync_tracked_keys(cls) -> list[str]:
        mapper = inspect(cls)
        keys = [prop.key for prop in mapper.column_attrs]
        # Collections are not scope arguments; only many-to-one relations are tracked
        keys += [prop.key for prop in mapper.relationships if not prop.uselist]
        return keys

    @classmethod
    def sync_resource_name(cls) -> str:
        return cls.__tablename__

    @classmethod
    def sync_attribute_names(cls) -> list[str]:
        return [prop.key for prop in inspect(cls).column_attrs]

    @classmethod
    def sync_relation_names(cls) -> list[str]:
        return [prop.key for prop in inspect(cls).relationships]

    def sync_identity(self) -> Any:
        identity = inspect(self).identity
        if identity is None:
            return None
        return identity[0] if len(identity) == 1 else identity

    def sync_attribute(self, name: str) -> Any:
        if name not in self.sync_attribute_names():
            raise AttributeError(name)
        return getattr(self, name)

    def sync_relation(self, name: str) -> Any:
        if name not in self.sync_relation_names():
            raise AttributeError(name)
        return getattr(self, name)

    def sync_attributes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.sync_attribute_names()}

    def sync_changed_attributes(self) -> dict[str, Any]:
        """Map each changed attribute to its pre-mutation value.

        An attribute that was unset before the change maps to None. One whose
        previous value was never loaded maps to UNRESOLVED, which makes any
        scope bound from it invalid rather than addressed to a null channel.
        """
        state = inspect(self)
        no_value = LoaderCallableStatus.NO_VALUE
        changed: dict[str, Any] = {}
        for key in self._sync_tracked_keys():
            history = state.attrs[key].history
            if not history.has_changes():
                continue
            if history.deleted:
                changed[key] = history.deleted[0]
            elif state.committed_state.get(key, no_value) is no_value:
                changed[key] = UNRESOLVED if state.has_identity else None
            else:
                changed[key] = None
        return changed

    def sync_reload(self) -> "SyncModelMixin":
        state = inspect(self)
        if state.session is not None and state.persistent:
            state.session.refresh(self)
        return self
