"""Diff engine - turns a record mutation into sync actions.

Creation and destruction notify the record's primary channel, refresh the
default scope (the parent record) and notify every declared scope. Updates
compare scope membership before and after the mutation, for both the
scope derived from the old record and the one derived from the new record,
because a scope's arguments may themselves have changed.
"""

from typing import Any

from modelsync.application.context import current_render_context
from modelsync.application.snapshot import capture_snapshot
from modelsync.domain.entities import Action, ActionKind, SyncSnapshot
from modelsync.domain.scopes import ScopeDefinition, ScopeRegistry, get_registry
from modelsync.infrastructure.telemetry import get_logger, record_actions

logger = get_logger(__name__)


class SyncDiffEngine:
    """Classifies create/update/destroy mutations into actions."""

    def __init__(self, registry: ScopeRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def capture(self, entity: Any) -> SyncSnapshot:
        """Snapshot a record before an update is applied."""
        return capture_snapshot(entity, self.registry.definitions_for(type(entity)))

    def prepare_create(self, entity: Any) -> list[Action]:
        options = self.registry.options(type(entity))
        context = current_render_context()
        default_scope = options.default_scope_for(entity)

        actions = [Action(entity, ActionKind.NEW, scope=default_scope, render_context=context)]
        if default_scope is not None:
            actions.append(
                Action(default_scope.sync_reload(), ActionKind.UPDATE, render_context=context)
            )

        for definition in self.registry.definitions_for(type(entity)):
            actions.append(
                Action(
                    entity,
                    ActionKind.NEW,
                    scope=definition.derive(entity),
                    default_scope=default_scope,
                    render_context=context,
                )
            )

        return self._finish(entity, actions)

    def prepare_update(self, entity: Any, snapshot: SyncSnapshot) -> list[Action]:
        options = self.registry.options(type(entity))
        context = current_render_context()
        default_scope = options.default_scope_for(entity)

        if default_scope is not None:
            record = (snapshot.record_before_update, default_scope.sync_reload())
            actions = [Action(record, ActionKind.UPDATE, render_context=context)]
        else:
            actions = [Action(entity, ActionKind.UPDATE, render_context=context)]

        for definition in self.registry.definitions_for(type(entity)):
            actions.extend(
                self._prepare_update_scope(definition, entity, snapshot, default_scope, context)
            )

        return self._finish(entity, actions)

    def prepare_destroy(self, entity: Any) -> list[Action]:
        options = self.registry.options(type(entity))
        context = current_render_context()
        default_scope = options.default_scope_for(entity)

        actions = [Action(entity, ActionKind.DESTROY, scope=default_scope, render_context=context)]
        if default_scope is not None:
            actions.append(
                Action(default_scope.sync_reload(), ActionKind.UPDATE, render_context=context)
            )

        for definition in self.registry.definitions_for(type(entity)):
            actions.append(
                Action(
                    entity,
                    ActionKind.DESTROY,
                    scope=definition.derive(entity),
                    default_scope=default_scope,
                    render_context=context,
                )
            )

        return self._finish(entity, actions)

    def _prepare_update_scope(
        self,
        definition: ScopeDefinition,
        record_after_update: Any,
        snapshot: SyncSnapshot,
        default_scope: Any | None,
        context: Any | None,
    ) -> list[Action]:
        """Diff one scope's membership across an update.

        A scope instance holds the records that matched it when it was
        evaluated; a record state is a member only if the record was in that
        set and the state still satisfies the scope's filter.
        """
        record_before_update = snapshot.record_before_update
        before = snapshot.scopes.get(definition.name)
        if before is None:
            scope_before_update = definition.derive(record_before_update)
            old_in_old = scope_before_update.contains(record_before_update)
        else:
            scope_before_update = before.scope
            old_in_old = before.contains_record
        scope_after_update = definition.derive(record_after_update)

        new_in_new = scope_after_update.contains(record_after_update)
        new_in_old = old_in_old and scope_before_update.contains(record_after_update)
        old_in_new = new_in_new and scope_after_update.contains(record_before_update)

        actions: list[Action] = []

        # Update/destroy existing fragments of subscribers on the old scope
        if scope_before_update.valid:
            if old_in_old and not new_in_old:
                actions.append(
                    Action(
                        record_before_update,
                        ActionKind.DESTROY,
                        scope=scope_before_update,
                        default_scope=default_scope,
                        render_context=context,
                    )
                )
            elif old_in_new and not old_in_old:
                actions.append(
                    Action(
                        record_after_update,
                        ActionKind.UPDATE,
                        scope=scope_before_update,
                        default_scope=default_scope,
                        render_context=context,
                    )
                )

        # Publish new fragments to subscribers on the new scope
        if scope_after_update.valid and new_in_new and not new_in_old:
            actions.append(
                Action(
                    record_after_update,
                    ActionKind.NEW,
                    scope=scope_after_update,
                    default_scope=default_scope,
                    render_context=context,
                )
            )

        logger.debug(
            "Diffed sync scope",
            extra={
                "scope": definition.name,
                "old_in_old": old_in_old,
                "old_in_new": old_in_new,
                "new_in_new": new_in_new,
                "new_in_old": new_in_old,
                "actions": [str(action.kind) for action in actions],
            },
        )
        return actions

    @staticmethod
    def _finish(entity: Any, actions: list[Action]) -> list[Action]:
        record_actions(entity.sync_resource_name(), [str(action.kind) for action in actions])
        return actions
