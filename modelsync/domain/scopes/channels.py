"""Channel identity derivation.

Channels are resource paths. A scope instance publishes on
``/<resource>/<scope>/<param>/<value>...``; a record on ``/<resource>/<id>``;
new records on the collection ``/<resource>``, nested under the parent's
path when the record belongs to a default scope.

Values are percent-encoded. Missing values and booleans render as ``~null``,
``~true`` and ``~false``; a string starting with ``~`` has it encoded, so
those tokens never collide with a string argument.
"""

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from modelsync.domain.scopes.resolver import UNRESOLVED

NULL_SEGMENT = "~null"
TRUE_SEGMENT = "~true"
FALSE_SEGMENT = "~false"


def channel_value(value: Any) -> str:
    """Render one bound argument as a path segment."""
    if value is None or value is UNRESOLVED:
        return NULL_SEGMENT
    if hasattr(value, "sync_identity"):
        return channel_value(value.sync_identity())
    if isinstance(value, bool):
        return TRUE_SEGMENT if value else FALSE_SEGMENT
    if isinstance(value, tuple):
        return ",".join(channel_value(part) for part in value)
    segment = quote(str(value), safe="")
    if segment.startswith("~"):
        segment = "%7E" + segment[1:]
    return segment


def scope_channel(
    resource: str,
    scope_name: str,
    parameter_names: Sequence[str],
    args: Sequence[Any],
) -> str:
    """Channel of a scope bound to arguments."""
    segments = [resource, scope_name]
    for name, value in zip(parameter_names, args, strict=True):
        segments.extend((name, channel_value(value)))
    return "/" + "/".join(segments)


def record_channel(entity: Any) -> str:
    """Channel of a single record."""
    return f"/{entity.sync_resource_name()}/{channel_value(entity.sync_identity())}"


def collection_channel(resource: str, parent: Any | None = None) -> str:
    """Channel of a record collection, optionally nested under a parent record."""
    if parent is None:
        return f"/{resource}"
    return f"{record_channel(parent)}/{resource}"
