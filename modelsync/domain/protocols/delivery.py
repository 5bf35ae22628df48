"""Delivery protocols - transport and fragment rendering collaborators."""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from modelsync.domain.entities.action import Action


class Transport(Protocol):
    """Abstract interface for pushing actions to remote subscribers."""

    def publish(self, channel_identity: str, action: "Action") -> None:
        """Deliver one action to a channel. Fire-and-forget."""
        ...


class FragmentRenderer(Protocol):
    """Abstract interface for rendering the payload of an action."""

    def render(self, action: "Action", render_context: Any | None = None) -> Any:
        """Render the fragment for the action's record (or old/new pair)."""
        ...
