"""Transport that only logs published actions."""

import logging

from modelsync.domain.entities import Action
from modelsync.infrastructure.telemetry import get_logger


class LoggingTransport:
    """Writes every published action to the log. Useful in development."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level
        self._logger = get_logger(__name__)

    def publish(self, channel_identity: str, action: Action) -> None:
        self._logger.log(
            self.level,
            f"sync {action.kind} on {channel_identity}",
            extra={"action": action.to_dict()},
        )
