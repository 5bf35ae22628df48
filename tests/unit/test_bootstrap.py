"""Tests for startup and shutdown wiring."""

import logging
from collections.abc import Generator

import pytest
from sqlalchemy import event

from modelsync.bootstrap import configure, sync_lifespan
from modelsync.config import Settings
from modelsync.domain.scopes import ScopeRegistry
from modelsync.infrastructure.database import connection, get_session_factory
from modelsync.infrastructure.telemetry import configure_tracing, shutdown_tracing
from modelsync.infrastructure.telemetry.logging import TextFormatter
from modelsync.infrastructure.transport import SubscriptionHub


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """configure() replaces the root handlers; put the test harness's back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigure:
    """Test telemetry configuration from settings."""

    def test_configures_text_logging(self, settings: Settings):
        assert configure(settings) is settings

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_tracing_in_test_environment(self):
        provider = configure_tracing(environment="test")
        try:
            assert provider.resource.attributes["deployment.environment"] == "test"
        finally:
            shutdown_tracing()


class TestSyncLifespan:
    """Test the lifespan context manager."""

    def test_installs_hooks_and_cleans_up(
        self,
        settings: Settings,
        registry: ScopeRegistry,
        hub: SubscriptionHub,
    ):
        with sync_lifespan(hub, registry, settings) as hooks:
            factory = get_session_factory()

            assert registry.frozen
            assert hooks.publisher.transport is hub
            assert event.contains(factory, "before_flush", hooks._listeners["before_flush"])

        assert connection._engine is None
        assert connection._session_factory is None
