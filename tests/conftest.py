"""Pytest configuration and fixtures."""

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from modelsync.application import Publisher, SyncDiffEngine, SyncUnitOfWork, sync_enabled
from modelsync.config import Settings, get_settings
from modelsync.domain.scopes import ScopeRegistry
from modelsync.infrastructure.transport import SubscriptionHub


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        environment="test",
        database_url="sqlite://",
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings fresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry() -> ScopeRegistry:
    """Empty scope registry."""
    return ScopeRegistry()


@pytest.fixture
def engine(registry: ScopeRegistry) -> SyncDiffEngine:
    return SyncDiffEngine(registry)


@pytest.fixture
def hub() -> SubscriptionHub:
    return SubscriptionHub()


@pytest.fixture
def publisher(hub: SubscriptionHub) -> Publisher:
    return Publisher(hub)


@pytest.fixture
def uow(engine: SyncDiffEngine, publisher: Publisher) -> SyncUnitOfWork:
    return SyncUnitOfWork(engine, publisher)


@pytest.fixture
def sync_on() -> Generator[None, None, None]:
    """Run the test with syncing enabled."""
    with sync_enabled():
        yield


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport recording publish() calls."""
    transport = MagicMock()
    transport.publish = MagicMock(return_value=None)
    return transport
