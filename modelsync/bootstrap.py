"""Startup and shutdown wiring for host applications.

    with sync_lifespan(SubscriptionHub()) as hooks:
        with get_db_session() as session, sync_enabled():
            session.add(todo)
"""

from collections.abc import Generator
from contextlib import contextmanager

from modelsync.application import Publisher, SyncDiffEngine
from modelsync.config import Settings, get_settings
from modelsync.domain.protocols import Transport
from modelsync.domain.scopes import ScopeRegistry, get_registry
from modelsync.infrastructure.database import SessionSyncHooks, close_db, init_db
from modelsync.infrastructure.telemetry import (
    configure_logging,
    configure_tracing,
    get_logger,
    set_service_info,
    shutdown_tracing,
)

logger = get_logger(__name__)


def configure(settings: Settings | None = None) -> Settings:
    """Configure logging, tracing and metrics from settings.

    Args:
        settings: Optional settings override for testing

    Returns:
        The settings used
    """
    if settings is None:
        settings = get_settings()

    configure_logging(level=settings.log_level, format_type=settings.log_format)

    if settings.otel_enabled:
        configure_tracing(
            service_name=settings.otel_service_name,
            service_version=settings.version,
            environment=settings.environment,
            otlp_endpoint=settings.otlp_endpoint if settings.otlp_endpoint else None,
        )

    if settings.prometheus_enabled:
        set_service_info(settings.version, settings.environment)

    return settings


@contextmanager
def sync_lifespan(
    transport: Transport,
    registry: ScopeRegistry | None = None,
    settings: Settings | None = None,
) -> Generator[SessionSyncHooks, None, None]:
    """Wire the sync engine into the reference store for the lifetime of the block.

    Freezes the registry, installs session hooks on the session factory and
    releases database connections and tracing on exit.
    """
    settings = configure(settings)
    registry = registry or get_registry()
    registry.freeze()

    hooks = SessionSyncHooks(SyncDiffEngine(registry), Publisher(transport))
    init_db(settings, hooks)
    logger.info(
        "modelsync started",
        extra={"version": settings.version, "environment": settings.environment},
    )

    try:
        yield hooks
    finally:
        logger.info("Shutting down modelsync")
        close_db()
        shutdown_tracing()
