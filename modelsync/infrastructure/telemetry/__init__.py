"""Telemetry infrastructure (logging, tracing, metrics)."""

from modelsync.infrastructure.telemetry.logging import (
    ContextLogger,
    configure_logging,
    get_logger,
    unit_of_work_id_var,
)
from modelsync.infrastructure.telemetry.metrics import (
    record_actions,
    record_delivery,
    record_flush,
    record_queue_discarded,
    record_snapshot,
    set_service_info,
)
from modelsync.infrastructure.telemetry.tracing import (
    configure_tracing,
    create_span,
    get_tracer,
    shutdown_tracing,
)

__all__ = [
    # Logging
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "unit_of_work_id_var",
    # Tracing
    "configure_tracing",
    "get_tracer",
    "create_span",
    "shutdown_tracing",
    # Metrics
    "set_service_info",
    "record_actions",
    "record_snapshot",
    "record_delivery",
    "record_flush",
    "record_queue_discarded",
]
