"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, Info

# Library info
SERVICE_INFO = Info("modelsync", "modelsync library information")

# Diff engine metrics
SYNC_ACTIONS_TOTAL = Counter(
    "modelsync_actions_total",
    "Total sync actions generated",
    ["resource", "kind"],  # kind: new/update/destroy
)

SYNC_SNAPSHOTS_TOTAL = Counter(
    "modelsync_snapshots_total",
    "Total pre-mutation snapshots captured",
    ["resource"],
)

# Publisher metrics
SYNC_DELIVERIES_TOTAL = Counter(
    "modelsync_deliveries_total",
    "Total action deliveries attempted",
    ["status"],  # status: success/failure
)

SYNC_QUEUES_DISCARDED_TOTAL = Counter(
    "modelsync_queues_discarded_total",
    "Total action queues dropped without publishing",
    ["reason"],  # reason: rollback/disabled
)

SYNC_FLUSH_DURATION_SECONDS = Histogram(
    "modelsync_flush_duration_seconds",
    "Action queue flush latency in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def set_service_info(version: str, environment: str) -> None:
    """Set library information.

    Args:
        version: Library version
        environment: Deployment environment
    """
    SERVICE_INFO.info({
        "version": version,
        "environment": environment,
    })


def record_actions(resource: str, kinds: list[str]) -> None:
    """Record generated actions for one entity mutation.

    Args:
        resource: Resource name of the mutated entity
        kinds: Kind of every generated action
    """
    for kind in kinds:
        SYNC_ACTIONS_TOTAL.labels(resource=resource, kind=kind).inc()


def record_snapshot(resource: str) -> None:
    """Record a captured pre-mutation snapshot."""
    SYNC_SNAPSHOTS_TOTAL.labels(resource=resource).inc()


def record_delivery(success: bool) -> None:
    """Record a single action delivery.

    Args:
        success: Whether the transport accepted the action
    """
    SYNC_DELIVERIES_TOTAL.labels(status="success" if success else "failure").inc()


def record_flush(duration_seconds: float) -> None:
    """Record an action queue flush."""
    SYNC_FLUSH_DURATION_SECONDS.observe(duration_seconds)


def record_queue_discarded(reason: str) -> None:
    """Record an action queue dropped without publishing.

    Args:
        reason: Why the queue was dropped (rollback, disabled)
    """
    SYNC_QUEUES_DISCARDED_TOTAL.labels(reason=reason).inc()
