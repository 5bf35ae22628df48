"""Domain protocols - abstract interfaces for infrastructure implementations."""

from modelsync.domain.protocols.delivery import FragmentRenderer, Transport
from modelsync.domain.protocols.entities import SyncEntity

__all__ = [
    # Entity store
    "SyncEntity",
    # Delivery
    "Transport",
    "FragmentRenderer",
]
