"""Transports - deliver published actions to subscribers."""

from modelsync.infrastructure.transport.hub import Delivery, DeliveryHandler, SubscriptionHub
from modelsync.infrastructure.transport.logging import LoggingTransport

__all__ = [
    "Delivery",
    "DeliveryHandler",
    "SubscriptionHub",
    "LoggingTransport",
]
