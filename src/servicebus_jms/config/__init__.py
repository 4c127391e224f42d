"""Configuration module for servicebus-jms.

Usage:
    from servicebus_jms.config import get_settings

    settings = get_settings()  # Cached, validated singleton
    print(settings.prefetch_policy.effective_queue_prefetch)

Note:
    We intentionally don't export a module-level `settings` instance
    because validation would fail on import when the connection string
    or pricing tier is not configured. Use `get_settings()` at runtime.
"""

from servicebus_jms.config.listener import ContainerKind, DeliveryMode, ListenerOptions, QosSettings
from servicebus_jms.config.prefetch import PrefetchPolicy, resolve_prefetch
from servicebus_jms.config.settings import PricingTier, ServiceBusJmsSettings, get_settings

__all__ = [
    "ContainerKind",
    "DeliveryMode",
    "ListenerOptions",
    "PrefetchPolicy",
    "PricingTier",
    "QosSettings",
    "ServiceBusJmsSettings",
    "get_settings",
    "resolve_prefetch",
]
