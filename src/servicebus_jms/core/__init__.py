"""Core types shared across servicebus-jms."""

from servicebus_jms.core.exceptions import (
    ConfigurationError,
    InvalidConnectionStringError,
    ServiceBusJmsError,
)

__all__ = ["ConfigurationError", "InvalidConnectionStringError", "ServiceBusJmsError"]
