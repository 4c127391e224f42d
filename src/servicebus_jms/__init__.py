"""Azure Service Bus JMS settings and connection factory options."""

from servicebus_jms.config import ServiceBusJmsSettings, get_settings
from servicebus_jms.connection import ConnectionFactoryOptions, build_connection_options
from servicebus_jms.core.exceptions import ConfigurationError

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ConnectionFactoryOptions",
    "ServiceBusJmsSettings",
    "build_connection_options",
    "get_settings",
]
