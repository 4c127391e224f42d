"""Service Bus JMS exception hierarchy.

This module defines the base exception class and the configuration
errors raised while loading and validating Service Bus JMS settings.
"""


class ServiceBusJmsError(Exception):
    """Base exception for all servicebus-jms errors.

    All custom exceptions in this package inherit from this class
    so callers can catch them in one place.
    """

    pass


class ConfigurationError(ServiceBusJmsError):
    """Raised when configuration is invalid or missing.

    The message names the offending configuration key. The error is
    fatal to startup and should reach the operator unmodified.

    Example:
        raise ConfigurationError("'servicebus.connection-string' should be provided")
    """

    pass


class InvalidConnectionStringError(ConfigurationError):
    """Raised when a Service Bus connection string cannot be parsed.

    Attributes:
        segment: The connection string segment that failed (if available).

    Example:
        raise InvalidConnectionStringError("Endpoint must use sb://", segment="Endpoint")
    """

    def __init__(self, message: str, segment: str | None = None) -> None:
        super().__init__(message)
        self.segment = segment
