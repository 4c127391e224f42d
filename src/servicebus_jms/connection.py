"""Connection factory options derived from Service Bus JMS settings.

Turns a validated :class:`ServiceBusJmsSettings` into the values a Qpid JMS
connection factory is created with: the AMQP remote URI, SAS credentials,
client id and prefetch policy.
"""

from urllib.parse import urlencode, urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from servicebus_jms.config.logging import get_logger
from servicebus_jms.config.settings import ServiceBusJmsSettings
from servicebus_jms.core.exceptions import InvalidConnectionStringError

log = get_logger(__name__)

AMQP_URI_FORMAT = "amqps://{host}?amqp.idleTimeout={idle_timeout}"

_ENDPOINT = "endpoint"
_KEY_NAME = "sharedaccesskeyname"
_KEY = "sharedaccesskey"
_ENTITY_PATH = "entitypath"


class ServiceBusConnectionString(BaseModel):
    """Parsed Service Bus namespace connection string."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    host: str
    shared_access_key_name: str | None = None
    shared_access_key: SecretStr | None = None
    entity_path: str | None = None


class ConnectionFactoryOptions(BaseModel):
    """Arguments for creating a JMS connection factory."""

    model_config = ConfigDict(frozen=True)

    remote_uri: str
    username: str | None = None
    password: SecretStr | None = None
    client_id: str | None = None
    prefetch: dict[str, int] = Field(default_factory=dict)


def parse_connection_string(text: str) -> ServiceBusConnectionString:
    """Parse ``Endpoint=sb://...;SharedAccessKeyName=...;SharedAccessKey=...``.

    Segment names are case-insensitive and split on the first ``=``, so
    base64 padding in the key survives. Unknown segments are ignored.

    Raises:
        InvalidConnectionStringError: If the endpoint is missing or not an
            ``sb://`` URI, a segment has no ``=``, or only one half of the
            shared access key pair is present.
    """
    segments: dict[str, str] = {}
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, sep, value = segment.partition("=")
        if not sep:
            raise InvalidConnectionStringError(
                f"Connection string segment '{name}' has no value", segment=name
            )
        segments[name.strip().lower()] = value.strip()

    endpoint = segments.get(_ENDPOINT)
    if not endpoint:
        raise InvalidConnectionStringError(
            "Connection string is missing 'Endpoint'", segment="Endpoint"
        )
    parts = urlsplit(endpoint)
    if parts.scheme.lower() != "sb" or not parts.hostname:
        raise InvalidConnectionStringError(
            "Connection string 'Endpoint' must be an sb:// URI", segment="Endpoint"
        )

    key_name = segments.get(_KEY_NAME) or None
    key = segments.get(_KEY) or None
    if (key_name is None) != (key is None):
        raise InvalidConnectionStringError(
            "Connection string must set both 'SharedAccessKeyName' and 'SharedAccessKey'",
            segment="SharedAccessKeyName" if key_name is None else "SharedAccessKey",
        )

    return ServiceBusConnectionString(
        endpoint=endpoint,
        host=parts.hostname,
        shared_access_key_name=key_name,
        shared_access_key=SecretStr(key) if key is not None else None,
        entity_path=segments.get(_ENTITY_PATH) or None,
    )


def build_remote_uri(host: str, settings: ServiceBusJmsSettings) -> str:
    """AMQP remote URI with idle timeout and prefetch policy options."""
    uri = AMQP_URI_FORMAT.format(host=host, idle_timeout=settings.idle_timeout)
    return f"{uri}&{urlencode(settings.prefetch_policy.as_query_params())}"


def build_connection_options(settings: ServiceBusJmsSettings) -> ConnectionFactoryOptions:
    """Validate ``settings`` and derive connection factory options.

    Raises:
        ConfigurationError: If the settings are invalid.
        InvalidConnectionStringError: If the connection string is malformed.
    """
    settings.validate_settings()
    assert settings.connection_string is not None  # guaranteed by validate_settings

    parsed = parse_connection_string(settings.connection_string.get_secret_value())
    options = ConnectionFactoryOptions(
        remote_uri=build_remote_uri(parsed.host, settings),
        username=parsed.shared_access_key_name,
        password=parsed.shared_access_key,
        client_id=settings.topic_client_id,
        prefetch=settings.prefetch_policy.effective(),
    )

    log.info(
        "servicebus_connection_options_built",
        host=parsed.host,
        pricing_tier=settings.tier.value,
        client_id=settings.topic_client_id,
    )
    return options
