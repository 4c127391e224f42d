"""Service Bus JMS settings using pydantic-settings."""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from servicebus_jms.config.listener import ListenerOptions
from servicebus_jms.config.logging import get_logger
from servicebus_jms.config.prefetch import PrefetchPolicy
from servicebus_jms.core.exceptions import ConfigurationError

log = get_logger(__name__)

KEY_PREFIX = "servicebus"
DEFAULT_IDLE_TIMEOUT_MS = 1_800_000


class PricingTier(str, Enum):
    """Accepted Service Bus pricing tiers."""

    PREMIUM = "premium"
    STANDARD = "standard"
    BASIC = "basic"

    @classmethod
    def parse(cls, value: str | None) -> "PricingTier | None":
        """Match ``value`` case-insensitively, None if it is not a tier."""
        if value is None:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


class ServiceBusJmsSettings(BaseSettings):
    """Service Bus JMS connection settings from environment variables.

    Nested groups bind from ``SERVICEBUS_LISTENER__*`` and
    ``SERVICEBUS_PREFETCH_POLICY__*``. Construction only checks field
    types; call :meth:`validate_settings` once all fields are populated.
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVICEBUS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    connection_string: SecretStr | None = Field(
        default=None, description="Service Bus namespace connection string"
    )
    topic_client_id: str | None = Field(
        default=None, description="JMS client id, used by the topic listener factory only"
    )
    idle_timeout: int = Field(
        default=DEFAULT_IDLE_TIMEOUT_MS, description="AMQP idle timeout in milliseconds"
    )
    pricing_tier: str | None = Field(
        default=None, description="Pricing tier: premium, standard or basic"
    )

    listener: ListenerOptions = Field(default_factory=ListenerOptions)
    prefetch_policy: PrefetchPolicy = Field(default_factory=PrefetchPolicy)

    @property
    def tier(self) -> PricingTier:
        """Pricing tier as an enum member."""
        tier = PricingTier.parse(self.pricing_tier)
        if tier is None:
            raise ConfigurationError(f"'{KEY_PREFIX}.pricing-tier' is not valid")
        return tier

    def validate_settings(self) -> "ServiceBusJmsSettings":
        """Check the top-level settings.

        Returns:
            The same settings instance.

        Raises:
            ConfigurationError: If the connection string is missing or blank,
                or the pricing tier is not premium, standard or basic.
        """
        secret = self.connection_string.get_secret_value() if self.connection_string else ""
        if not secret.strip():
            log.error("servicebus_settings_invalid", key=f"{KEY_PREFIX}.connection-string")
            raise ConfigurationError(f"'{KEY_PREFIX}.connection-string' should be provided")

        if PricingTier.parse(self.pricing_tier) is None:
            log.error(
                "servicebus_settings_invalid",
                key=f"{KEY_PREFIX}.pricing-tier",
                value=self.pricing_tier,
            )
            raise ConfigurationError(f"'{KEY_PREFIX}.pricing-tier' is not valid")

        log.info(
            "servicebus_settings_validated",
            pricing_tier=self.tier.value,
            idle_timeout=self.idle_timeout,
        )
        return self


@lru_cache
def get_settings() -> ServiceBusJmsSettings:
    """Get cached, validated settings instance."""
    return ServiceBusJmsSettings().validate_settings()
