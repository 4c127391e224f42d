"""Prefetch policy for the Qpid JMS connection factory."""

from pydantic import BaseModel, ConfigDict, Field

# Qpid JMS URI option names, keyed by field
PREFETCH_QUERY_PARAMS: dict[str, str] = {
    "all": "jms.prefetchPolicy.all",
    "durable_topic_prefetch": "jms.prefetchPolicy.durableTopicPrefetch",
    "queue_browser_prefetch": "jms.prefetchPolicy.queueBrowserPrefetch",
    "queue_prefetch": "jms.prefetchPolicy.queuePrefetch",
    "topic_prefetch": "jms.prefetchPolicy.topicPrefetch",
}


def resolve_prefetch(value: int, default: int) -> int:
    """Return ``value`` if it is positive, otherwise ``default``."""
    return value if value > 0 else default


class PrefetchPolicy(BaseModel):
    """Per-destination prefetch limits.

    Values are stored as configured. The ``effective_*`` properties apply
    the fallback rules at read time: ``all`` is clamped to zero, and any
    specific limit that is not positive falls back to the effective ``all``.
    """

    model_config = ConfigDict(validate_assignment=True)

    all: int = Field(default=0, description="Default prefetch for every destination")
    durable_topic_prefetch: int = Field(
        default=0, description="Durable topic subscriber prefetch"
    )
    queue_browser_prefetch: int = Field(
        default=0, description="Queue browser prefetch"
    )
    queue_prefetch: int = Field(default=0, description="Queue consumer prefetch")
    topic_prefetch: int = Field(default=0, description="Topic subscriber prefetch")

    @property
    def effective_all(self) -> int:
        return max(self.all, 0)

    @property
    def effective_durable_topic_prefetch(self) -> int:
        return resolve_prefetch(self.durable_topic_prefetch, self.effective_all)

    @property
    def effective_queue_browser_prefetch(self) -> int:
        return resolve_prefetch(self.queue_browser_prefetch, self.effective_all)

    @property
    def effective_queue_prefetch(self) -> int:
        return resolve_prefetch(self.queue_prefetch, self.effective_all)

    @property
    def effective_topic_prefetch(self) -> int:
        return resolve_prefetch(self.topic_prefetch, self.effective_all)

    def effective(self) -> dict[str, int]:
        """Effective values keyed by field name."""
        return {name: getattr(self, f"effective_{name}") for name in PREFETCH_QUERY_PARAMS}

    def as_query_params(self) -> dict[str, int]:
        """Effective values keyed by Qpid JMS URI option name."""
        return {PREFETCH_QUERY_PARAMS[name]: value for name, value in self.effective().items()}
