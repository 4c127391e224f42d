"""Unit tests for prefetch policy fallback rules."""

import pytest
from pydantic import ValidationError

from servicebus_jms.config.prefetch import PrefetchPolicy, resolve_prefetch

SPECIFIC_FIELDS = [
    "durable_topic_prefetch",
    "queue_browser_prefetch",
    "queue_prefetch",
    "topic_prefetch",
]


class TestResolvePrefetch:
    """Tests for the resolve_prefetch helper."""

    def test_positive_value_wins(self) -> None:
        assert resolve_prefetch(5, 100) == 5

    @pytest.mark.parametrize("value", [0, -1, -500])
    def test_non_positive_value_falls_back(self, value: int) -> None:
        assert resolve_prefetch(value, 42) == 42


class TestPrefetchPolicy:
    """Tests for PrefetchPolicy effective values."""

    def test_defaults_are_zero(self) -> None:
        """
        Given: A default policy
        When: Reading effective values
        Then: Every value is 0
        """
        policy = PrefetchPolicy()
        assert policy.effective() == {
            "all": 0,
            "durable_topic_prefetch": 0,
            "queue_browser_prefetch": 0,
            "queue_prefetch": 0,
            "topic_prefetch": 0,
        }

    @pytest.mark.parametrize("field", SPECIFIC_FIELDS)
    @pytest.mark.parametrize("value", [0, -3])
    def test_unset_specific_falls_back_to_all(self, field: str, value: int) -> None:
        """
        Given: A specific prefetch of zero or below and all=250
        When: Reading its effective value
        Then: It equals all
        """
        policy = PrefetchPolicy(all=250, **{field: value})
        assert getattr(policy, f"effective_{field}") == 250

    @pytest.mark.parametrize("field", SPECIFIC_FIELDS)
    def test_positive_specific_ignores_all(self, field: str) -> None:
        """
        Given: A positive specific prefetch
        When: Reading its effective value
        Then: It keeps its own value whatever all is
        """
        for all_value in (-10, 0, 1000):
            policy = PrefetchPolicy(all=all_value, **{field: 7})
            assert getattr(policy, f"effective_{field}") == 7

    @pytest.mark.parametrize("field", SPECIFIC_FIELDS)
    def test_negative_all_clamps_fallback(self, field: str) -> None:
        """
        Given: all is negative and the specific prefetch is unset
        When: Reading the effective value
        Then: It is clamped to 0
        """
        policy = PrefetchPolicy(all=-20)
        assert getattr(policy, f"effective_{field}") == 0

    def test_all_is_clamped_on_read_not_on_store(self) -> None:
        """
        Given: all set to a negative value
        When: Reading raw and effective values
        Then: Raw keeps the input, effective is 0
        """
        policy = PrefetchPolicy(all=-5)
        assert policy.all == -5
        assert policy.effective_all == 0

    def test_assignment_updates_effective_values(self) -> None:
        policy = PrefetchPolicy()
        policy.all = 30
        policy.queue_prefetch = 2
        assert policy.effective_topic_prefetch == 30
        assert policy.effective_queue_prefetch == 2

    def test_values_are_unbounded(self) -> None:
        policy = PrefetchPolicy(all=10_000_000, topic_prefetch=2_000_000_000)
        assert policy.effective_all == 10_000_000
        assert policy.effective_topic_prefetch == 2_000_000_000

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(ValidationError):
            PrefetchPolicy(all="lots")  # type: ignore[arg-type]

    def test_query_params_use_qpid_option_names(self) -> None:
        """
        Given: A policy with all and queue prefetch set
        When: Rendering query params
        Then: Keys are Qpid JMS options carrying effective values
        """
        params = PrefetchPolicy(all=10, queue_prefetch=3).as_query_params()
        assert params == {
            "jms.prefetchPolicy.all": 10,
            "jms.prefetchPolicy.durableTopicPrefetch": 10,
            "jms.prefetchPolicy.queueBrowserPrefetch": 10,
            "jms.prefetchPolicy.queuePrefetch": 3,
            "jms.prefetchPolicy.topicPrefetch": 10,
        }
