"""JMS listener container options."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeliveryMode(int, Enum):
    """JMS delivery mode constants."""

    NON_PERSISTENT = 1
    PERSISTENT = 2


class ContainerKind(str, Enum):
    """Listener container factory flavour."""

    QUEUE = "queue"
    TOPIC = "topic"


class QosSettings(BaseModel):
    """Quality of service applied when sending a reply."""

    model_config = ConfigDict(validate_assignment=True)

    delivery_mode: DeliveryMode = Field(default=DeliveryMode.PERSISTENT)
    priority: int = Field(default=4, ge=0, le=9, description="JMS priority, 0 lowest")
    time_to_live: int = Field(default=0, ge=0, description="Reply lifetime in ms, 0 never expires")


class ListenerOptions(BaseModel):
    """Options for the listener container factories.

    ``reply_pub_sub_domain``, ``subscription_durable`` and
    ``subscription_shared`` only apply to the topic container factory.
    """

    model_config = ConfigDict(validate_assignment=True)

    reply_pub_sub_domain: bool | None = Field(
        default=None, description="Whether the reply destination is a topic"
    )
    reply_qos_settings: QosSettings | None = Field(
        default=None, description="QoS used when sending a reply"
    )
    subscription_durable: bool = Field(default=True, description="Make the subscription durable")
    subscription_shared: bool | None = Field(
        default=None, description="Make the subscription shared"
    )
    phase: int | None = Field(
        default=None, description="Phase in which the container is started and stopped"
    )

    def container_options(
        self, kind: ContainerKind, client_id: str | None = None
    ) -> dict[str, Any]:
        """Collect the options a container factory of ``kind`` applies.

        Args:
            kind: Queue or topic container factory.
            client_id: JMS client id, used by the topic factory only.

        Returns:
            Option name to value. Unset options are left out.
        """
        options: dict[str, Any] = {}
        if self.reply_qos_settings is not None:
            options["reply_qos_settings"] = self.reply_qos_settings
        if self.phase is not None:
            options["phase"] = self.phase

        if ContainerKind(kind) is ContainerKind.TOPIC:
            options["pub_sub_domain"] = True
            options["subscription_durable"] = self.subscription_durable
            if self.reply_pub_sub_domain is not None:
                options["reply_pub_sub_domain"] = self.reply_pub_sub_domain
            if self.subscription_shared is not None:
                options["subscription_shared"] = self.subscription_shared
            if client_id:
                options["client_id"] = client_id

        return options
