"""Availability node: the host-wide "connected" binary sensor."""

from ..mqtt.topics import AVAILABILITY_ID, PAYLOAD_AVAILABLE, PAYLOAD_NOT_AVAILABLE
from .entity import Entity


class AvailabilityNode(Entity):
    """Connectivity sensor whose state topic is the availability topic.

    Every other entity lists ``{hostname}/connected`` as its availability
    topic. This node publishes "on" there (retained) on each connection;
    the MQTT client's last will resets it to "off" when the bridge dies.
    """

    ha_type = "binary_sensor"

    def __init__(self, client, name: str = "Connected"):
        super().__init__(client, AVAILABILITY_ID, name)

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("device_class", "connectivity")
        self.set_discovery_config("payload_on", PAYLOAD_AVAILABLE)
        self.set_discovery_config("payload_off", PAYLOAD_NOT_AVAILABLE)

        await self.send_registration()
        await self.publish_state(PAYLOAD_AVAILABLE)
