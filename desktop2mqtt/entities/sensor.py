"""Sensor entity.

Follows Home Assistant's MQTT sensor integration:
https://www.home-assistant.io/integrations/sensor.mqtt/
"""

from typing import Any

from .entity import Entity


class Sensor(Entity):
    """Generic sensor with a string state.

    Numeric sensors should set ``unit_of_measurement`` (and optionally
    ``device_class``/``state_class``) with ``set_discovery_config()``
    before the first connection.
    """

    ha_type = "sensor"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = ""

    @property
    def state(self) -> str:
        return self._state

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)

        await self.send_registration()
        await self.publish_state(self._state)

    async def set_state(self, state: Any) -> None:
        """Store and publish the state.

        Args:
            state: New value; published as its string form
        """
        self._state = "" if state is None else str(state)
        await self.publish_state(self._state)
