"""Binary sensor entity."""

from .entity import Entity

PAYLOAD_ON = "true"
PAYLOAD_OFF = "false"


class BinarySensor(Entity):
    """Read-only on/off state such as user activity or camera in use."""

    ha_type = "binary_sensor"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = False

    @property
    def state(self) -> bool:
        return self._state

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("payload_on", PAYLOAD_ON)
        self.set_discovery_config("payload_off", PAYLOAD_OFF)

        await self.send_registration()
        await self._publish_current()

    async def set_state(self, state: bool) -> None:
        self._state = bool(state)
        await self._publish_current()

    async def _publish_current(self) -> None:
        await self.publish_state(PAYLOAD_ON if self._state else PAYLOAD_OFF)
