"""Switch entity.

Follows Home Assistant's MQTT switch integration:
https://www.home-assistant.io/integrations/switch.mqtt/
"""

from .entity import Entity

PAYLOAD_ON = "true"
PAYLOAD_OFF = "false"


class Switch(Entity):
    """Toggleable feature with two-way state.

    The command callback receives ``True`` or ``False`` when Home Assistant
    asks for the switch to be turned on or off. The switch does not change
    its own state; the owner calls ``set_state()`` once the change is done.
    """

    ha_type = "switch"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = False

    @property
    def state(self) -> bool:
        return self._state

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")
        self.set_discovery_config("payload_on", PAYLOAD_ON)
        self.set_discovery_config("payload_off", PAYLOAD_OFF)

        await self.send_registration()
        await self.set_state(self._state)
        await self.subscribe_command("set")

    async def set_state(self, state: bool) -> None:
        """Store and publish the switch state."""
        self._state = bool(state)
        await self.publish_state(PAYLOAD_ON if self._state else PAYLOAD_OFF)

    def decode_command(self, topic: str, payload: str) -> bool:
        if payload == PAYLOAD_ON:
            return True
        if payload == PAYLOAD_OFF:
            return False
        raise ValueError(f"expected {PAYLOAD_ON!r} or {PAYLOAD_OFF!r}")
