"""Text entity: a free-form string editable from Home Assistant."""

from .entity import Entity


class Text(Entity):
    """Two-way text value.

    The command callback receives the requested text. ``max`` and
    ``pattern`` can be advertised through ``set_discovery_config()``.
    """

    ha_type = "text"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = ""

    @property
    def state(self) -> str:
        return self._state

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")

        await self.send_registration()
        await self.publish_state(self._state)
        await self.subscribe_command("set")

    async def set_state(self, text: str) -> None:
        self._state = text
        await self.publish_state(self._state)
