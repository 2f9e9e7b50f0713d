"""Select entity for choosing one of a fixed set of options."""

from typing import Iterable

from .entity import Entity


class Select(Entity):
    """Dropdown style choice, e.g. audio output or power profile.

    The command callback receives the requested option string verbatim.
    It is not checked against the configured options.
    """

    ha_type = "select"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = ""
        self._options: list[str] = []

    @property
    def state(self) -> str:
        return self._state

    @property
    def options(self) -> list[str]:
        return list(self._options)

    def set_options(self, options: Iterable[str]) -> None:
        """Set the available options.

        Takes effect on the next registration.
        """
        self._options = list(options)
        self.set_discovery_config("options", list(self._options))

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")
        self.set_discovery_config("options", list(self._options))

        await self.send_registration()
        await self.publish_state(self._state)
        await self.subscribe_command("set")

    async def set_state(self, option: str) -> None:
        self._state = option
        await self.publish_state(self._state)
