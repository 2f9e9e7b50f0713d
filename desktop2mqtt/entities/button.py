"""Button entity."""

from .entity import Entity


class Button(Entity):
    """Momentary action triggered from Home Assistant.

    Buttons have no state. Any message on the command topic is a press;
    the command callback receives the raw payload, which can be ignored.
    """

    ha_type = "button"

    async def init(self) -> None:
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")

        await self.send_registration()
        await self.subscribe_command("set")

    def decode_payload(self, payload: bytes) -> str:
        # Receipt is the press; undecodable bytes must not drop it
        return payload.decode("utf-8", errors="replace")
