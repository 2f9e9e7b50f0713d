"""Notify entity.

Home Assistant automations send messages to the desktop through the
command topic; what happens with them (desktop notification, text to
speech, ...) is up to the owner.

https://www.home-assistant.io/integrations/notify.mqtt/
"""

import logging

from .entity import Entity

logger = logging.getLogger(__name__)

NOTIFICATIONS_SUFFIX = "notifications"


class Notify(Entity):
    """Receives notification messages from Home Assistant.

    The command callback receives each message as a string.
    """

    ha_type = "notify"

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/{NOTIFICATIONS_SUFFIX}")

        await self.send_registration()
        await self.subscribe_command(NOTIFICATIONS_SUFFIX)

    def decode_command(self, topic: str, payload: str) -> str:
        logger.debug(f"{self.id}: notification received: {payload[:100]}")
        return payload
