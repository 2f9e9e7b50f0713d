"""Camera entity for still images (screenshots, webcam snapshots).

Based on Home Assistant's MQTT camera integration:
https://www.home-assistant.io/integrations/camera.mqtt/

Home Assistant's camera has no command topic. One is advertised and
subscribed anyway so automations can publish to it to ask the owner
for a fresh image.
"""

import base64
import logging
from datetime import datetime, timezone
from typing import Union

from .entity import Entity

logger = logging.getLogger(__name__)

COMMAND_SUFFIX = "command"


class Camera(Entity):
    """Publishes base64 encoded snapshots. Not a live stream."""

    ha_type = "camera"

    async def init(self) -> None:
        self.set_discovery_config("topic", self.base_topic)
        self.set_discovery_config("image_encoding", "b64")
        self.set_discovery_config("command_topic", f"{self.base_topic}/{COMMAND_SUFFIX}")

        await self.send_registration()
        await self.subscribe_command(COMMAND_SUFFIX)

    def decode_command(self, topic: str, payload: str) -> str:
        logger.debug(f"{self.name}: camera command received: {payload}")
        return payload

    async def publish_image(self, image_b64: Union[bytes, str]) -> bool:
        """Publish an already base64 encoded image.

        Also publishes ``timestamp`` and ``size_bytes`` attributes.

        Args:
            image_b64: Base64 encoded JPEG or PNG data

        Returns:
            True if the image was published
        """
        if not await self._publish(self.base_topic, image_b64):
            return False

        await self.set_attributes({
            "timestamp": datetime.now(timezone.utc),
            "size_bytes": len(image_b64),
        })
        return True

    async def publish_image_bytes(self, image: bytes) -> bool:
        """Encode raw image bytes and publish them."""
        return await self.publish_image(base64.b64encode(image))
