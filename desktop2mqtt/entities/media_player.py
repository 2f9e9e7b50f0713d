"""Media player entity.

Uses the discovery schema of the community MQTT media player integration
(https://github.com/bkbilly/mqtt_media_player): one state sub-topic per
now-playing field and one command sub-topic per action.
"""

import logging
from typing import Any, Iterable, Mapping, Union

from ..models import (
    MEDIA_ACTIONS,
    STATE_FIELDS,
    MediaPlayerCommand,
    MediaPlayerState,
    parse_media_command,
)
from .entity import Entity

logger = logging.getLogger(__name__)


class MediaPlayer(Entity):
    """Exposes the desktop's active media player.

    The command callback receives a ``MediaPlayerCommand`` for each
    accepted action. ``volumeset`` payloads that are not numbers are
    dropped.
    """

    ha_type = "media_player"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = MediaPlayerState()
        self._players: list[str] = []

    @property
    def state(self) -> MediaPlayerState:
        return self._state

    @property
    def available_players(self) -> list[str]:
        return list(self._players)

    def state_topic(self, field: str) -> str:
        return f"{self.base_topic}/{field}"

    async def init(self) -> None:
        for field in STATE_FIELDS:
            self.set_discovery_config(f"state_{field}_topic", self.state_topic(field))
        for action in MEDIA_ACTIONS:
            self.set_discovery_config(f"command_{action}_topic", f"{self.base_topic}/{action}")

        await self.send_registration()
        await self._publish_current()

        for action in MEDIA_ACTIONS:
            await self.subscribe_command(action)

    async def set_state(self, info: Union[MediaPlayerState, Mapping[str, Any]]) -> None:
        """Update now-playing information and publish it.

        Args:
            info: A full state, or a mapping of the fields that changed

        Raises:
            pydantic.ValidationError: If a field value is invalid
        """
        if isinstance(info, MediaPlayerState):
            self._state = info
        else:
            self._state = MediaPlayerState.model_validate(
                {**self._state.model_dump(), **dict(info)}
            )
        await self._publish_current()

    async def set_available_players(self, players: Iterable[str]) -> None:
        """Publish the known players as the ``players`` attribute."""
        self._players = list(players)
        await self.set_attributes({**self.attributes, "players": list(self._players)})

    async def _publish_current(self) -> None:
        for field, payload in self._state.to_mqtt_dict().items():
            if not await self._publish(self.state_topic(field), payload):
                return

    def decode_command(self, topic: str, payload: str) -> MediaPlayerCommand:
        action = topic.rsplit("/", 1)[-1]
        command = parse_media_command(action, payload)
        logger.debug(f"{self.id}: media command {command.action}")
        return command
