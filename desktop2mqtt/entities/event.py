"""Event entity used to trigger Home Assistant automations.

https://www.home-assistant.io/integrations/event.mqtt/
"""

import logging
from typing import Iterable

from .entity import Entity

logger = logging.getLogger(__name__)

DEFAULT_EVENT_TYPE = "pressed"


class Event(Entity):
    """One-way trigger from the desktop to Home Assistant.

    Typically bound to a global keyboard shortcut. Events are not
    retained: a trigger that happens while disconnected is lost.
    """

    ha_type = "event"

    def __init__(self, *args, event_types: Iterable[str] = (DEFAULT_EVENT_TYPE,), **kwargs):
        super().__init__(*args, **kwargs)
        self._event_types = list(event_types)

    @property
    def event_types(self) -> list[str]:
        return list(self._event_types)

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("event_types", list(self._event_types))

        await self.send_registration()

    async def trigger(self, event_type: str = DEFAULT_EVENT_TYPE) -> bool:
        """Fire the event.

        Args:
            event_type: One of the advertised event types

        Returns:
            True if the event was published
        """
        if event_type not in self._event_types:
            logger.warning(f"{self.id}: event type {event_type!r} is not advertised")

        return await self._publish(self.base_topic, {"event_type": event_type}, retain=False)
