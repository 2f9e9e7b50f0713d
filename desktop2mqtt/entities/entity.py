"""Base class for every entity exposed to Home Assistant.

An entity owns its topics, its discovery document and its attributes.
The MQTT client runs ``init()`` on every successful broker connection, so
discovery is republished after each reconnect rather than assumed to
survive on the broker.
"""

import logging
from typing import Any, Optional, Callable, Awaitable, Mapping

from ..codec import convert_attributes, to_compact_json
from ..mqtt import topics
from ..mqtt.client import MQTTClient

logger = logging.getLogger(__name__)

# Receives the decoded value of each accepted command
CommandCallback = Callable[[Any], Awaitable[None]]


class Entity:
    """A single device or feature exposed over MQTT discovery.

    Subclasses set ``ha_type`` and override ``init()`` to fill in their
    discovery overlay, register, publish their state and subscribe to
    their command topic. Entities never act on a command themselves: a
    decoded command is handed to the command callback and the owning
    integration decides what to do with it.
    """

    #: Home Assistant component type. Empty means "do not register".
    ha_type: str = ""

    def __init__(
        self,
        client: MQTTClient,
        entity_id: str,
        name: str = "",
        icon: Optional[str] = None,
    ):
        """Create the entity and register it with the MQTT client.

        Args:
            client: MQTT client; the entity is initialized on each of its connections
            entity_id: Identifier, unique per host
            name: Display name (defaults to the id)
            icon: Optional icon, e.g. 'mdi:lock'
        """
        if not entity_id:
            raise ValueError("Entity id must not be empty")

        self.client = client
        self.id = entity_id
        self.name = name or entity_id
        self._icon = icon
        self._discovery_config: dict[str, Any] = {}
        self._attributes: dict[str, Any] = {}
        self._command_callback: Optional[CommandCallback] = None

        client.register_entity(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"

    @property
    def hostname(self) -> str:
        return self.client.hostname

    @property
    def base_topic(self) -> str:
        """Topic the entity publishes its state to."""
        return topics.base_topic(self.hostname, self.id)

    @property
    def attributes_topic(self) -> str:
        return topics.attributes_topic(self.base_topic)

    @property
    def discovery_topic(self) -> str:
        return topics.discovery_topic(
            self.client.discovery_prefix, self.ha_type, self.hostname, self.id
        )

    @property
    def is_availability_node(self) -> bool:
        return self.id == topics.AVAILABILITY_ID

    @property
    def icon(self) -> Optional[str]:
        return self._icon

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    @property
    def discovery_config(self) -> dict[str, Any]:
        """Copy of the discovery overlay."""
        return dict(self._discovery_config)

    def set_discovery_config(self, key: str, value: Any) -> None:
        """Set a discovery overlay field.

        Takes effect on the next registration; nothing is published here.
        """
        self._discovery_config[key] = value

    def set_command_callback(self, callback: CommandCallback) -> None:
        """Set the callback that receives decoded commands.

        Args:
            callback: Async function called with the decoded command value
        """
        self._command_callback = callback

    async def init(self) -> None:
        """Configure discovery and publish initial state.

        Called by the MQTT client after every successful connection.
        The base entity has nothing to publish.
        """

    def discovery_document(self) -> dict[str, Any]:
        """Build the discovery document without publishing it.

        Returns:
            Discovery config dictionary
        """
        config = dict(self._discovery_config)
        config["name"] = self.name

        # The availability node cannot depend on availability
        if not self.is_availability_node:
            config["availability_topic"] = topics.availability_topic(self.hostname)
            config["payload_available"] = topics.PAYLOAD_AVAILABLE
            config["payload_not_available"] = topics.PAYLOAD_NOT_AVAILABLE
            if self._icon:
                config["icon"] = self._icon

        # Every MQTT entity type accepts an attributes topic
        config["json_attributes_topic"] = self.attributes_topic

        if "device" not in config:
            config["device"] = {"identifiers": topics.device_identifier(self.hostname)}

        config["unique_id"] = topics.unique_id(self.hostname, self.id)
        return config

    async def send_registration(self) -> None:
        """Publish the discovery document.

        A no-op while ``ha_type`` is unset or the client is disconnected.
        Safe to call repeatedly: the same overlay always produces the same
        payload. Also pings the availability topic, except for the
        availability node itself.
        """
        if not self.ha_type:
            return

        if not self.client.connected:
            logger.debug(f"Not connected, skipping registration of {self.id}")
            return

        await self.client.publish(
            self.discovery_topic,
            to_compact_json(self.discovery_document()),
            retain=True,
            qos=0,
        )
        logger.debug(f"Registered {self.ha_type} '{self.id}'")

        if not self.is_availability_node:
            await self.client.publish(
                topics.availability_topic(self.hostname),
                topics.PAYLOAD_AVAILABLE,
                retain=False,
                qos=0,
            )

    async def set_icon(self, icon: Optional[str]) -> None:
        """Change the icon and re-register immediately."""
        self._icon = icon
        await self.send_registration()

    async def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Replace all attributes and publish them.

        Dropped silently while disconnected; reconnecting does not publish
        them again, only the next call does.

        Args:
            attributes: Attribute name -> value
        """
        self._attributes = dict(attributes)
        await self.publish_attributes()

    async def publish_attributes(self) -> None:
        """Publish the current attributes as compact JSON."""
        await self._publish(
            self.attributes_topic,
            to_compact_json(convert_attributes(self._attributes)),
        )

    async def _publish(self, topic: str, payload: Any, retain: bool = True) -> bool:
        """Publish at QoS 0 if connected.

        Returns:
            True if the message was handed to the client
        """
        if not self.client.connected:
            return False

        await self.client.publish(topic, payload, retain=retain, qos=0)
        return True

    async def publish_state(self, payload: Any) -> bool:
        """Publish a state payload to the base topic (retained)."""
        return await self._publish(self.base_topic, payload)

    async def subscribe_command(self, suffix: str = "set") -> str:
        """Subscribe to a command topic below the base topic.

        Args:
            suffix: Sub-topic name

        Returns:
            The full command topic
        """
        topic = topics.command_topic(self.base_topic, suffix)
        if self.client.connected:
            await self.client.subscribe(topic, self.handle_command)
        return topic

    def decode_command(self, topic: str, payload: str) -> Any:
        """Decode a command payload.

        The default accepts any payload verbatim.

        Raises:
            ValueError: If the payload is not a valid command
        """
        return payload

    def decode_payload(self, payload: bytes) -> str:
        """Turn the raw payload into text for ``decode_command()``.

        Raises:
            UnicodeDecodeError: If the payload is not valid UTF-8
        """
        return payload.decode("utf-8")

    async def handle_command(self, topic: str, payload: bytes) -> None:
        """Decode an incoming command and pass it to the command callback.

        Unrecognized payloads are logged and dropped.
        """
        try:
            text = self.decode_payload(payload)
        except UnicodeDecodeError:
            logger.warning(f"{self.id}: ignoring non UTF-8 command on {topic}")
            return

        try:
            command = self.decode_command(topic, text)
        except ValueError as e:
            logger.warning(f"{self.id}: unknown command {text!r} on {topic}: {e}")
            return

        if self._command_callback is None:
            logger.debug(f"{self.id}: no command callback, dropping {command!r}")
            return

        await self._command_callback(command)
