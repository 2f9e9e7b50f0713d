"""Async MQTT client wrapper."""

import asyncio
import logging
from typing import TYPE_CHECKING, Optional, Any, Callable, Awaitable

import aiomqtt

from ..codec import to_compact_json
from ..config import MQTTConfig
from .topics import PAYLOAD_NOT_AVAILABLE, availability_topic

if TYPE_CHECKING:
    from ..entities.entity import Entity

logger = logging.getLogger(__name__)

# Called with (topic, payload) for each message on a subscribed topic
MessageHandler = Callable[[str, bytes], Awaitable[None]]

# Called after every successful broker connection
ConnectCallback = Callable[[], Awaitable[None]]


class MQTTClient:
    """Async MQTT client for Home Assistant integration.

    Wraps aiomqtt with connection management, reconnection, an explicit
    topic -> handler subscription table and a registry of the entities
    that must be (re)initialized on every connection.
    """

    def __init__(self, config: MQTTConfig, hostname: str):
        """Initialize the MQTT client.

        Args:
            config: MQTT configuration
            hostname: Lower-cased host name all topics are derived from
        """
        self.config = config
        self._hostname = hostname
        self._client: Optional[aiomqtt.Client] = None
        self._connected = False
        self._reconnect_interval = config.reconnect_interval
        self._handlers: dict[str, MessageHandler] = {}
        self._connect_callbacks: list[ConnectCallback] = []
        self._entities: dict[str, "Entity"] = {}
        self.connection_count = 0

    @property
    def connected(self) -> bool:
        """Check if connected to MQTT broker."""
        return self._connected

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def discovery_prefix(self) -> str:
        return self.config.discovery_prefix

    @property
    def availability_topic(self) -> str:
        """Get the availability topic."""
        return availability_topic(self._hostname)

    @property
    def entities(self) -> list["Entity"]:
        """Entities registered with this client, in registration order."""
        return list(self._entities.values())

    def add_connect_callback(self, callback: ConnectCallback) -> None:
        """Register a coroutine to run after every successful connection.

        Args:
            callback: Async function taking no arguments
        """
        self._connect_callbacks.append(callback)

    def register_entity(self, entity: "Entity") -> None:
        """Register an entity so it is initialized on every connection.

        Duplicate ids are not rejected: both entities publish on the same
        topics and the last registration wins in Home Assistant.

        Args:
            entity: Entity to register
        """
        if entity.id in self._entities:
            logger.warning(
                f"Duplicate entity id '{entity.id}': it shares topics with an "
                "already registered entity"
            )
        self._entities[entity.id] = entity
        self.add_connect_callback(entity.init)

    async def connect(self) -> None:
        """Connect to the MQTT broker and run the connect callbacks.

        Raises:
            MqttError: If connection fails
        """
        logger.info(f"Connecting to MQTT broker at {self.config.host}:{self.config.port}")

        client = aiomqtt.Client(
            hostname=self.config.host,
            port=self.config.port,
            username=self.config.username,
            password=self.config.password,
            identifier=self.config.client_id,
            keepalive=self.config.keepalive,
            tls_params=aiomqtt.TLSParameters() if self.config.use_tls else None,
            # Last Will and Testament for availability
            will=aiomqtt.Will(
                topic=self.availability_topic,
                payload=PAYLOAD_NOT_AVAILABLE,
                qos=0,
                retain=True,
            ),
        )

        try:
            await client.__aenter__()
        except aiomqtt.MqttError as e:
            logger.error(f"Failed to connect to MQTT broker: {e}")
            raise

        self._client = client
        self._connected = True
        self.connection_count += 1
        logger.info("Connected to MQTT broker")

        await self.handle_connected()

    async def handle_connected(self) -> None:
        """Run every connect callback in registration order.

        A failing callback is logged and does not stop the others.
        """
        for callback in list(self._connect_callbacks):
            try:
                await callback()
            except Exception:
                logger.exception(f"Error in connect callback {callback!r}")

    async def disconnect(self) -> None:
        """Disconnect from the MQTT broker.

        Publishes the offline availability payload first so Home Assistant
        does not have to wait for the last will.
        """
        if not self._client:
            return

        if self._connected:
            try:
                await self.publish(self.availability_topic, PAYLOAD_NOT_AVAILABLE, retain=True)
            except aiomqtt.MqttError as e:
                logger.warning(f"Could not publish offline status: {e}")

        await self._close()
        logger.info("Disconnected from MQTT broker")

    async def _close(self) -> None:
        """Drop the underlying connection and mark the client disconnected."""
        client = self._client
        self._client = None
        self._connected = False

        if client is not None:
            try:
                await client.__aexit__(None, None, None)
            except aiomqtt.MqttError as e:
                logger.debug(f"Error closing MQTT connection: {e}")

    async def run(self) -> None:
        """Connect and process messages forever, reconnecting on failure.

        Every successful (re)connection runs the connect callbacks, so all
        registered entities publish their discovery documents again.
        Returns only when cancelled.
        """
        while True:
            try:
                await self.connect()
                await self.message_loop()
            except aiomqtt.MqttError as e:
                logger.error(f"MQTT connection lost: {e}")

            # Cancellation skips this so disconnect() can still say goodbye
            await self._close()
            logger.info(f"Reconnecting in {self._reconnect_interval:.0f}s")
            await asyncio.sleep(self._reconnect_interval)

    async def publish(
        self,
        topic: str,
        payload: Any,
        retain: bool = False,
        qos: Optional[int] = None,
    ) -> None:
        """Publish a message to a topic.

        Args:
            topic: MQTT topic
            payload: Message payload (compact JSON if dict/list)
            retain: Whether to retain the message
            qos: QoS level (default from config)

        Raises:
            ConnectionError: If not connected
        """
        if not self._client or not self._connected:
            raise ConnectionError("Not connected to MQTT broker")

        if qos is None:
            qos = self.config.qos

        if isinstance(payload, (dict, list)):
            payload = to_compact_json(payload)
        elif isinstance(payload, bool):
            payload = "true" if payload else "false"
        elif payload is None:
            payload = ""
        elif not isinstance(payload, (str, bytes, bytearray)):
            payload = str(payload)

        await self._client.publish(
            topic,
            payload=payload,
            qos=qos,
            retain=retain,
        )
        logger.debug(f"Published to {topic}: {payload[:100]!r}")

    async def subscribe(self, topic: str, handler: MessageHandler) -> None:
        """Subscribe to a topic and route its messages to a handler.

        Replaces any handler previously registered for the same topic.

        Args:
            topic: MQTT topic or wildcard pattern
            handler: Async function called with (topic, payload)

        Raises:
            ConnectionError: If not connected
        """
        if not self._client or not self._connected:
            raise ConnectionError("Not connected to MQTT broker")

        self._handlers[topic] = handler
        await self._client.subscribe(topic, qos=self.config.qos)
        logger.debug(f"Subscribed to {topic}")

    def handler_for(self, topic: str) -> Optional[MessageHandler]:
        """Find the handler for a concrete topic.

        Exact subscriptions take precedence over wildcard patterns.
        """
        handler = self._handlers.get(topic)
        if handler is not None:
            return handler

        concrete = aiomqtt.Topic(topic)
        for pattern, candidate in self._handlers.items():
            if concrete.matches(pattern):
                return candidate
        return None

    async def dispatch(self, topic: str, payload: bytes) -> None:
        """Route one incoming message to its handler.

        Handler errors are logged and never propagate to the message loop.
        """
        handler = self.handler_for(topic)
        if handler is None:
            logger.debug(f"No handler for message on {topic}")
            return

        try:
            await handler(topic, payload)
        except Exception:
            logger.exception(f"Error processing message on {topic}")

    async def message_loop(self) -> None:
        """Run the message processing loop.

        Continuously receives messages and dispatches each one through the
        subscription table. Returns only when disconnected or cancelled.
        """
        if not self._client or not self._connected:
            raise ConnectionError("Not connected to MQTT broker")

        logger.debug("Starting MQTT message loop")

        async for message in self._client.messages:
            topic = str(message.topic)

            if isinstance(message.payload, (bytes, bytearray)):
                payload = bytes(message.payload)
            elif message.payload is None:
                payload = b""
            else:
                payload = str(message.payload).encode()

            logger.debug(f"Received message on {topic}: {payload[:100]!r}")
            await self.dispatch(topic, payload)
