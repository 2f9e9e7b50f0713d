"""Shared fixtures: an MQTT client backed by a mocked aiomqtt connection."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from desktop2mqtt.config import MQTTConfig
from desktop2mqtt.mqtt.client import MQTTClient

HOSTNAME = "desktop1"


class FakeBroker:
    """Drives an MQTTClient without a network connection.

    The aiomqtt client is replaced by an AsyncMock, so every publish and
    subscribe is recorded on ``self.mock``.
    """

    def __init__(self, client: MQTTClient):
        self.client = client
        self.mock = AsyncMock()

    def connect(self) -> None:
        """Simulate a successful (re)connection, running entity init()."""
        self.client._client = self.mock
        self.client._connected = True
        asyncio.run(self.client.handle_connected())

    def go_offline(self) -> None:
        self.client._client = None
        self.client._connected = False

    def run(self, coro):
        return asyncio.run(coro)

    def deliver(self, topic: str, payload: bytes) -> None:
        """Deliver an incoming message through the subscription table."""
        asyncio.run(self.client.dispatch(topic, payload))

    def reset(self) -> None:
        self.mock.reset_mock()

    @property
    def published(self) -> list[tuple]:
        """(topic, payload, qos, retain) for every publish, in order."""
        return [
            (c.args[0], c.kwargs["payload"], c.kwargs["qos"], c.kwargs["retain"])
            for c in self.mock.publish.call_args_list
        ]

    def published_to(self, topic: str) -> list:
        return [payload for t, payload, _, _ in self.published if t == topic]

    def last_json(self, topic: str) -> dict:
        return json.loads(self.published_to(topic)[-1])

    @property
    def subscriptions(self) -> list[str]:
        return [c.args[0] for c in self.mock.subscribe.call_args_list]


@pytest.fixture
def client():
    """An MQTTClient for host 'desktop1' that is not connected."""
    return MQTTClient(MQTTConfig(), HOSTNAME)


@pytest.fixture
def broker(client):
    return FakeBroker(client)


class Recorder:
    """Async command callback that records what it receives."""

    def __init__(self):
        self.calls = []

    async def __call__(self, value):
        self.calls.append(value)


@pytest.fixture
def recorder():
    return Recorder()
