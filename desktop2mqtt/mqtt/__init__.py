"""MQTT client and topic naming."""

from .client import MQTTClient
from . import topics

__all__ = ["MQTTClient", "topics"]
