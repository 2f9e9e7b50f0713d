"""desktop2mqtt: expose a Linux desktop to Home Assistant over MQTT."""

__version__ = "0.1.0"
