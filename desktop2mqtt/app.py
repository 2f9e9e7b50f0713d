"""Main application orchestrator for desktop2mqtt."""

import asyncio
import logging
import signal
from datetime import datetime
from typing import Optional, Union

from .config import AppConfig, get_config
from .entities.availability import AvailabilityNode
from .mqtt.client import MQTTClient
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


class Desktop2MQTT:
    """Main application class.

    Owns the MQTT client and the availability node. Integrations create
    their entities against ``self.mqtt``; the client initializes every
    registered entity on each (re)connection.
    """

    def __init__(self, config: Union[AppConfig, str, None] = None):
        """Initialize the application.

        Args:
            config: AppConfig instance, path to YAML config file, or None for env/defaults
        """
        if isinstance(config, AppConfig):
            self.config = config
        elif isinstance(config, str):
            self.config = get_config(config)
        else:
            self.config = get_config()

        self.running = False
        self._shutdown_event = asyncio.Event()

        self.mqtt = MQTTClient(self.config.mqtt, self.config.device.hostname)
        self.availability = AvailabilityNode(self.mqtt)

        self._start_time: Optional[datetime] = None

    async def start(self) -> None:
        """Start the application.

        Runs the MQTT connection loop until a shutdown is requested or the
        loop dies, then stops cleanly.
        """
        setup_logging(self.config.logging)

        logger.info(f"Starting desktop2mqtt on host '{self.mqtt.hostname}'")
        self._start_time = datetime.now()
        self.running = True

        self._setup_signal_handlers()

        runner = asyncio.create_task(self.mqtt.run(), name="mqtt-connection")
        runner.add_done_callback(lambda _: self._shutdown_event.set())
        try:
            await self._shutdown_event.wait()
        except asyncio.CancelledError:
            logger.info("Application cancelled")
        finally:
            runner.cancel()
            try:
                await runner
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.exception("MQTT connection loop failed")
            await self.stop()

    def request_shutdown(self) -> None:
        self._shutdown_event.set()

    async def stop(self) -> None:
        """Stop the application gracefully."""
        logger.info("Stopping desktop2mqtt")
        self.running = False
        self._shutdown_event.set()

        # Publishes "off" to the availability topic before disconnecting
        await self.mqtt.disconnect()

        stats = self.stats
        logger.info(
            f"Statistics: connections={stats['connections']}, "
            f"entities={stats['entities']}, uptime={stats['uptime']}"
        )
        logger.info("desktop2mqtt stopped")

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def signal_handler(sig):
            logger.info(f"Received signal {sig.name}, initiating shutdown")
            self._shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

    @property
    def stats(self) -> dict:
        """Get application statistics."""
        return {
            "connections": self.mqtt.connection_count,
            "entities": len(self.mqtt.entities),
            "start_time": self._start_time,
            "uptime": (
                str(datetime.now() - self._start_time)
                if self._start_time
                else None
            ),
        }


async def run_app(config: Union[AppConfig, str, None] = None) -> None:
    """Run the application.

    Args:
        config: AppConfig instance, path to config file, or None for env/defaults
    """
    app = Desktop2MQTT(config)
    await app.start()
