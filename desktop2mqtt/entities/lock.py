"""Lock entity, e.g. for the screen locker.

https://www.home-assistant.io/integrations/lock.mqtt/
"""

from .entity import Entity

PAYLOAD_LOCK = "LOCK"
PAYLOAD_UNLOCK = "UNLOCK"
STATE_LOCKED = "LOCKED"
STATE_UNLOCKED = "UNLOCKED"


class Lock(Entity):
    """Lockable feature with two-way state.

    The command callback receives ``True`` for a lock request and
    ``False`` for an unlock request.
    """

    ha_type = "lock"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._state = False

    @property
    def state(self) -> bool:
        """True when locked."""
        return self._state

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")
        self.set_discovery_config("payload_lock", PAYLOAD_LOCK)
        self.set_discovery_config("payload_unlock", PAYLOAD_UNLOCK)
        self.set_discovery_config("state_locked", STATE_LOCKED)
        self.set_discovery_config("state_unlocked", STATE_UNLOCKED)

        await self.send_registration()
        await self.set_state(self._state)
        await self.subscribe_command("set")

    async def set_state(self, locked: bool) -> None:
        self._state = bool(locked)
        await self.publish_state(STATE_LOCKED if self._state else STATE_UNLOCKED)

    def decode_command(self, topic: str, payload: str) -> bool:
        if payload == PAYLOAD_LOCK:
            return True
        if payload == PAYLOAD_UNLOCK:
            return False
        raise ValueError(f"expected {PAYLOAD_LOCK!r} or {PAYLOAD_UNLOCK!r}")
