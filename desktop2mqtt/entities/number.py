"""Number entity for bounded numeric input (volume, brightness, ...)."""

from .entity import Entity


class Number(Entity):
    """Integer value with a range, step and unit.

    The command callback receives the requested value as an ``int``. The
    range is advertised to Home Assistant but not enforced here; the owner
    decides what to do with out-of-range requests.
    """

    ha_type = "number"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._value = 0
        self._min = 0
        self._max = 100
        self._step = 1
        self._unit = "%"

    @property
    def value(self) -> int:
        return self._value

    @property
    def range(self) -> tuple[int, int, int, str]:
        """(min, max, step, unit)"""
        return self._min, self._max, self._step, self._unit

    def set_range(self, minimum: int, maximum: int, step: int = 1, unit: str = "%") -> None:
        """Configure the advertised range.

        Call before the first connection, or call ``send_registration()``
        afterwards to republish.

        Args:
            minimum: Lowest value
            maximum: Highest value
            step: Increment
            unit: Unit of measurement
        """
        self._min = minimum
        self._max = maximum
        self._step = step
        self._unit = unit

    async def init(self) -> None:
        self.set_discovery_config("state_topic", self.base_topic)
        self.set_discovery_config("command_topic", f"{self.base_topic}/set")
        self.set_discovery_config("min", self._min)
        self.set_discovery_config("max", self._max)
        self.set_discovery_config("step", self._step)
        self.set_discovery_config("unit_of_measurement", self._unit)

        await self.send_registration()
        await self.set_value(self._value)
        await self.subscribe_command("set")

    async def set_value(self, value: int) -> None:
        self._value = int(value)
        await self.publish_state(str(self._value))

    def decode_command(self, topic: str, payload: str) -> int:
        # Home Assistant may send "42" or "42.0"; "42.5" is not an integer
        try:
            value = float(payload)
        except ValueError as e:
            raise ValueError(f"not a number: {e}") from e

        if not value.is_integer():
            raise ValueError(f"not an integer: {payload}")
        return int(value)
