"""Home Assistant entity types.

Import entities from here rather than from the individual modules.
"""

from .entity import Entity, CommandCallback
from .availability import AvailabilityNode
from .binary_sensor import BinarySensor
from .button import Button
from .camera import Camera
from .event import Event
from .lock import Lock
from .media_player import MediaPlayer
from .notify import Notify
from .number import Number
from .select import Select
from .sensor import Sensor
from .switch import Switch
from .text import Text

__all__ = [
    "Entity",
    "CommandCallback",
    "AvailabilityNode",
    "BinarySensor",
    "Button",
    "Camera",
    "Event",
    "Lock",
    "MediaPlayer",
    "Notify",
    "Number",
    "Select",
    "Sensor",
    "Switch",
    "Text",
]
