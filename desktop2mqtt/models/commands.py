"""Command models for decoded MQTT command payloads.

Pydantic validation errors are ``ValueError`` subclasses, so entities can
treat a failed parse like any other unrecognized command.
"""

from typing import Optional, Literal, get_args
from pydantic import BaseModel, Field, field_validator

MediaAction = Literal[
    "play",
    "pause",
    "playpause",
    "stop",
    "next",
    "previous",
    "volumeset",
    "playmedia",
]

# Command sub-topics of a media player, one per action
MEDIA_ACTIONS: tuple[str, ...] = get_args(MediaAction)


class MediaPlayerCommand(BaseModel):
    """A media player command requested by Home Assistant."""

    action: MediaAction = Field(
        ...,
        description="Requested action"
    )
    volume: Optional[float] = Field(
        default=None,
        description="Requested volume for 'volumeset' (not range checked)"
    )
    media: Optional[str] = Field(
        default=None,
        description="Raw payload for 'playmedia'"
    )

    @field_validator("volume", mode="before")
    @classmethod
    def parse_volume(cls, v):
        """Parse string or numeric value."""
        if isinstance(v, str):
            return float(v)
        return v


def parse_media_command(action: str, payload: str) -> MediaPlayerCommand:
    """Build a media player command from a command topic suffix and payload.

    Args:
        action: Command sub-topic name (e.g. 'volumeset')
        payload: Raw payload string from MQTT

    Returns:
        Validated command model

    Raises:
        ValueError: If the action is unknown or the payload invalid
    """
    if action not in MEDIA_ACTIONS:
        raise ValueError(f"Unknown media player command: {action}")

    if action == "volumeset":
        return MediaPlayerCommand(action=action, volume=payload)

    if action == "playmedia":
        return MediaPlayerCommand(action=action, media=payload)

    # Transport controls carry no value
    return MediaPlayerCommand(action=action)
