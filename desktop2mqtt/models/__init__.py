"""Data models for entity state and decoded commands."""

from .media_player import (
    MediaPlayerState,
    PlaybackState,
    STATE_FIELDS,
)

from .commands import (
    MediaPlayerCommand,
    MEDIA_ACTIONS,
    parse_media_command,
)

__all__ = [
    # State models
    "MediaPlayerState",
    "PlaybackState",
    "STATE_FIELDS",
    # Command models
    "MediaPlayerCommand",
    "MEDIA_ACTIONS",
    "parse_media_command",
]
