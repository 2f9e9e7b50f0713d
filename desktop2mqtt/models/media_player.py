"""Pydantic data model for media player state."""

from enum import Enum
from pydantic import BaseModel, Field


class PlaybackState(str, Enum):
    """Playback states understood by Home Assistant."""
    PLAYING = "playing"
    PAUSED = "paused"
    IDLE = "idle"
    OFF = "off"

    def __str__(self) -> str:
        return self.value


class MediaPlayerState(BaseModel):
    """Now-playing information for the active player."""

    state: PlaybackState = Field(
        default=PlaybackState.IDLE,
        description="Playback state"
    )
    title: str = Field(
        default="",
        description="Track or video title"
    )
    artist: str = Field(
        default="",
        description="Artist"
    )
    album: str = Field(
        default="",
        description="Album"
    )
    duration: int = Field(
        default=0,
        ge=0,
        description="Track length in seconds"
    )
    position: int = Field(
        default=0,
        ge=0,
        description="Playback position in seconds"
    )
    volume: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Volume level 0.0-1.0"
    )
    albumart: str = Field(
        default="",
        description="Base64 encoded cover art"
    )
    mediatype: str = Field(
        default="music",
        description="Media type (music, video, ...)"
    )
    player: str = Field(
        default="",
        description="Name of the player the state belongs to"
    )

    def to_mqtt_dict(self) -> dict[str, str]:
        """Convert to one string payload per state sub-topic."""
        return {
            "state": str(self.state),
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": str(self.duration),
            "position": str(self.position),
            "volume": str(round(self.volume, 2)),
            "albumart": self.albumart,
            "mediatype": self.mediatype,
            "player": self.player,
        }


# Sub-topics published by MediaPlayerState.to_mqtt_dict(), in order
STATE_FIELDS = (
    "state",
    "title",
    "artist",
    "album",
    "duration",
    "position",
    "volume",
    "albumart",
    "mediatype",
    "player",
)
