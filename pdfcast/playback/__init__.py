"""Client-side playback state for sectioned podcasts."""

from .controller import AudioTransport, NullTransport, PlaybackController

__all__ = ["AudioTransport", "NullTransport", "PlaybackController"]
