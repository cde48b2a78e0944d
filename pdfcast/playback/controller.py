"""Sectioned playback state for a generated podcast.

The controller owns no rendering; it keeps the cursor over the script's
sections and drives whatever audio element is plugged in through
:class:`AudioTransport`.
"""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

from pdfcast.domain.models import PodcastScript, SectionAudioMap
from pdfcast.domain.sections import (
    ResolvedSection,
    SectionIndexError,
    last_index,
    resolve_section,
    section_ids,
)

logger = logging.getLogger(__name__)


class AudioTransport(Protocol):
    """Minimal surface of a media element the controller can drive."""

    def load(self, url: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...


class NullTransport:
    """Transport that ignores every command; useful for headless state checks."""

    def load(self, url: str) -> None:
        return None

    def play(self) -> None:
        return None

    def pause(self) -> None:
        return None

    def seek(self, seconds: float) -> None:
        return None


class PlaybackController:
    """Cursor over introduction, talking points, conclusion and call to action."""

    def __init__(
        self,
        script: PodcastScript,
        audio_files: Mapping[str, str],
        transport: AudioTransport | None = None,
    ) -> None:
        missing = section_ids(script) - set(audio_files)
        if missing:
            raise SectionIndexError(f"Audio map lacks sections: {sorted(missing)}")

        self.script = script
        self.audio_files: SectionAudioMap = dict(audio_files)
        self.current_section_index = 0
        self.is_playing = False
        self.current_time = 0.0
        self.duration = 0.0
        self._transport: AudioTransport = transport or NullTransport()
        self._transport.load(self.current().audio_url)

    @property
    def last_index(self) -> int:
        return last_index(self.script)

    @property
    def at_end(self) -> bool:
        return self.current_section_index == self.last_index

    def current(self) -> ResolvedSection:
        return resolve_section(self.current_section_index, self.script, self.audio_files)

    def sections(self) -> list[ResolvedSection]:
        return [
            resolve_section(i, self.script, self.audio_files)
            for i in range(self.last_index + 1)
        ]

    def next(self) -> ResolvedSection:
        """Move forward one section; a no-op on the call to action."""

        if not self.at_end:
            self._move_to(self.current_section_index + 1)
        return self.current()

    def previous(self) -> ResolvedSection:
        """Move back one section; a no-op on the introduction."""

        if self.current_section_index > 0:
            self._move_to(self.current_section_index - 1)
        return self.current()

    def select_section(self, index: int) -> ResolvedSection:
        resolved = resolve_section(index, self.script, self.audio_files)
        self._move_to(resolved.index)
        return resolved

    def toggle_play(self) -> bool:
        if self.is_playing:
            self._transport.pause()
            self.is_playing = False
        else:
            self._transport.play()
            self.is_playing = True
        return self.is_playing

    def on_time_update(self, current_time: float, duration: float | None = None) -> None:
        self.current_time = max(0.0, float(current_time))
        if duration is not None:
            self.duration = max(0.0, float(duration))

    def seek(self, seconds: float) -> float:
        target = max(0.0, float(seconds))
        if self.duration:
            target = min(target, self.duration)
        self._transport.seek(target)
        self.current_time = target
        return target

    def on_clip_ended(self) -> ResolvedSection:
        """Advance after a clip finishes, or stop on the final section."""

        if self.at_end:
            self._transport.pause()
            self.is_playing = False
            self.current_time = self.duration
            return self.current()
        return self.next()

    def _move_to(self, index: int) -> None:
        if index == self.current_section_index:
            return
        self.current_section_index = index
        self.current_time = 0.0
        self.duration = 0.0
        section = self.current()
        logger.debug("Playback moved to %s (%s)", section.section_id, section.audio_url)
        self._transport.load(section.audio_url)
        if self.is_playing:
            self._transport.play()


__all__ = ["AudioTransport", "NullTransport", "PlaybackController"]
