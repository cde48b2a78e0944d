"""Section identifiers and index resolution shared by synthesis and playback.

Playback index convention for a script with ``N`` talking points::

    0          introduction
    1 .. N     talking_point_0 .. talking_point_{N-1}
    N + 1      conclusion
    N + 2      call_to_action

Audio is synthesised in a different order (introduction, conclusion,
call_to_action, then talking points), but every caller derives identifiers
from the helpers below so file names and cursor lookups always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .models import PodcastScript

INTRODUCTION = "introduction"
CONCLUSION = "conclusion"
CALL_TO_ACTION = "call_to_action"
TALKING_POINT_PREFIX = "talking_point_"

_FIXED_TITLES = {
    INTRODUCTION: "Introduction",
    CONCLUSION: "Conclusion",
    CALL_TO_ACTION: "Call to Action",
}


class SectionIndexError(IndexError):
    """Raised when a playback index does not map to a section."""


@dataclass(frozen=True)
class ResolvedSection:
    """Everything the player needs to render and play one section."""

    index: int
    section_id: str
    title: str
    text: str
    audio_url: str


def talking_point_id(index: int) -> str:
    return f"{TALKING_POINT_PREFIX}{index}"


def synthesis_order(script: PodcastScript) -> list[tuple[str, str]]:
    """Return ``(section_id, text)`` pairs in generation order."""

    sections = [
        (INTRODUCTION, script.introduction),
        (CONCLUSION, script.conclusion),
        (CALL_TO_ACTION, script.call_to_action),
    ]
    sections.extend(
        (talking_point_id(i), point.content)
        for i, point in enumerate(script.main_talking_points)
    )
    return sections


def playback_order(script: PodcastScript) -> list[str]:
    """Return section identifiers in listening order."""

    return [
        INTRODUCTION,
        *(talking_point_id(i) for i in range(len(script.main_talking_points))),
        CONCLUSION,
        CALL_TO_ACTION,
    ]


def section_ids(script: PodcastScript) -> set[str]:
    """The exact key set a section audio map must have for ``script``."""

    return set(playback_order(script))


def last_index(script: PodcastScript) -> int:
    """Index of the terminal (call-to-action) section."""

    return len(script.main_talking_points) + 2


def section_id_at(index: int, script: PodcastScript) -> str:
    if isinstance(index, bool) or not isinstance(index, int):
        raise SectionIndexError(f"Section index must be an integer, got {index!r}")
    if index < 0 or index > last_index(script):
        raise SectionIndexError(
            f"Section index {index} outside [0, {last_index(script)}]"
        )
    return playback_order(script)[index]


def section_content(section_id: str, script: PodcastScript) -> tuple[str, str]:
    """Return ``(title, text)`` for a section identifier."""

    if section_id in _FIXED_TITLES:
        return _FIXED_TITLES[section_id], getattr(script, section_id)
    if section_id.startswith(TALKING_POINT_PREFIX):
        suffix = section_id[len(TALKING_POINT_PREFIX):]
        if suffix.isdigit() and int(suffix) < len(script.main_talking_points):
            point = script.main_talking_points[int(suffix)]
            return point.title, point.content
    raise SectionIndexError(f"Unknown section '{section_id}'")


def resolve_section(
    index: int,
    script: PodcastScript,
    audio_files: Mapping[str, str],
) -> ResolvedSection:
    """Resolve a playback index into title, text and audio URL."""

    section_id = section_id_at(index, script)
    title, text = section_content(section_id, script)
    audio_url = audio_files.get(section_id)
    if audio_url is None:
        raise SectionIndexError(f"No audio recorded for section '{section_id}'")
    return ResolvedSection(
        index=index,
        section_id=section_id,
        title=title,
        text=text,
        audio_url=audio_url,
    )


__all__ = [
    "CALL_TO_ACTION",
    "CONCLUSION",
    "INTRODUCTION",
    "ResolvedSection",
    "SectionIndexError",
    "last_index",
    "playback_order",
    "resolve_section",
    "section_content",
    "section_id_at",
    "section_ids",
    "synthesis_order",
    "talking_point_id",
]
