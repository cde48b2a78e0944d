"""Playback controller navigation, transport control and clip transitions."""

from __future__ import annotations

import pytest

from pdfcast.domain.sections import SectionIndexError
from pdfcast.playback import PlaybackController


class RecordingTransport:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def load(self, url):
        self.events.append(("load", url))

    def play(self):
        self.events.append(("play",))

    def pause(self):
        self.events.append(("pause",))

    def seek(self, seconds):
        self.events.append(("seek", seconds))


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def controller(script, audio_files, transport) -> PlaybackController:
    return PlaybackController(script, audio_files, transport)


def test_starts_on_introduction_paused(controller, transport):
    assert controller.current_section_index == 0
    assert controller.is_playing is False
    assert controller.current().title == "Introduction"
    assert transport.events == [("load", "/audio/run/introduction.mp3")]


def test_previous_at_start_is_a_no_op(controller, transport):
    section = controller.previous()

    assert section.index == 0
    assert transport.events == [("load", "/audio/run/introduction.mp3")]


def test_next_walks_sections_and_stops_at_call_to_action(controller):
    titles = [controller.current().title]
    for _ in range(8):
        titles.append(controller.next().title)

    assert titles[:6] == [
        "Introduction",
        "Point 0",
        "Point 1",
        "Point 2",
        "Conclusion",
        "Call to Action",
    ]
    assert set(titles[6:]) == {"Call to Action"}
    assert controller.current_section_index == controller.last_index == 5


def test_select_section_loads_clip_and_keeps_playing(controller, transport):
    controller.toggle_play()

    section = controller.select_section(4)

    assert section.section_id == "conclusion"
    assert transport.events[-2:] == [("load", "/audio/run/conclusion.mp3"), ("play",)]
    assert controller.is_playing is True


@pytest.mark.parametrize("index", [-1, 6])
def test_select_section_out_of_range_leaves_state_unchanged(controller, index):
    controller.select_section(2)

    with pytest.raises(SectionIndexError):
        controller.select_section(index)

    assert controller.current_section_index == 2


def test_toggle_play_alternates(controller, transport):
    assert controller.toggle_play() is True
    assert controller.toggle_play() is False
    assert transport.events[-2:] == [("play",), ("pause",)]


def test_clip_end_advances_then_stops_on_last_section(controller, transport):
    controller.toggle_play()
    controller.select_section(4)

    advanced = controller.on_clip_ended()
    assert advanced.section_id == "call_to_action"
    assert controller.is_playing is True

    controller.on_time_update(12.5, 30.0)
    final = controller.on_clip_ended()

    assert final.section_id == "call_to_action"
    assert controller.is_playing is False
    assert transport.events[-1] == ("pause",)


def test_seek_clamps_to_clip_duration(controller, transport):
    controller.on_time_update(5.0, 20.0)

    assert controller.seek(50.0) == 20.0
    assert controller.seek(-3.0) == 0.0
    assert transport.events[-2:] == [("seek", 20.0), ("seek", 0.0)]


def test_moving_resets_time_tracking(controller):
    controller.on_time_update(7.0, 10.0)

    controller.next()

    assert controller.current_time == 0.0
    assert controller.duration == 0.0


def test_rejects_audio_map_missing_sections(script, audio_files):
    del audio_files["talking_point_1"]

    with pytest.raises(SectionIndexError):
        PlaybackController(script, audio_files)
