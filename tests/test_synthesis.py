"""Per-section narration and public path rewriting."""

from __future__ import annotations

import asyncio

import pytest

from pdfcast.pipelines.podcast import (
    AudioSynthesizer,
    SynthesisOptions,
    to_public_map,
    to_public_path,
)
from pdfcast.services import SynthesisFailed

from conftest import FakeSpeechClient


def test_synthesizes_every_section_in_generation_order(tmp_path, script):
    speech = FakeSpeechClient()
    options = SynthesisOptions(output_dir=tmp_path / "public" / "audio", voice="nova")

    audio_files = asyncio.run(AudioSynthesizer(speech).synthesize(script, options))

    assert [call["text"] for call in speech.calls] == [
        "Welcome to the show.",
        "That wraps it up.",
        "Subscribe for more.",
        "Discussion of point 0.",
        "Discussion of point 1.",
        "Discussion of point 2.",
    ]
    assert {call["voice"] for call in speech.calls} == {"nova"}
    assert {call["instructions"] for call in speech.calls} == {"excited and informable podcaster"}
    assert set(audio_files) == {
        "introduction",
        "conclusion",
        "call_to_action",
        "talking_point_0",
        "talking_point_1",
        "talking_point_2",
    }
    intro = tmp_path / "public" / "audio" / "introduction.mp3"
    assert audio_files["introduction"] == str(intro)
    assert intro.read_bytes() == b"audio:Welcome to the show."


def test_first_failure_aborts_remaining_sections(tmp_path, script):
    speech = FakeSpeechClient(fail_on=2)
    options = SynthesisOptions(output_dir=tmp_path)

    with pytest.raises(SynthesisFailed, match="conclusion"):
        asyncio.run(AudioSynthesizer(speech).synthesize(script, options))

    assert len(speech.calls) == 2
    assert not (tmp_path / "call_to_action.mp3").exists()


def test_provider_synthesis_errors_pass_through(tmp_path, script):
    speech = FakeSpeechClient(fail_on=1, error=SynthesisFailed("quota exceeded"))

    with pytest.raises(SynthesisFailed, match="quota exceeded"):
        asyncio.run(AudioSynthesizer(speech).synthesize(script, SynthesisOptions(output_dir=tmp_path)))


def test_output_format_drives_file_extension(tmp_path, script):
    options = SynthesisOptions(output_dir=tmp_path, output_format="wav")

    audio_files = asyncio.run(AudioSynthesizer(FakeSpeechClient()).synthesize(script, options))

    assert all(path.endswith(".wav") for path in audio_files.values())


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/srv/app/public/audio/introduction.mp3", "/audio/introduction.mp3"),
        ("public/audio/run1/conclusion.mp3", "/audio/run1/conclusion.mp3"),
        ("/home/public/site/public/audio/x.mp3", "/audio/x.mp3"),
    ],
)
def test_to_public_path_strips_through_last_public_segment(path, expected):
    assert to_public_path(path) == expected


@pytest.mark.parametrize("path", ["/srv/app/audio/x.mp3", "/srv/app/public"])
def test_to_public_path_requires_a_public_directory(path):
    with pytest.raises(ValueError):
        to_public_path(path)


def test_to_public_map_keeps_section_keys():
    mapped = to_public_map({"introduction": "/a/public/audio/introduction.mp3"})

    assert mapped == {"introduction": "/audio/introduction.mp3"}
