"""Tests for voice transcription."""
import base64

import pytest

from backend.agents.transcriber import VoiceTranscriber, decode_audio
from backend.app.errors import TranscriptionError


def test_stream_yields_interim_then_final(settings, fake_llm):
    handle = fake_llm(chunks=["Loyal customers ", "who buy", " monthly "])
    transcriber = VoiceTranscriber(settings, llm=handle)

    segments = list(transcriber.stream_segments(b"RIFFdata", "audio/wav"))

    assert [s.transcript for s in segments if not s.is_final] == [
        "Loyal customers ",
        "Loyal customers who buy",
        "Loyal customers who buy monthly ",
    ]
    assert segments[-1].is_final
    assert segments[-1].transcript == "Loyal customers who buy monthly"


def test_audio_sent_as_media_part(settings, fake_llm):
    handle = fake_llm(chunks=["hi"])
    VoiceTranscriber(settings, llm=handle).transcribe(b"abc", "audio/webm", language="de-DE")

    (messages,) = handle.llm.calls
    text_part, media_part = messages[0].content
    assert "de-DE" in text_part["text"]
    assert media_part == {"type": "media", "mime_type": "audio/webm", "data": base64.b64encode(b"abc").decode()}


def test_transcribe_returns_final_transcript(settings, fake_llm):
    result = VoiceTranscriber(settings, llm=fake_llm(chunks=["Free ", "shipping"])).transcribe(b"abc")
    assert result.transcript == "Free shipping"
    assert len(result.segments) == 3


def test_empty_audio_is_capture_failure(settings, fake_llm):
    with pytest.raises(TranscriptionError) as exc_info:
        VoiceTranscriber(settings, llm=fake_llm()).transcribe(b"")
    assert exc_info.value.error_code == "audio-capture"
    assert exc_info.value.status_code == 422


def test_silence_is_no_speech(settings, fake_llm):
    with pytest.raises(TranscriptionError) as exc_info:
        VoiceTranscriber(settings, llm=fake_llm(chunks=["  ", ""])).transcribe(b"abc")
    assert exc_info.value.message == "No speech detected. Please try again."


def test_model_failure_is_network_error(settings, fake_llm):
    transcriber = VoiceTranscriber(settings, llm=fake_llm(error=RuntimeError("timeout")))
    with pytest.raises(TranscriptionError) as exc_info:
        transcriber.transcribe(b"abc")
    assert exc_info.value.error_code == "network"
    assert exc_info.value.status_code == 502


def test_decode_audio():
    assert decode_audio(base64.b64encode(b"clip").decode()) == b"clip"
    with pytest.raises(TranscriptionError):
        decode_audio("not base64!!")
