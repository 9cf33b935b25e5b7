"""Tests for interim/final transcript accumulation."""
from backend.app.models import TranscriptSegment
from backend.app.transcript import UNSUPPORTED_MESSAGE, VoiceInputSession, append_transcript


def seg(text, final=False):
    return TranscriptSegment(transcript=text, is_final=final)


def test_append_transcript():
    assert append_transcript("", "hello") == "hello"
    assert append_transcript("Loyal buyers", "who shop weekly") == "Loyal buyers who shop weekly"


def test_interim_shown_after_existing_value():
    session = VoiceInputSession({"segment": "High-Value"})
    session.start("segment")
    session.handle_results([seg("new sub")])
    assert session.display_value("segment") == "High-Value new sub"
    assert session.values["segment"] == "High-Value"


def test_final_appended_and_interim_cleared():
    session = VoiceInputSession({"segment": "High-Value"})
    session.start("segment")
    session.handle_results([seg("new sub")])
    session.handle_results([seg(" new subscribers ", final=True)])
    assert session.values["segment"] == "High-Value new subscribers"
    assert session.interim == ""
    assert session.display_value("segment") == "High-Value new subscribers"


def test_results_before_index_ignored():
    session = VoiceInputSession()
    session.start("goal")
    session.handle_results([seg("old", final=True), seg("fresh", final=True), seg("more")], result_index=1)
    assert session.values["goal"] == "fresh"
    assert session.interim == ""


def test_final_and_interim_concatenated_separately():
    session = VoiceInputSession()
    session.start("notes")
    session.handle_results([seg("one "), seg("two", final=True), seg(" three")])
    assert session.values["notes"] == "two"
    assert session.interim == ""


def test_only_active_field_receives_text():
    session = VoiceInputSession({"a": "alpha", "b": "beta"})
    session.start("b")
    session.handle_results([seg("gamma")])
    assert session.display_value("a") == "alpha"
    assert session.display_value("b") == "beta gamma"


def test_start_ignored_while_listening():
    session = VoiceInputSession()
    assert session.start("a") is True
    assert session.start("b") is False
    assert session.active_field == "a"


def test_error_stops_listening_with_message():
    session = VoiceInputSession()
    session.start("a")
    session.handle_error("not-allowed")
    assert not session.is_listening
    assert session.error == "Microphone access denied. Please allow microphone access in browser settings."


def test_unknown_error_code_message():
    session = VoiceInputSession()
    session.handle_error("network")
    assert session.error == "Speech recognition error: network"


def test_start_clears_previous_error():
    session = VoiceInputSession()
    session.start("a")
    session.handle_error("no-speech")
    assert session.error == "No speech detected. Please try again."
    session.start("a")
    assert session.error is None


def test_end_stops_listening_and_hides_interim():
    session = VoiceInputSession({"a": "x"})
    session.start("a")
    session.handle_results([seg("y")])
    session.handle_end()
    assert session.display_value("a") == "x"


def test_unsupported_session_never_starts():
    session = VoiceInputSession(supported=False)
    assert session.error == UNSUPPORTED_MESSAGE
    assert session.start("a") is False


def test_fail_shows_message_verbatim():
    session = VoiceInputSession()
    session.start("segment")
    session.handle_results([seg("half a sen")])
    session.fail("Gemini API key is not configured or is a placeholder. Please set a valid API key.")
    assert not session.is_listening
    assert session.interim == ""
    assert session.error.startswith("Gemini API key is not configured")
    assert session.start("segment")
