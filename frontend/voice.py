"""Voice input widgets: record a clip, transcribe it, accumulate into a text field."""
import streamlit as st

from backend.app.errors import SPEECH_ERROR_CODES
from backend.app.transcript import VoiceInputSession
from frontend.client import ClientError


def get_voice_session(form_key: str) -> VoiceInputSession:
    """Per-form voice session, kept across reruns."""
    state_key = f"voice::{form_key}"
    if state_key not in st.session_state:
        st.session_state[state_key] = VoiceInputSession()
    return st.session_state[state_key]


def field_key(form_key: str, field: str) -> str:
    return f"{form_key}.{field}"


def _on_recording(client, form_key: str, field: str, audio_key: str) -> None:
    """Runs before the rerun, so the text widget's state can still be written."""
    recording = st.session_state.get(audio_key)
    if recording is None:
        return

    session = get_voice_session(form_key)
    widget_key = field_key(form_key, field)
    session.values[field] = st.session_state.get(widget_key, "")
    if not session.start(field):
        return

    audio = recording.getvalue()
    if not audio:
        session.handle_error("audio-capture")
        return
    try:
        result = client.transcribe(audio, recording.type or "audio/wav")
        # Replay the streamed segments: each interim replaces the last, the final one is appended
        for segment in result.segments:
            session.handle_results([segment])
    except ClientError as e:
        if e.code in SPEECH_ERROR_CODES:
            session.handle_error(e.code)
        else:
            session.fail(e.message)
        return
    finally:
        session.handle_end()
    st.session_state[widget_key] = session.values[field]


def microphone_input(client, form_key: str, field: str, label: str) -> None:
    """Render a recorder for ``field`` and the session's status/error line."""
    audio_key = f"{field_key(form_key, field)}::audio"
    st.audio_input(
        f"🎤 Dictate {label}",
        key=audio_key,
        on_change=_on_recording,
        args=(client, form_key, field, audio_key),
        label_visibility="collapsed",
    )
    session = get_voice_session(form_key)
    if session.active_field == field:
        if session.is_listening:
            st.caption(f'Listening... "{session.display_value(field)}"')
        if session.error:
            st.caption(f":red[{session.error}]")
