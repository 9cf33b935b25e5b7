"""Voice input state: interim/final transcript accumulation into form fields."""
from typing import Dict, Iterable, Optional

from backend.app.errors import speech_error_message
from backend.app.models import TranscriptSegment

UNSUPPORTED_MESSAGE = "Speech recognition is not supported in this environment."


def append_transcript(current: str, chunk: str) -> str:
    """Append a finalized chunk to a field value, space separated."""
    return (current + " " + chunk if current else chunk).strip()


class VoiceInputSession:
    """
    Tracks one form's voice input.

    Any field of the form can be the target. While listening, interim text is
    shown after the field's stored value; finalized text is appended to the
    stored value and the interim buffer is cleared. A session processes one
    recognition segment at a time: the segment ending stops listening.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None, supported: bool = True):
        self.values: Dict[str, str] = dict(values or {})
        self.supported = supported
        self.active_field: Optional[str] = None
        self.is_listening = False
        self.interim = ""
        self.error: Optional[str] = None
        if not supported:
            self.error = UNSUPPORTED_MESSAGE

    def start(self, field: str) -> bool:
        """Begin listening into ``field``. Returns False when not started."""
        if not self.supported or self.is_listening:
            return False
        self.active_field = field
        self.values.setdefault(field, "")
        self.interim = ""
        self.error = None
        self.is_listening = True
        return True

    def stop(self) -> None:
        self.is_listening = False
        self.interim = ""

    def handle_results(self, results: Iterable[TranscriptSegment], result_index: int = 0) -> None:
        """Apply recognition results from ``result_index`` onwards."""
        interim_text = ""
        final_chunk = ""
        for segment in list(results)[result_index:]:
            if segment.is_final:
                final_chunk += segment.transcript
            else:
                interim_text += segment.transcript

        self.interim = interim_text
        if final_chunk and self.active_field is not None:
            field = self.active_field
            self.values[field] = append_transcript(self.values.get(field, ""), final_chunk.strip())
            self.interim = ""

    def handle_error(self, error_code: str) -> None:
        self.fail(speech_error_message(error_code))

    def fail(self, message: str) -> None:
        """Stop listening and show ``message`` as is."""
        self.error = message
        self.stop()

    def handle_end(self) -> None:
        self.is_listening = False

    def display_value(self, field: str) -> str:
        """Stored value, plus the interim transcript when ``field`` is being dictated."""
        value = self.values.get(field, "")
        if self.is_listening and field == self.active_field and self.interim:
            return (value + " " + self.interim if value else self.interim).strip()
        return value
