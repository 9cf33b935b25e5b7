"""Speech-to-text for voice input using Gemini's audio understanding."""
import base64
import binascii
from typing import Iterator, List, Optional

from langchain_core.messages import HumanMessage

from backend.agents.llm_provider import LLMHandle, build_audio_llm
from backend.agents.marketing_agent import message_text
from backend.agents.prompt_template import build_transcription_prompt
from backend.app.config import Settings, get_settings
from backend.app.errors import CampaignCopilotError, TranscriptionError
from backend.app.logger import logger
from backend.app.models import TranscribeResponse, TranscriptSegment


def decode_audio(audio_base64: str) -> bytes:
    """Decode a base64 clip; undecodable input counts as failed capture."""
    try:
        return base64.b64decode(audio_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TranscriptionError("audio-capture") from e


class VoiceTranscriber:
    """Streams a recorded clip through the model, yielding interim then final segments."""

    def __init__(self, settings: Optional[Settings] = None, llm: Optional[LLMHandle] = None):
        self.settings = settings or get_settings()
        self._llm = llm

    @property
    def llm(self) -> LLMHandle:
        if self._llm is None:
            self._llm = build_audio_llm(self.settings)
        return self._llm

    def _message(self, audio: bytes, mime_type: str, language: str) -> HumanMessage:
        return HumanMessage(content=[
            {"type": "text", "text": build_transcription_prompt(language)},
            {
                "type": "media",
                "mime_type": mime_type,
                "data": base64.b64encode(audio).decode("ascii"),
            },
        ])

    def stream_segments(
        self,
        audio: bytes,
        mime_type: str = "audio/wav",
        language: Optional[str] = None
    ) -> Iterator[TranscriptSegment]:
        """
        Yield interim segments as text streams in, then a single final segment.

        Raises:
            TranscriptionError: "audio-capture" for an empty clip, "no-speech"
                when nothing was transcribed, "network" when the model call fails
        """
        if not audio:
            raise TranscriptionError("audio-capture")

        language = language or self.settings.speech_language
        message = self._message(audio, mime_type, language)
        logger.info(f"Transcribing {len(audio)} bytes of {mime_type} audio ({language})")

        text = ""
        try:
            for chunk in self.llm.llm.stream([message]):
                piece = message_text(chunk)
                if not piece:
                    continue
                text += piece
                yield TranscriptSegment(transcript=text, is_final=False)
        except CampaignCopilotError:
            raise
        except Exception as e:
            logger.error(f"Transcription failed: {e}", exc_info=True)
            raise TranscriptionError("network") from e

        final_text = text.strip()
        if not final_text:
            raise TranscriptionError("no-speech")
        yield TranscriptSegment(transcript=final_text, is_final=True)

    def transcribe(
        self,
        audio: bytes,
        mime_type: str = "audio/wav",
        language: Optional[str] = None
    ) -> TranscribeResponse:
        segments: List[TranscriptSegment] = list(self.stream_segments(audio, mime_type, language))
        transcript = segments[-1].transcript
        logger.info(f"✓ Transcription completed ({len(transcript)} chars)")
        return TranscribeResponse(transcript=transcript, segments=segments)
