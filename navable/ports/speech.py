"""Speech port - Abstraction for speech-to-text and text-to-speech."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import TranscriptionResult


class SpeechToTextPort(Protocol):
    """Port for speech-to-text services.

    Implementation: adapters/speech/elevenlabs_adapter.py
    """

    def transcribe(
        self, audio_path: Path, language: Optional[str] = None
    ) -> TranscriptionResult:
        """Transcribe an audio file to text.

        Args:
            audio_path: Path to the recorded audio.
            language: Language code hint (None for auto-detection).

        Raises:
            SpeechToTextError: If the speech service fails.
        """
        ...


class TextToSpeechPort(Protocol):
    """Port for spoken feedback."""

    def synthesize(self, text: str) -> bytes:
        """Return MP3 audio for ``text``.

        Raises:
            SpeechToTextError: If the speech service fails.
        """
        ...
