"""ElevenLabs speech adapter.

Implements SpeechToTextPort and TextToSpeechPort on top of the
ElevenLabs REST API:
- ``transcribe`` posts the recording as multipart form data. Some API
  versions expect the upload under ``audio`` instead of ``file``, so a
  422 answer is retried once with the other field name.
- ``synthesize`` returns MP3 bytes for spoken feedback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ...config import SpeechConfig, get_config
from ...domain.errors import ConfigurationError, SpeechToTextError
from ...domain.models import TranscriptionResult

_UPLOAD_FIELDS = ("file", "audio")


def transcript_from_payload(data: Any) -> str:
    """Read the transcript from a speech-to-text response body."""
    if not isinstance(data, dict):
        return ""
    text = data.get("text") or data.get("transcript") or ""
    return text.strip() if isinstance(text, str) else ""


@dataclass
class ElevenLabsSpeechAdapter:
    """ElevenLabs speech-to-text and text-to-speech client.

    Attributes:
        config: Speech configuration (key, endpoints, model, voice)
        session: HTTP session, injectable for tests
    """

    config: SpeechConfig = field(default_factory=lambda: get_config().speech)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        if not self.config.api_key:
            raise ConfigurationError(
                "Speech API key is not set", setting_name="NAV_SPEECH_API_KEY"
            )
        return {"xi-api-key": self.config.api_key}

    def _post_audio(
        self, audio_path: Path, upload_field: str, language: Optional[str]
    ) -> requests.Response:
        data = {"model_id": self.config.stt_model}
        if language:
            data["language_code"] = language

        with open(audio_path, "rb") as fh:
            files = {upload_field: (audio_path.name, fh, "application/octet-stream")}
            return self.session.post(
                self.config.stt_url,
                headers=self._headers(),
                data=data,
                files=files,
                timeout=self.config.timeout_seconds,
            )

    def transcribe(
        self, audio_path: Path, language: Optional[str] = None
    ) -> TranscriptionResult:
        """Transcribe an audio file.

        Args:
            audio_path: Path to the recorded audio.
            language: Language code hint, defaults to the configured one.

        Returns:
            TranscriptionResult with the transcribed text.

        Raises:
            ConfigurationError: If no API key is configured.
            SpeechToTextError: If the file is missing or the service fails.
        """
        audio_path = Path(audio_path)
        if not audio_path.is_file():
            raise SpeechToTextError(
                "Audio file not found", audio_path=str(audio_path)
            )

        language = language or self.config.language
        self._logger.info(
            "Transcribing audio",
            extra={"audio_path": str(audio_path), "language": language},
        )

        first_field, *retry_fields = _UPLOAD_FIELDS
        try:
            response = self._post_audio(audio_path, first_field, language)
            for upload_field in retry_fields:
                if response.status_code != 422:
                    break
                self._logger.debug(
                    "Speech service rejected upload, retrying",
                    extra={"retry_field": upload_field},
                )
                response = self._post_audio(audio_path, upload_field, language)
        except requests.RequestException as e:
            raise SpeechToTextError(
                "Speech-to-text request failed",
                audio_path=str(audio_path),
                cause=e,
            )

        if not response.ok:
            raise SpeechToTextError(
                f"Speech-to-text failed with HTTP {response.status_code}: "
                f"{response.text[:200]}",
                status_code=response.status_code,
                audio_path=str(audio_path),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SpeechToTextError(
                "Speech-to-text returned a non-JSON body",
                status_code=response.status_code,
                audio_path=str(audio_path),
                cause=e,
            )

        result = TranscriptionResult(
            text=transcript_from_payload(data),
            language=data.get("language_code") if isinstance(data, dict) else None,
            language_probability=(
                data.get("language_probability") if isinstance(data, dict) else None
            ),
        )
        self._logger.info(
            "Transcription complete",
            extra={"text_length": len(result.text), "language": result.language},
        )
        return result

    def synthesize(self, text: str) -> bytes:
        """Return MP3 audio for ``text``.

        Raises:
            ConfigurationError: If no API key is configured.
            SpeechToTextError: If the service fails.
        """
        url = f"{self.config.tts_url.rstrip('/')}/{self.config.tts_voice_id}"
        headers = {**self._headers(), "Accept": "audio/mpeg"}
        body = {
            "text": text,
            "model_id": self.config.tts_model,
            "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
        }

        try:
            response = self.session.post(
                url, headers=headers, json=body, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            raise SpeechToTextError("Text-to-speech request failed", cause=e)

        if not response.ok:
            raise SpeechToTextError(
                f"Text-to-speech failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        self._logger.debug(
            "Speech synthesized",
            extra={"text_length": len(text), "audio_bytes": len(response.content)},
        )
        return response.content
