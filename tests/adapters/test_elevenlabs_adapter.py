"""Tests for the ElevenLabs speech adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from navable.adapters.speech import ElevenLabsSpeechAdapter
from navable.adapters.speech.elevenlabs_adapter import transcript_from_payload
from navable.config import SpeechConfig
from navable.domain.errors import ConfigurationError, SpeechToTextError


def _response(status_code=200, payload=None, content=b"", text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    response.content = content
    response.text = text
    return response


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "request.webm"
    path.write_bytes(b"\x00\x01fake-audio")
    return path


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def adapter(session):
    config = SpeechConfig(api_key="xi-test", stt_model="scribe_v1", language=None)
    return ElevenLabsSpeechAdapter(config=config, session=session)


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"text": " from A to B "}, "from A to B"),
        ({"transcript": "from A to B"}, "from A to B"),
        ({}, ""),
        (None, ""),
    ],
)
def test_transcript_from_payload(payload, expected):
    assert transcript_from_payload(payload) == expected


class TestTranscribe:
    def test_posts_multipart_file(self, adapter, session, audio_file):
        session.post.return_value = _response(
            payload={"text": "from Kane Hall to Red Square", "language_code": "en"}
        )

        result = adapter.transcribe(audio_file, language="en")

        assert result.text == "from Kane Hall to Red Square"
        assert result.language == "en"
        kwargs = session.post.call_args.kwargs
        assert kwargs["headers"] == {"xi-api-key": "xi-test"}
        assert kwargs["data"] == {"model_id": "scribe_v1", "language_code": "en"}
        assert "file" in kwargs["files"]

    def test_retries_with_audio_field_on_422(self, adapter, session, audio_file):
        session.post.side_effect = [
            _response(status_code=422, text="missing audio"),
            _response(payload={"transcript": "Kane Hall to HUB"}),
        ]

        result = adapter.transcribe(audio_file)

        assert result.text == "Kane Hall to HUB"
        assert session.post.call_count == 2
        assert "audio" in session.post.call_args_list[1].kwargs["files"]

    def test_http_error(self, adapter, session, audio_file):
        session.post.return_value = _response(status_code=401, text="bad key")
        with pytest.raises(SpeechToTextError) as exc_info:
            adapter.transcribe(audio_file)
        assert exc_info.value.status_code == 401

    def test_transport_error(self, adapter, session, audio_file):
        session.post.side_effect = requests.Timeout("slow")
        with pytest.raises(SpeechToTextError):
            adapter.transcribe(audio_file)

    def test_missing_file(self, adapter, tmp_path):
        with pytest.raises(SpeechToTextError):
            adapter.transcribe(tmp_path / "nope.webm")

    def test_missing_key(self, session, audio_file):
        adapter = ElevenLabsSpeechAdapter(config=SpeechConfig(api_key=""), session=session)
        with pytest.raises(ConfigurationError):
            adapter.transcribe(audio_file)
        session.post.assert_not_called()


class TestSynthesize:
    def test_returns_audio_bytes(self, adapter, session):
        session.post.return_value = _response(content=b"mp3-bytes")

        assert adapter.synthesize("Walking to Kane Hall") == b"mp3-bytes"
        url = session.post.call_args.args[0]
        assert url.endswith(f"/{adapter.config.tts_voice_id}")
        body = session.post.call_args.kwargs["json"]
        assert body["text"] == "Walking to Kane Hall"
        assert body["model_id"] == adapter.config.tts_model

    def test_http_error(self, adapter, session):
        session.post.return_value = _response(status_code=500)
        with pytest.raises(SpeechToTextError):
            adapter.synthesize("hi")
