"""Tests for the inference-backed place extractor and its fallback."""

import asyncio
import time
from unittest.mock import MagicMock

import pytest

from navable.adapters.nlp import (
    HeuristicPlaceExtractor,
    LLMPlaceExtractor,
    build_place_extractor,
)
from navable.config import InferenceConfig
from navable.domain.errors import InferenceError
from navable.domain.models import ExtractionMethod


@pytest.fixture
def config():
    return InferenceConfig(api_key="test-key", timeout_seconds=0.2, campus_name="UW")


@pytest.fixture
def backend():
    mock = MagicMock()
    mock.name = "fake"
    return mock


def _extract(extractor, text):
    return asyncio.run(extractor.extract(text))


class TestLLMPlaceExtractor:
    def test_uses_backend_answer(self, backend, config):
        backend.send_prompt.return_value = (
            '{"start": {"name": "Kane Hall"}, "end": {"name": "Red Square"}}'
        )
        parsed = _extract(LLMPlaceExtractor(backend, config), "kane to the square")

        assert (parsed.start_name, parsed.end_name) == ("Kane Hall", "Red Square")
        assert parsed.method == ExtractionMethod.LLM
        assert not parsed.degraded

        prompt = backend.send_prompt.call_args.args[0]
        assert "kane to the square" in prompt
        assert "UW" in prompt

    def test_backend_failure_falls_back_to_heuristics(self, backend, config):
        backend.send_prompt.side_effect = InferenceError("boom", backend="fake")
        parsed = _extract(
            LLMPlaceExtractor(backend, config), "from Mary Gates Hall to Odegaard"
        )

        assert (parsed.start_name, parsed.end_name) == ("Mary Gates Hall", "Odegaard")
        assert parsed.method == ExtractionMethod.HEURISTIC
        assert parsed.degraded
        assert "boom" in parsed.degraded_reason

    def test_unexpected_exception_falls_back(self, backend, config):
        backend.send_prompt.side_effect = ConnectionError("unreachable")
        parsed = _extract(
            LLMPlaceExtractor(backend, config), "from Mary Gates Hall to Odegaard"
        )
        assert parsed.start_name == "Mary Gates Hall"
        assert parsed.degraded

    def test_timeout_falls_back(self, backend, config):
        def slow(prompt):
            time.sleep(0.5)
            return '{"start": "X", "end": "Y"}'

        backend.send_prompt.side_effect = slow
        parsed = _extract(
            LLMPlaceExtractor(backend, config), "from Mary Gates Hall to Odegaard"
        )

        assert (parsed.start_name, parsed.end_name) == ("Mary Gates Hall", "Odegaard")
        assert "timed out" in parsed.degraded_reason

    def test_unparseable_answer_falls_back(self, backend, config):
        backend.send_prompt.return_value = "I am not sure what you mean."
        parsed = _extract(LLMPlaceExtractor(backend, config), "Kane Hall to Red Square")

        assert (parsed.start_name, parsed.end_name) == ("Kane Hall", "Red Square")
        assert parsed.degraded_reason == "unparseable inference response"

    def test_blank_utterance_skips_backend(self, backend, config):
        parsed = _extract(LLMPlaceExtractor(backend, config), "   ")
        assert parsed.is_empty
        backend.send_prompt.assert_not_called()

    def test_never_raises_when_nothing_is_found(self, backend, config):
        backend.send_prompt.side_effect = RuntimeError("down")
        parsed = _extract(LLMPlaceExtractor(backend, config), "hello there")
        assert parsed.is_empty
        assert parsed.degraded


class TestBuildPlaceExtractor:
    def test_with_backend_and_key(self, backend, config):
        assert isinstance(build_place_extractor(backend, config), LLMPlaceExtractor)

    def test_without_key(self, backend):
        config = InferenceConfig(api_key="")
        assert isinstance(build_place_extractor(backend, config), HeuristicPlaceExtractor)

    def test_disabled(self, backend):
        config = InferenceConfig(api_key="k", enabled=False)
        assert isinstance(build_place_extractor(backend, config), HeuristicPlaceExtractor)

    def test_no_backend(self, config):
        assert isinstance(build_place_extractor(None, config), HeuristicPlaceExtractor)
