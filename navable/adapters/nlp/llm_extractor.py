"""Inference-backed place extractor with heuristic fallback.

The utterance is embedded in a constrained prompt and sent to the
inference backend in a worker thread, under a timeout. Whatever goes
wrong on that path (timeout, transport error, unparseable answer) is
logged and the local heuristics take over, so ``extract`` always
returns a ParsedRequest.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from ...config import InferenceConfig, get_config
from ...domain.models import ParsedRequest
from ...nlp.prompts import build_extraction_prompt
from ...nlp.response_parsers import parse_response
from ...ports.inference import InferenceBackendPort
from .heuristic_extractor import HeuristicPlaceExtractor


@dataclass
class LLMPlaceExtractor:
    """Place extractor that asks an LLM first and falls back to rules.

    Attributes:
        backend: Inference backend used for the primary path
        config: Inference configuration (timeout, campus name)
        fallback: Heuristic extractor used when the backend is unusable
    """

    backend: InferenceBackendPort
    config: InferenceConfig = field(default_factory=lambda: get_config().inference)
    fallback: HeuristicPlaceExtractor = field(default_factory=HeuristicPlaceExtractor)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def extract(self, utterance: str) -> ParsedRequest:
        """Extract start and end names from an utterance.

        Never raises for string input.
        """
        if not utterance or not utterance.strip():
            return ParsedRequest()

        backend_name = getattr(self.backend, "name", type(self.backend).__name__)
        prompt = build_extraction_prompt(utterance, self.config.campus_name)

        reason: Optional[str] = None
        try:
            raw = await asyncio.wait_for(
                asyncio.to_thread(self.backend.send_prompt, prompt),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raw = None
            reason = f"inference timed out after {self.config.timeout_seconds}s"
        except Exception as e:
            raw = None
            reason = f"inference failed: {e}"

        if raw is not None:
            parsed = parse_response(raw)
            if parsed is not None:
                self._logger.info(
                    "Place extraction (llm)",
                    extra={
                        "backend": backend_name,
                        "start": parsed.start_name,
                        "end": parsed.end_name,
                    },
                )
                return parsed
            reason = "unparseable inference response"
            self._logger.debug(
                "Unparseable inference response",
                extra={"backend": backend_name, "response": raw[:500]},
            )

        self._logger.warning(
            "Inference extraction degraded, using heuristic fallback",
            extra={"backend": backend_name, "reason": reason},
        )
        return self.fallback.extract_sync(utterance, degraded_reason=reason)


def build_place_extractor(
    backend: Optional[InferenceBackendPort],
    config: Optional[InferenceConfig] = None,
) -> Union[LLMPlaceExtractor, HeuristicPlaceExtractor]:
    """Return the LLM extractor when a backend is available, else rules only."""
    config = config or get_config().inference
    if backend is None or not config.enabled or not config.api_key:
        return HeuristicPlaceExtractor()
    return LLMPlaceExtractor(backend=backend, config=config)
