"""Heuristic place extractor adapter.

This adapter exposes the local regex rules from nlp/heuristics.py
through the PlaceExtractorPort interface. It is the extractor used when
no inference backend is configured, and the fallback of the LLM one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import ExtractionMethod, ParsedRequest
from ...nlp.heuristics import match_rule


@dataclass
class HeuristicPlaceExtractor:
    """Rule-based start/end extractor."""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def extract_sync(
        self, utterance: str, degraded_reason: Optional[str] = None
    ) -> ParsedRequest:
        """Extract start and end names without any network call.

        Args:
            utterance: The raw user utterance.
            degraded_reason: Why the inference path was abandoned, when
                this is used as a fallback.

        Returns:
            ParsedRequest produced by the first matching rule.
        """
        rule, (start, end) = match_rule(utterance or "")

        result = ParsedRequest(
            start_name=start,
            end_name=end,
            method=ExtractionMethod.HEURISTIC if rule else ExtractionMethod.NONE,
            degraded_reason=degraded_reason,
        )

        self._logger.debug(
            "Place extraction (heuristic)",
            extra={
                "rule": rule,
                "start": result.start_name,
                "end": result.end_name,
                "degraded": result.degraded,
            },
        )
        return result

    async def extract(self, utterance: str) -> ParsedRequest:
        return self.extract_sync(utterance)
