"""NLP ports - Abstractions for place-name extraction and matching.

These protocols define the contracts between the resolution service and
the extraction/matching strategies, so an inference-backed extractor
and the heuristic one can be swapped without changing the service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Gazetteer, MatchResult, ParsedRequest


class PlaceExtractorPort(Protocol):
    """Port for start/end place-name extraction.

    Implementations:
    - adapters/nlp/llm_extractor.py (LLMPlaceExtractor)
    - adapters/nlp/heuristic_extractor.py (HeuristicPlaceExtractor)
    """

    async def extract(self, utterance: str) -> ParsedRequest:
        """Extract candidate start and end names from an utterance.

        Must not raise for string input; at worst both names are None.

        Args:
            utterance: The raw user utterance.

        Returns:
            ParsedRequest with the candidate names and how they were found.
        """
        ...


class PlaceMatcherPort(Protocol):
    """Port for resolving a candidate name to a gazetteer entry.

    Implementation: adapters/nlp/token_overlap_matcher.py
    """

    def match(self, candidate: Optional[str], gazetteer: Gazetteer) -> Optional[MatchResult]:
        """Return the best gazetteer entry for ``candidate``, or None."""
        ...
