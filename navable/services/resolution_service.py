"""Place resolution service - Utterance to gazetteer places.

Runs the extractor once on the utterance, then resolves each extracted
name against the gazetteer independently, so a miss on one side never
blocks the other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.models import Gazetteer, MatchResult, ResolutionResult
from ..ports.gazetteer import GazetteerRepositoryPort
from ..ports.nlp import PlaceExtractorPort, PlaceMatcherPort


@dataclass
class PlaceResolutionService:
    """Resolve the start and end places of a navigation request.

    Attributes:
        extractor: Extracts candidate start/end names from the utterance
        matcher: Resolves a candidate name to a gazetteer entry
        repository: Supplies the shared gazetteer when none is passed in
    """

    extractor: PlaceExtractorPort
    matcher: PlaceMatcherPort
    repository: Optional[GazetteerRepositoryPort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _match(
        self, name: Optional[str], gazetteer: Gazetteer
    ) -> Optional[MatchResult]:
        if name is None:
            return None
        return self.matcher.match(name, gazetteer)

    async def resolve(
        self, utterance: str, gazetteer: Optional[Gazetteer] = None
    ) -> ResolutionResult:
        """Resolve an utterance to start and end places.

        Args:
            utterance: The user's navigation request.
            gazetteer: Places to match against. Defaults to the
                repository's shared gazetteer.

        Returns:
            ResolutionResult with a MatchResult (or None) per side.

        Raises:
            LoadError: If the gazetteer has to be loaded and cannot be.
            ValueError: If no gazetteer is given and there is no repository.
        """
        if gazetteer is None:
            if self.repository is None:
                raise ValueError("No gazetteer given and no repository configured")
            gazetteer = self.repository.load()

        parsed = await self.extractor.extract(utterance)
        self._logger.info(
            "Places extracted",
            extra={
                "method": parsed.method.name,
                "start": parsed.start_name,
                "end": parsed.end_name,
                "degraded": parsed.degraded,
                "degraded_reason": parsed.degraded_reason,
            },
        )

        start = self._match(parsed.start_name, gazetteer)
        end = self._match(parsed.end_name, gazetteer)

        result = ResolutionResult(parsed=parsed, start=start, end=end)
        self._logger.info(
            "Places resolved",
            extra={
                "start": start.place.name if start else None,
                "start_score": start.score if start else None,
                "end": end.place.name if end else None,
                "end_score": end.score if end else None,
            },
        )
        return result
