"""Token-overlap matcher adapter (PlaceMatcherPort)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import Gazetteer, MatchResult
from ...matching.fuzzy import match_place


@dataclass
class TokenOverlapMatcher:
    """Resolve candidate names with the token-overlap similarity score."""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def match(
        self, candidate: Optional[str], gazetteer: Gazetteer
    ) -> Optional[MatchResult]:
        result = match_place(candidate, gazetteer)
        self._logger.debug(
            "Place match",
            extra={
                "candidate": candidate,
                "matched": result.place.name if result else None,
                "score": result.score if result else None,
            },
        )
        return result
