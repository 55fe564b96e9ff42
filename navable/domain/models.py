"""Immutable domain models for NavAble.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the place resolution
pipeline: gazetteer places, parsed requests, match results and the
walking routes built from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, Optional, Sequence, Tuple


def normalize_key(name: str) -> str:
    """Return the gazetteer key for a place name (lower-cased, trimmed)."""
    return name.strip().lower()


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class Place:
    """A named campus place from the gazetteer.

    Attributes:
        name: Canonical display name, as listed in the source data
        location: GPS coordinates of the place
        source: Which gazetteer file/record produced this place
    """

    name: str
    location: GeoLocation
    source: str = ""

    @property
    def latitude(self) -> float:
        return self.location.latitude

    @property
    def longitude(self) -> float:
        return self.location.longitude


class Gazetteer:
    """Deduplicated, read-only set of places keyed by normalized name.

    Places keep the order in which they were first seen. When two places
    share a normalized name the first one wins.
    """

    __slots__ = ("_places", "_index")

    def __init__(self, places: Sequence[Place] = ()) -> None:
        index: Dict[str, Place] = {}
        for place in places:
            key = normalize_key(place.name)
            if key not in index:
                index[key] = place
        self._index = index
        self._places: Tuple[Place, ...] = tuple(index.values())

    def __len__(self) -> int:
        return len(self._places)

    def __iter__(self) -> Iterator[Place]:
        return iter(self._places)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_key(name) in self._index

    def __repr__(self) -> str:
        return f"Gazetteer(places={len(self._places)})"

    @property
    def places(self) -> Tuple[Place, ...]:
        return self._places

    @property
    def is_empty(self) -> bool:
        return not self._places

    def get(self, name: str) -> Optional[Place]:
        """Look up a place by name (case-insensitive, exact)."""
        return self._index.get(normalize_key(name))

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self._places)


class ExtractionMethod(Enum):
    """How a ParsedRequest was produced."""

    LLM = auto()
    HEURISTIC = auto()
    NONE = auto()


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """Start/end place names extracted from a user utterance.

    Attributes:
        start_name: Candidate name for the start place, if mentioned
        end_name: Candidate name for the end place, if mentioned
        method: Which extraction path produced the names
        degraded_reason: Why the inference path was abandoned, if it was
    """

    start_name: Optional[str] = None
    end_name: Optional[str] = None
    method: ExtractionMethod = ExtractionMethod.NONE
    degraded_reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        """True when the heuristic fallback replaced the inference path."""
        return self.degraded_reason is not None

    @property
    def is_empty(self) -> bool:
        return self.start_name is None and self.end_name is None


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Best gazetteer entry for one candidate name.

    Attributes:
        place: The best-scoring place
        score: Similarity score in [0, 1]
    """

    place: Place
    score: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Score must be between 0 and 1, got {self.score}")


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of resolving one utterance against the gazetteer.

    Attributes:
        parsed: The names extracted from the utterance
        start: Match for the start name, or None
        end: Match for the end name, or None
    """

    parsed: ParsedRequest
    start: Optional[MatchResult] = None
    end: Optional[MatchResult] = None

    @property
    def is_empty(self) -> bool:
        """True when neither side resolved to a place."""
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def missing(self) -> Tuple[str, ...]:
        sides = []
        if self.start is None:
            sides.append("start")
        if self.end is None:
            sides.append("end")
        return tuple(sides)


@dataclass(frozen=True, slots=True)
class TranscriptionResult:
    """Result of speech-to-text transcription.

    Attributes:
        text: Complete transcribed text
        language: Detected language code, if reported
        language_probability: Confidence in language detection
    """

    text: str
    language: Optional[str] = None
    language_probability: Optional[float] = None


@dataclass(frozen=True, slots=True)
class RouteStep:
    """One turn-by-turn instruction of a walking route."""

    instruction: str
    distance_m: float = 0.0
    duration_s: float = 0.0


@dataclass(frozen=True, slots=True)
class WalkingRoute:
    """Walking route returned by the routing service.

    Attributes:
        coordinates: Ordered (latitude, longitude) pairs of the path
        distance_m: Total distance in meters
        duration_s: Estimated walking time in seconds
        steps: Turn-by-turn instructions
        mode: Travel mode requested from the routing service
    """

    coordinates: Tuple[Tuple[float, float], ...]
    distance_m: float
    duration_s: float
    steps: Tuple[RouteStep, ...] = field(default_factory=tuple)
    mode: str = "walk"

    @property
    def is_empty(self) -> bool:
        return len(self.coordinates) == 0

    @property
    def duration_minutes(self) -> float:
        return self.duration_s / 60.0


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Full answer to a navigation request.

    Attributes:
        resolution: Resolved start/end places
        route: Walking route between them, if one was requested
        map_path: Path to the rendered HTML map, if one was generated
        transcript: The transcribed utterance when the request came from audio
    """

    resolution: ResolutionResult
    route: Optional[WalkingRoute] = None
    map_path: Optional[str] = None
    transcript: Optional[str] = None
