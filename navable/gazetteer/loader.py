"""Gazetteer loading from flat-text building lists.

Each line of a source holds a place name followed by its latitude and
longitude, separated by whitespace::

    Name                   Latitude    Longitude
    Suzzallo Library       47.65568    -122.30800
    Mary Gates Hall        47.65502    -122.30792

This module only parses text. Reading files is the job of the
gazetteer repository adapter.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from ..domain.errors import LoadError
from ..domain.models import Gazetteer, GeoLocation, Place

logger = logging.getLogger(__name__)

# "Name Latitude Longitude", "Building lat lon", ...
HEADER_RE = re.compile(r"^\S+\s+lat(?:itude)?\b", re.IGNORECASE)

MIN_TOKENS = 3


@dataclass(frozen=True)
class GazetteerSource:
    """A raw text blob together with where it came from."""

    name: str
    text: str


SourceLike = Union[str, GazetteerSource]


def _parse_coordinate(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_line(line: str, source: str = "") -> Optional[Place]:
    """Parse one gazetteer line, or return None if it should be skipped."""
    stripped = line.strip()
    if not stripped or HEADER_RE.match(stripped):
        return None

    tokens = stripped.split()
    if len(tokens) < MIN_TOKENS:
        return None

    lat = _parse_coordinate(tokens[-2])
    lon = _parse_coordinate(tokens[-1])
    if lat is None or lon is None:
        return None

    try:
        location = GeoLocation(latitude=lat, longitude=lon)
    except ValueError:
        return None

    return Place(name=" ".join(tokens[:-2]), location=location, source=source)


def _as_source(item: SourceLike, index: int) -> GazetteerSource:
    if isinstance(item, GazetteerSource):
        return item
    return GazetteerSource(name=f"source-{index}", text=item)


def load_gazetteer(sources: Iterable[SourceLike]) -> Gazetteer:
    """Build a gazetteer from one or more text blobs.

    Malformed lines are skipped silently. Places are kept in order of
    first occurrence and deduplicated by case-insensitive name.

    Raises:
        LoadError: If no source text was supplied at all.
    """
    resolved = [_as_source(item, i) for i, item in enumerate(sources)]
    if not resolved:
        raise LoadError("No gazetteer source text available")

    places: List[Place] = []
    for source in resolved:
        skipped = 0
        for line in source.text.splitlines():
            place = parse_line(line, source.name)
            if place is None:
                if line.strip():
                    skipped += 1
                continue
            places.append(place)
        logger.debug(
            "Gazetteer source parsed",
            extra={"source": source.name, "skipped_lines": skipped},
        )

    gazetteer = Gazetteer(places)
    logger.info(
        "Gazetteer loaded",
        extra={
            "sources": len(resolved),
            "places": len(gazetteer),
            "duplicates": len(places) - len(gazetteer),
        },
    )
    return gazetteer
