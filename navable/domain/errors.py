"""Typed domain errors for NavAble.

All errors inherit from NavAbleError and can optionally wrap a root
cause exception for debugging.

Only LoadError is allowed to escape the place resolution pipeline.
Inference failures are downgraded to a heuristic extraction, and a
missing match is represented as None rather than an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class NavAbleError(Exception):
    """Base error for the NavAble domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LoadError(NavAbleError):
    """No gazetteer source text could be obtained at all.

    Attributes:
        source_path: Directory or file that was being read, if any
    """

    source_path: Optional[str] = None


@dataclass
class InferenceError(NavAbleError):
    """The inference backend failed or returned no usable text.

    Attributes:
        backend: Name of the inference backend
        status_code: HTTP status code when the failure was an HTTP error
    """

    backend: str = ""
    status_code: Optional[int] = None


@dataclass
class SpeechToTextError(NavAbleError):
    """Speech-to-text (or text-to-speech) call failed.

    Attributes:
        status_code: HTTP status code returned by the speech service
        audio_path: Path to the audio file if relevant
    """

    status_code: Optional[int] = None
    audio_path: Optional[str] = None


@dataclass
class RoutingError(NavAbleError):
    """The walking-route service failed or returned no route.

    Attributes:
        status_code: HTTP status code returned by the routing service
    """

    status_code: Optional[int] = None


@dataclass
class GeocodingError(NavAbleError):
    """Failed to geocode a free-text location.

    Attributes:
        query: The location query that failed
        is_rate_limited: Whether the failure was due to rate limiting
    """

    query: str = ""
    is_rate_limited: bool = False


@dataclass
class UnresolvedLocationsError(NavAbleError):
    """Start and/or end could not be resolved to a gazetteer place.

    Attributes:
        missing: Which sides are missing ("start", "end")
    """

    missing: Tuple[str, ...] = field(default_factory=tuple)


@dataclass
class ConfigurationError(NavAbleError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class RenderingError(NavAbleError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
