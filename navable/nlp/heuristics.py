"""Rule-based extraction of start/end place names from an utterance.

These rules are the fallback used when the inference backend is
unavailable or answers with something that cannot be parsed. They are
tried in order and the first rule that matches wins.

Example
-------
    >>> parse_start_end("from Mary Gates Hall to Odegaard")
    ('Mary Gates Hall', 'Odegaard')
    >>> parse_start_end("go to Kane Hall from the HUB")
    ('The Hub', 'Kane Hall')
"""

import re
from typing import Callable, List, Optional, Tuple

NamePair = Tuple[Optional[str], Optional[str]]
Rule = Callable[[str], Optional[NamePair]]

# Segments never run across clause punctuation.
_SEGMENT = r"[^,;!?\n]"

FROM_TO_RE = re.compile(
    rf"\bfrom\s+(?P<start>{_SEGMENT}+?)\s+to\s+(?P<end>{_SEGMENT}+)",
    re.IGNORECASE,
)
GENERIC_TO_RE = re.compile(
    rf"(?P<start>{_SEGMENT}+?)\s+to\s+(?P<end>{_SEGMENT}+)",
    re.IGNORECASE,
)
# "to ... from" is left to GO_TO_FROM_RE.
TO_THEN_FROM_RE = re.compile(r"\bto\b.*\bfrom\b", re.IGNORECASE | re.DOTALL)
GO_TO_FROM_RE = re.compile(
    rf"\bgo\s+to\s+(?P<end>{_SEGMENT}+?)\s+from\s+(?P<start>{_SEGMENT}+)",
    re.IGNORECASE,
)
SPLIT_RE = re.compile(r"\b(?:to|and)\b", re.IGNORECASE)
CAPITALIZED_RE = re.compile(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*")

_EDGE_PUNCTUATION = " \t\r\n.,;:!?\"'()"


def title_case(text: str) -> str:
    """Capitalize the first letter of each word and lower-case the rest."""
    return re.sub(
        r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text
    )


def _clean(segment: Optional[str]) -> Optional[str]:
    if segment is None:
        return None
    cleaned = segment.strip(_EDGE_PUNCTUATION)
    if not cleaned:
        return None
    return title_case(cleaned)


def _pair(start: Optional[str], end: Optional[str]) -> Optional[NamePair]:
    start, end = _clean(start), _clean(end)
    if start is None and end is None:
        return None
    return start, end


def _from_to(text: str) -> Optional[NamePair]:
    m = FROM_TO_RE.search(text)
    return _pair(m.group("start"), m.group("end")) if m else None


def _generic_to(text: str) -> Optional[NamePair]:
    if TO_THEN_FROM_RE.search(text):
        return None
    m = GENERIC_TO_RE.search(text)
    return _pair(m.group("start"), m.group("end")) if m else None


def _go_to_from(text: str) -> Optional[NamePair]:
    m = GO_TO_FROM_RE.search(text)
    return _pair(m.group("start"), m.group("end")) if m else None


def _split_segments(text: str) -> Optional[NamePair]:
    parts = [p.strip(_EDGE_PUNCTUATION) for p in SPLIT_RE.split(text)]
    parts = [p for p in parts if p]
    if len(parts) < 2:
        return None
    return _pair(parts[0], parts[1])


def _capitalized_sequences(text: str) -> Optional[NamePair]:
    caps = CAPITALIZED_RE.findall(text)
    if not caps:
        return None
    return _pair(caps[0], caps[1] if len(caps) > 1 else None)


RULES: List[Tuple[str, Rule]] = [
    ("from_to", _from_to),
    ("generic_to", _generic_to),
    ("go_to_from", _go_to_from),
    ("split_to_and", _split_segments),
    ("capitalized", _capitalized_sequences),
]


def match_rule(text: str) -> Tuple[Optional[str], NamePair]:
    """Apply the rules in order.

    Returns
    -------
    Tuple[Optional[str], NamePair]
        The name of the rule that matched (None if none did) and the
        extracted (start, end) names.
    """
    if not text or not text.strip():
        return None, (None, None)
    for name, rule in RULES:
        result = rule(text)
        if result is not None:
            return name, result
    return None, (None, None)


def parse_start_end(text: str) -> NamePair:
    """Extract (start, end) place names from ``text`` using local rules.

    Parameters
    ----------
    text:
        The raw user utterance.

    Returns
    -------
    NamePair
        Title-cased start and end names; either may be None.
    """
    return match_rule(text)[1]
