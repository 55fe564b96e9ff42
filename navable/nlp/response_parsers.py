"""Parsers for the inference backend's answer to the extraction prompt.

The backend is asked for ``{"start": {"name": ...}, "end": {"name": ...}}``
but does not always comply: the JSON may be wrapped in a Markdown code
fence or surrounded by prose, and older prompt variants produced
slightly different layouts. Each parser below is a pure function
``text -> ParsedRequest | None``; ``parse_response`` tries them in order
and returns the first success.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, List, Optional, Tuple

from ..domain.models import ExtractionMethod, ParsedRequest

ResponseParser = Callable[[str], Optional[ParsedRequest]]

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)

_WRAPPER_KEYS = ("parsedNames", "parsed", "matched")
_START_KEYS = ("start", "from")
_END_KEYS = ("end", "to")


def _name_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("name")
    if isinstance(value, str):
        return value.strip() or None
    return None


def _pick(payload: dict, keys: Tuple[str, ...]) -> Tuple[bool, Optional[str]]:
    for key in keys:
        if key in payload:
            return True, _name_of(payload[key])
    return False, None


def request_from_payload(payload: Any) -> Optional[ParsedRequest]:
    """Convert a decoded JSON payload to a ParsedRequest.

    Accepted layouts: ``start``/``end`` (or ``from``/``to``) holding an
    object with a ``name``, a bare string, or null; optionally nested
    under ``parsedNames``, ``parsed`` or ``matched``. Anything else is
    rejected.
    """
    if not isinstance(payload, dict):
        return None
    for wrapper in _WRAPPER_KEYS:
        inner = payload.get(wrapper)
        if isinstance(inner, dict):
            payload = inner
            break

    has_start, start = _pick(payload, _START_KEYS)
    has_end, end = _pick(payload, _END_KEYS)
    if not has_start and not has_end:
        return None
    return ParsedRequest(start_name=start, end_name=end, method=ExtractionMethod.LLM)


def _loads(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def find_balanced_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of ``text``.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse_direct_json(text: str) -> Optional[ParsedRequest]:
    return request_from_payload(_loads(text.strip()))


def parse_fenced_json(text: str) -> Optional[ParsedRequest]:
    match = _FENCE_RE.search(text)
    if match is None:
        return None
    return request_from_payload(_loads(match.group(1).strip()))


def parse_embedded_object(text: str) -> Optional[ParsedRequest]:
    candidate = find_balanced_object(text)
    if candidate is None:
        return None
    return request_from_payload(_loads(candidate))


PARSERS: List[Tuple[str, ResponseParser]] = [
    ("direct_json", parse_direct_json),
    ("fenced_json", parse_fenced_json),
    ("embedded_object", parse_embedded_object),
]


def parse_response(text: Optional[str]) -> Optional[ParsedRequest]:
    """Try every parser in order; None means the response was unusable."""
    if not text or not text.strip():
        return None
    for _, parser in PARSERS:
        result = parser(text)
        if result is not None:
            return result
    return None
