"""Natural language processing components for NavAble.

This subpackage turns a free-text navigation request into candidate
start/end place names: the extraction prompt, the parsers for the
inference backend's answer, and the local heuristic fallback.
"""

from .heuristics import parse_start_end, title_case
from .prompts import build_extraction_prompt
from .response_parsers import parse_response

__all__ = [
    "build_extraction_prompt",
    "parse_response",
    "parse_start_end",
    "title_case",
]
