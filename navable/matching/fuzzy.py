"""Best-match lookup of a free-text place name in the gazetteer.

The score is a token-set overlap between normalized names, with two
special cases: identical names score 1.0, and a name contained in the
other scores at least 0.9. This is a best-effort lookup over a small
static list, not a general-purpose geocoder.
"""

from __future__ import annotations

import re
import unicodedata
from typing import FrozenSet, Optional

from ..domain.models import Gazetteer, MatchResult

SUBSTRING_SCORE_FLOOR = 0.9

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize_name(text: str) -> str:
    """Strip accents, lower-case, collapse non-alphanumeric runs, trim."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return _NON_ALNUM_RE.sub(" ", stripped.lower()).strip()


def _tokens(normalized: str) -> FrozenSet[str]:
    return frozenset(normalized.split())


def token_overlap(a: str, b: str) -> float:
    """|A & B| / max(|A|, |B|) over the token sets of two normalized names."""
    a_tokens = _tokens(a)
    b_tokens = _tokens(b)
    denom = max(len(a_tokens), len(b_tokens))
    if denom == 0:
        return 0.0
    return len(a_tokens & b_tokens) / denom


def similarity_score(candidate: str, name: str) -> float:
    """Score how well ``candidate`` names the gazetteer entry ``name``."""
    a = normalize_name(candidate)
    b = normalize_name(name)
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    overlap = token_overlap(a, b)
    if a in b or b in a:
        return max(overlap, SUBSTRING_SCORE_FLOOR)
    return overlap


def match_place(
    candidate: Optional[str], gazetteer: Gazetteer
) -> Optional[MatchResult]:
    """Return the best-scoring gazetteer entry for ``candidate``.

    Returns None when the candidate is empty (or punctuation only) or the
    gazetteer has no entries. Otherwise the highest score wins, and on an
    exact tie the entry seen first in the gazetteer is kept.
    """
    if not candidate or not normalize_name(candidate) or gazetteer.is_empty:
        return None

    best: Optional[MatchResult] = None
    for place in gazetteer:
        score = similarity_score(candidate, place.name)
        if best is None or score > best.score:
            best = MatchResult(place=place, score=score)
            if score == 1.0:
                break
    return best
