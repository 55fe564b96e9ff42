"""NLP adapters - Implementations of PlaceExtractorPort and PlaceMatcherPort.

Available implementations:
- LLMPlaceExtractor: Inference-backed extraction with heuristic fallback
- HeuristicPlaceExtractor: Local regex rules only
- TokenOverlapMatcher: Token-overlap lookup in the gazetteer
"""

from .heuristic_extractor import HeuristicPlaceExtractor
from .llm_extractor import LLMPlaceExtractor, build_place_extractor
from .token_overlap_matcher import TokenOverlapMatcher

__all__ = [
    "HeuristicPlaceExtractor",
    "LLMPlaceExtractor",
    "TokenOverlapMatcher",
    "build_place_extractor",
]
