"""Fuzzy matching of extracted place names against the gazetteer."""

from .fuzzy import match_place, normalize_name, similarity_score

__all__ = ["match_place", "normalize_name", "similarity_score"]
