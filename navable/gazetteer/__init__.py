"""Gazetteer of named campus places.

This subpackage parses flat-text building lists into an in-memory,
deduplicated gazetteer that the matcher searches.
"""

from .loader import GazetteerSource, load_gazetteer, parse_line

__all__ = ["GazetteerSource", "load_gazetteer", "parse_line"]
