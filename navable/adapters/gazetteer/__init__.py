"""Gazetteer adapters - Implementations of GazetteerRepositoryPort.

Available implementations:
- DirectoryGazetteerRepository: Loads building lists from text files
"""

from .text_repository import DirectoryGazetteerRepository

__all__ = ["DirectoryGazetteerRepository"]
