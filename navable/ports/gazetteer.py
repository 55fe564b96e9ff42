"""Gazetteer port - Abstraction for obtaining the shared gazetteer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Gazetteer


class GazetteerRepositoryPort(Protocol):
    """Port for loading the gazetteer.

    Implementation: adapters/gazetteer/text_repository.py

    The repository builds the gazetteer at most once and hands the same
    read-only instance to every caller until it is reloaded.
    """

    def load(self) -> Gazetteer:
        """Return the gazetteer, building it on first use.

        Raises:
            LoadError: If no gazetteer source could be read.
        """
        ...

    def reload(self) -> Gazetteer:
        """Rebuild the gazetteer from its sources and return it."""
        ...
