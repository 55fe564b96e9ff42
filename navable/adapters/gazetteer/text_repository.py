"""Text-file gazetteer repository.

Reads every building list (``*.txt``) in the configured data directory
and builds the gazetteer once. Concurrent first callers wait on the
same lock and receive the same instance.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ...config import GazetteerConfig, get_config
from ...domain.errors import LoadError
from ...domain.models import Gazetteer
from ...gazetteer.loader import GazetteerSource, load_gazetteer


@dataclass
class DirectoryGazetteerRepository:
    """Gazetteer repository backed by a directory of text files.

    Attributes:
        config: Gazetteer configuration (data directory, file pattern)
    """

    config: GazetteerConfig = field(default_factory=lambda: get_config().gazetteer)

    _gazetteer: Optional[Gazetteer] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Gazetteer:
        """Return the gazetteer, building it on first use.

        Raises:
            LoadError: If no gazetteer file could be read.
        """
        gazetteer = self._gazetteer
        if gazetteer is not None:
            return gazetteer

        with self._lock:
            if self._gazetteer is None:
                self._gazetteer = load_gazetteer(self.read_sources())
            return self._gazetteer

    def reload(self) -> Gazetteer:
        """Rebuild the gazetteer from disk and swap it in."""
        gazetteer = load_gazetteer(self.read_sources())
        with self._lock:
            self._gazetteer = gazetteer
        self._logger.info("Gazetteer reloaded", extra={"places": len(gazetteer)})
        return gazetteer

    def read_sources(self) -> List[GazetteerSource]:
        """Read all gazetteer files, skipping the ones that cannot be read.

        Raises:
            LoadError: If the directory is missing or no file was readable.
        """
        data_dir = Path(self.config.data_dir)
        if not data_dir.is_dir():
            raise LoadError(
                f"Gazetteer directory not found: {data_dir}",
                source_path=str(data_dir),
            )

        sources: List[GazetteerSource] = []
        for path in sorted(data_dir.glob(self.config.file_pattern)):
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding=self.config.encoding)
            except (OSError, UnicodeDecodeError) as e:
                self._logger.warning(
                    "Failed to read gazetteer file",
                    extra={"path": str(path), "error": str(e)},
                )
                continue
            sources.append(GazetteerSource(name=path.name, text=text))

        if not sources:
            raise LoadError(
                f"No readable gazetteer files matching {self.config.file_pattern!r}",
                source_path=str(data_dir),
            )

        self._logger.debug(
            "Gazetteer files read",
            extra={"files": [s.name for s in sources]},
        )
        return sources
