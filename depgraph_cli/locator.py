"""Resolve module names to files using a loader-style search order."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def _probe(name: str, directories: Iterable[Path]) -> Optional[Path]:
    for directory in directories:
        candidate = Path(directory) / name
        try:
            found = candidate.is_file()
        except OSError as exc:
            logger.debug("Cannot probe %s: %s", candidate, exc)
            continue
        if found:
            return Path(os.path.abspath(candidate))
    return None


def search_path() -> list[Path]:
    """Directories of the process's executable search path, in order."""
    return [Path(entry) for entry in os.get_exec_path() if entry]


def find_location(name: str | Path, search_dir: Optional[Path]) -> Optional[Path]:
    """Return the absolute path of ``name`` or ``None`` when it cannot be found.

    A name with a directory component is checked as given. A bare name is
    looked up in ``search_dir`` first and then on ``PATH``; the first match
    wins.
    """
    name = Path(name)
    if name.parent != Path("."):
        found = _probe(name.name, [name.parent])
        logger.debug("Probed %s directly: %s", name, found or "missing")
        return found

    if search_dir is not None:
        found = _probe(name.name, [search_dir])
        if found is not None:
            logger.debug("Found %s in search dir %s", name, search_dir)
            return found

    found = _probe(name.name, search_path())
    logger.debug("Looked up %s on PATH: %s", name, found or "missing")
    return found
