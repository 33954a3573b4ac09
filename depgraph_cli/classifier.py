"""System module filter policy.

Two independent checks: a name prefix check that runs before any
file-system probing, and a path check against well-known system install
directories once a module has been located.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Tuple

from .config import SYSTEM_NAME_PREFIXES, SYSTEM_PATH_PATTERNS
from .models import ClassificationOutcome, SkipReason


@dataclass(frozen=True)
class SystemPolicy:
    name_prefixes: Tuple[str, ...] = SYSTEM_NAME_PREFIXES
    path_patterns: Tuple[str, ...] = SYSTEM_PATH_PATTERNS

    @classmethod
    def with_extras(cls, name_prefixes: Iterable[str] = (), path_patterns: Iterable[str] = ()) -> "SystemPolicy":
        return cls(
            name_prefixes=SYSTEM_NAME_PREFIXES + tuple(p.lower() for p in name_prefixes),
            path_patterns=SYSTEM_PATH_PATTERNS + tuple(_normalise(p) for p in path_patterns),
        )


DEFAULT_POLICY = SystemPolicy()


def _normalise(path: str) -> str:
    return path.replace("/", "\\").lower()


def classify_name(name: str, policy: SystemPolicy = DEFAULT_POLICY) -> ClassificationOutcome:
    lowered = name.lower()
    if any(lowered.startswith(prefix) for prefix in policy.name_prefixes):
        return ClassificationOutcome.skip(SkipReason.NAME_PATTERN)
    return ClassificationOutcome.accept()


def classify_path(path: Path, policy: SystemPolicy = DEFAULT_POLICY) -> ClassificationOutcome:
    normalised = _normalise(str(path))
    if any(pattern in normalised for pattern in policy.path_patterns):
        return ClassificationOutcome.skip(SkipReason.PATH_PATTERN)
    return ClassificationOutcome.accept()
