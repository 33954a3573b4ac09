"""Core data models shared by the parser, classifier, resolver and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class NodeStatus(str, Enum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    ERROR = "error"
    REPEATED = "repeated"


class SkipReason(str, Enum):
    NAME_PATTERN = "name-pattern"
    PATH_PATTERN = "path-pattern"


@dataclass(frozen=True)
class ClassificationOutcome:
    """Result of checking a module against the system filter policy."""
    skip_reason: Optional[SkipReason] = None

    @property
    def accepted(self) -> bool:
        return self.skip_reason is None

    @classmethod
    def accept(cls) -> "ClassificationOutcome":
        return cls()

    @classmethod
    def skip(cls, reason: SkipReason) -> "ClassificationOutcome":
        return cls(skip_reason=reason)


@dataclass
class ResolveOptions:
    show_system: bool = False
    show_repeats: bool = False


@dataclass
class DependencyNode:
    """One module in the resolved dependency tree.

    A node without a location is always a leaf. ``ERROR`` and ``REPEATED``
    nodes carry a location but are never expanded either.
    """
    name: str
    location: Optional[Path] = None
    children: List["DependencyNode"] = field(default_factory=list)
    status: NodeStatus = NodeStatus.RESOLVED
    error: str = ""

    @classmethod
    def not_found(cls, name: str) -> "DependencyNode":
        return cls(name=name, status=NodeStatus.NOT_FOUND)

    def walk(self, depth: int = 0):
        """Yield ``(depth, node)`` pairs in depth-first pre-order."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "location": str(self.location) if self.location else None,
            "status": self.status.value,
            "children": [child.to_dict() for child in self.children],
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ResolutionStats:
    reports: int = 0
    nodes: int = 0
    skipped_by_name: int = 0
    skipped_by_path: int = 0
    not_found: int = 0
    errors: int = 0
    repeats: int = 0

    def summary(self) -> str:
        return (
            f"{self.nodes} modules | {self.not_found} not found | {self.errors} errors | "
            f"{self.skipped_by_name + self.skipped_by_path} system modules hidden"
        )
