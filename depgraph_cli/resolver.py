"""Recursive dependency resolution driven by per-module dumpbin reports.

The resolver walks depth first. Every bare module name is processed at most
once per run: the ``visited`` set is seeded with the root's file name and a
name is added right before it is resolved, so cycles and diamonds terminate
and no module is probed or reported twice.

System modules are dropped from the tree entirely. Modules that cannot be
located become visible leaves, and a dependency whose report cannot be
produced becomes a visible error leaf; only a failure on the root target
aborts the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from .classifier import DEFAULT_POLICY, SystemPolicy, classify_name, classify_path
from .dumpbin import DumpbinReporter
from .errors import ReportUnavailable, TargetNotFound
from .locator import find_location
from .models import DependencyNode, NodeStatus, ResolutionStats, ResolveOptions, SkipReason
from .report_parser import parse_report

logger = logging.getLogger(__name__)

ReportFn = Callable[[Path], str]
LocateFn = Callable[[str, Optional[Path]], Optional[Path]]


class GraphResolver:
    """Builds a :class:`DependencyNode` tree for one target module."""

    def __init__(
        self,
        report_fn: ReportFn,
        options: Optional[ResolveOptions] = None,
        policy: SystemPolicy = DEFAULT_POLICY,
        locate: LocateFn = find_location,
    ):
        self.report_fn = report_fn
        self.options = options or ResolveOptions()
        self.policy = policy
        self.locate = locate
        self.stats = ResolutionStats()
        self._seen: Dict[str, DependencyNode] = {}

    def resolve(
        self,
        target: str | Path,
        search_dir: Optional[Path] = None,
        visited: Optional[Set[str]] = None,
    ) -> DependencyNode:
        """Resolve ``target`` and everything it transitively depends on.

        Raises:
            TargetNotFound: the target itself cannot be located.
            ReportUnavailable: no report could be produced for the target.
        """
        target = Path(target)
        visited = set() if visited is None else visited
        visited.add(target.name)
        self.stats = ResolutionStats()
        self._seen = {}

        location = self.locate(str(target), search_dir if search_dir is not None else Path.cwd())
        if location is None:
            raise TargetNotFound(str(target))

        deps = self._report(location)
        root = DependencyNode(name=location.name, location=location)
        self._seen[target.name] = root
        self.stats.nodes += 1
        self._expand(root, deps, visited)
        return root

    def _report(self, location: Path) -> List[str]:
        self.stats.reports += 1
        return parse_report(self.report_fn(location))

    def _expand(self, node: DependencyNode, deps: List[str], visited: Set[str]) -> None:
        search_dir = node.location.parent
        for dep in deps:
            if dep in visited:
                self._add_repeat(node, dep)
                continue
            visited.add(dep)

            child = self._resolve_dependency(dep, search_dir, visited)
            if child is not None:
                node.children.append(child)

    def _add_repeat(self, node: DependencyNode, dep: str) -> None:
        first = self._seen.get(dep)
        if not self.options.show_repeats or first is None:
            return
        self.stats.repeats += 1
        node.children.append(
            DependencyNode(name=first.name, location=first.location, status=NodeStatus.REPEATED)
        )

    def _resolve_dependency(self, name: str, search_dir: Path, visited: Set[str]) -> Optional[DependencyNode]:
        """Resolve one dependency; ``None`` means it is hidden as a system module."""
        if not self.options.show_system and not classify_name(name, self.policy).accepted:
            logger.debug("Skipping %s (%s)", name, SkipReason.NAME_PATTERN.value)
            self.stats.skipped_by_name += 1
            return None

        location = self.locate(name, search_dir)
        if location is None:
            logger.debug("%s not found (searched %s and PATH)", name, search_dir)
            self.stats.not_found += 1
            return self._register(name, DependencyNode.not_found(name))

        if not self.options.show_system and not classify_path(location, self.policy).accepted:
            logger.debug("Skipping %s at %s (%s)", name, location, SkipReason.PATH_PATTERN.value)
            self.stats.skipped_by_path += 1
            return None

        try:
            deps = self._report(location)
        except ReportUnavailable as exc:
            logger.warning("%s", exc)
            self.stats.errors += 1
            return self._register(
                name,
                DependencyNode(name=location.name, location=location, status=NodeStatus.ERROR, error=exc.reason),
            )

        node = self._register(name, DependencyNode(name=location.name, location=location))
        self._expand(node, deps, visited)
        return node

    def _register(self, name: str, node: DependencyNode) -> DependencyNode:
        self._seen[name] = node
        self.stats.nodes += 1
        return node


def resolve(
    tool_path: Path,
    target: str | Path,
    search_dir: Optional[Path],
    options: Optional[ResolveOptions],
    visited: Set[str],
) -> DependencyNode:
    """Resolve ``target`` with dumpbin at ``tool_path``, threading ``visited``."""
    resolver = GraphResolver(DumpbinReporter(tool_path), options=options)
    return resolver.resolve(target, search_dir=search_dir, visited=visited)
