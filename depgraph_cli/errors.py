"""Exception hierarchy for dependency resolution."""

from __future__ import annotations

from pathlib import Path


class DepGraphError(Exception):
    """Base class for all errors surfaced to the CLI."""


class ToolNotFound(DepGraphError):
    def __init__(self, tool_name: str = "dumpbin.exe"):
        super().__init__(f"Failed to find {tool_name}. Pass --dumpbin or run 'depgraph config set-dumpbin'.")
        self.tool_name = tool_name


class TargetNotFound(DepGraphError):
    def __init__(self, target: str):
        super().__init__(f"Target '{target}' could not be found.")
        self.target = target


class ReportUnavailable(DepGraphError):
    """The analysis tool could not be run or its output was not text."""

    def __init__(self, module_path: Path, reason: str):
        super().__init__(f"No dependency report for '{module_path}': {reason}")
        self.module_path = module_path
        self.reason = reason
