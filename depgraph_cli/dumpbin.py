"""Run ``dumpbin /DEPENDENTS`` and locate ``dumpbin.exe`` on the host."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .config import DEFAULT_TOOL_TIMEOUT, DUMPBIN_ARGS, DUMPBIN_NAME, VISUAL_STUDIO_ROOTS
from .errors import ReportUnavailable, ToolNotFound

logger = logging.getLogger(__name__)


def run_dumpbin(tool_path: Path, module_path: Path, timeout: Optional[float] = DEFAULT_TOOL_TIMEOUT) -> str:
    """Return the raw stdout of ``dumpbin /DEPENDENTS <module_path>``.

    The exit status is not inspected: dumpbin still prints a usable report
    for many images it complains about.

    Raises:
        ReportUnavailable: the tool could not be started, timed out, or
            wrote output that is not valid UTF-8.
    """
    cmd = [str(tool_path), *DUMPBIN_ARGS, str(module_path)]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        raise ReportUnavailable(module_path, f"{tool_path.name} timed out after {timeout}s") from exc
    except OSError as exc:
        raise ReportUnavailable(module_path, f"failed to run {tool_path}: {exc}") from exc

    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ReportUnavailable(module_path, f"report is not valid UTF-8 ({exc.reason})") from exc


class DumpbinReporter:
    """Report function bound to one dumpbin executable."""

    def __init__(self, tool_path: Path, timeout: Optional[float] = DEFAULT_TOOL_TIMEOUT):
        self.tool_path = Path(tool_path)
        self.timeout = timeout

    def __call__(self, module_path: Path) -> str:
        return run_dumpbin(self.tool_path, module_path, timeout=self.timeout)


def find_dumpbin(roots: Optional[Iterable[str | Path]] = None) -> Path:
    """Locate ``dumpbin.exe`` on PATH or under the Visual Studio install roots."""
    on_path = shutil.which(DUMPBIN_NAME)
    if on_path:
        return Path(on_path)

    for root in roots if roots is not None else VISUAL_STUDIO_ROOTS:
        # os.walk silently skips directories it cannot list
        for dirpath, _dirnames, filenames in os.walk(root):
            if DUMPBIN_NAME in filenames:
                found = Path(dirpath) / DUMPBIN_NAME
                if found.is_file():
                    logger.debug("Found %s under %s", found, root)
                    return found

    raise ToolNotFound(DUMPBIN_NAME)
