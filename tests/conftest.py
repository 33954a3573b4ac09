"""Pytest configuration and fixtures for DepGraph CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, Generator, Iterable, List, Optional, Union

import pytest

from depgraph_cli.errors import ReportUnavailable


def make_report(deps: Iterable[str] = (), delay: Optional[Iterable[str]] = None) -> str:
    """Build text shaped like ``dumpbin /DEPENDENTS`` output."""
    lines = [
        "Microsoft (R) COFF/PE Dumper Version 14.38.33135.0",
        "Copyright (C) Microsoft Corporation.  All rights reserved.",
        "",
        "",
        "Dump of file C:\\build\\app.exe",
        "",
        "File Type: EXECUTABLE IMAGE",
        "",
    ]
    deps = list(deps)
    if deps:
        lines += ["  Image has the following dependencies:", ""]
        lines += [f"    {d}" for d in deps]
        lines.append("")
    if delay is not None:
        lines += ["  Image has the following delay load dependencies:", ""]
        lines += [f"    {d}" for d in delay]
        lines.append("")
    lines += ["  Summary", "", "        1000 .data", "        2000 .text", ""]
    return "\r\n".join(lines)


class FakeReporter:
    """Report function backed by canned reports keyed by module file name."""

    def __init__(self, reports: Dict[str, Union[str, Exception]]):
        self.reports = reports
        self.calls: List[Path] = []

    def __call__(self, module_path: Path) -> str:
        self.calls.append(module_path)
        report = self.reports.get(module_path.name, make_report())
        if isinstance(report, Exception):
            raise report
        return report

    @property
    def called_names(self) -> List[str]:
        return [p.name for p in self.calls]


def unavailable(name: str) -> ReportUnavailable:
    return ReportUnavailable(Path(name), "access denied")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def app_dir(temp_dir: Path) -> Path:
    """Directory holding the binary under test."""
    path = temp_dir / "app"
    path.mkdir()
    return path


@pytest.fixture
def system_dir(temp_dir: Path) -> Path:
    """Stand-in for C:\\Windows\\System32; tests put it on PATH when needed."""
    path = temp_dir / "Windows" / "System32"
    path.mkdir(parents=True)
    return path


@pytest.fixture(autouse=True)
def isolated_path(temp_dir: Path, monkeypatch) -> Path:
    """Restrict PATH to one empty scratch directory so host files never match."""
    path_dir = temp_dir / "path"
    path_dir.mkdir()
    monkeypatch.setenv("PATH", str(path_dir))
    return path_dir


@pytest.fixture(autouse=True)
def isolated_config(temp_dir: Path, monkeypatch) -> Path:
    """Point the config file at a scratch location."""
    config_file = temp_dir / "home" / "config.toml"
    monkeypatch.setattr("depgraph_cli.config_manager.CONFIG_FILE", config_file)
    return config_file


def touch(directory: Path, *names: str) -> List[Path]:
    paths = []
    for name in names:
        path = directory / name
        path.write_bytes(b"MZ")
        paths.append(path)
    return paths
