"""Configuration paths and fixed policy constants for DepGraph."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("DEPGRAPH_HOME", str(Path.home() / ".depgraph"))).expanduser()

# dumpbin /DEPENDENTS output markers
DEPENDENCIES_MARKER = "Image has the following dependencies:"
DELAY_LOAD_MARKER = "Image has the following delay load dependencies:"

DUMPBIN_NAME = "dumpbin.exe"
DUMPBIN_ARGS = ["/DEPENDENTS"]
DEFAULT_TOOL_TIMEOUT = 60.0
VISUAL_STUDIO_ROOTS = [
    "c:/Program Files/Microsoft Visual Studio",
    "c:/Program Files (x86)/Microsoft Visual Studio",
]

# API set forwarding stubs; never resolved when system modules are hidden
SYSTEM_NAME_PREFIXES = ("api-ms-win", "ext-ms-win")
# Compared lowercase against paths with "/" normalised to "\"
SYSTEM_PATH_PATTERNS = ("windows\\system32", "\\windows kits\\")
