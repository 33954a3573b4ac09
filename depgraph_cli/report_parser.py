"""Parse ``dumpbin /DEPENDENTS`` output into an ordered list of module names.

The report holds up to two blocks, each introduced by a marker line::

      Image has the following dependencies:

        KERNEL32.dll
        USER32.dll

      Image has the following delay load dependencies:

        COMCTL32.dll

      Summary

Blank lines directly after a marker are skipped; the block then runs until
the next blank line or the end of the text. Missing markers mean an empty
block, not an error.
"""

from __future__ import annotations

from typing import List

from .config import DELAY_LOAD_MARKER, DEPENDENCIES_MARKER


def extract_block(report: str, marker: str) -> List[str]:
    """Return the trimmed entries of the block following ``marker``."""
    idx = report.find(marker)
    if idx < 0:
        return []

    entries: List[str] = []
    for line in report[idx + len(marker):].lstrip().splitlines():
        name = line.strip()
        if not name:
            break
        entries.append(name)
    return entries


def parse_report(report: str) -> List[str]:
    """Direct dependencies followed by delay-load dependencies, in report order.

    Duplicates are preserved; deduplication is the resolver's job.
    """
    return extract_block(report, DEPENDENCIES_MARKER) + extract_block(report, DELAY_LOAD_MARKER)
