"""DepGraph CLI: transitive native dependency graphs built from dumpbin reports."""

__version__ = "0.3.0"
