"""Graph export helpers for Graphviz DOT and JSON outputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Tuple

from .models import DependencyNode, NodeStatus

_NODE_ATTRS = {
    NodeStatus.RESOLVED: "",
    NodeStatus.NOT_FOUND: ", style=dashed",
    NodeStatus.ERROR: ", color=red",
    NodeStatus.REPEATED: "",
}


def export_dot(root: DependencyNode, output_file: Path) -> None:
    nodes, edges = _collect(root)

    lines = ["digraph Dependencies {"]
    lines.append("  rankdir=LR;")

    for name, node in nodes.items():
        label = _esc(name) if node.location is None else f"{_esc(name)}\\n{_esc(str(node.location))}"
        lines.append(f'  "{_esc(name)}" [label="{label}"{_NODE_ATTRS[node.status]}];')

    for src, dst in edges:
        lines.append(f'  "{_esc(src)}" -> "{_esc(dst)}";')

    lines.append("}")
    output_file.write_text("\n".join(lines), encoding="utf-8")


def export_json(root: DependencyNode, output_file: Path) -> None:
    output_file.write_text(json.dumps(root.to_dict(), indent=2), encoding="utf-8")


def _collect(root: DependencyNode) -> Tuple[Dict[str, DependencyNode], List[Tuple[str, str]]]:
    """Unique nodes by name plus one edge per parent/child link.

    Repeat markers only contribute an edge, so a module that several
    parents import appears once with several incoming edges.
    """
    nodes: Dict[str, DependencyNode] = {}
    edges: List[Tuple[str, str]] = []
    stack = [root]
    while stack:
        node = stack.pop()
        nodes.setdefault(node.name, node)
        for child in node.children:
            edges.append((node.name, child.name))
        stack.extend(reversed(node.children))
    return nodes, edges


def _esc(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
