"""Table and tree views of a resolved dependency tree."""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .models import DependencyNode, NodeStatus

NOT_FOUND_LABEL = "⚠️ Not Found ⚠️"


def location_label(node: DependencyNode) -> str:
    if node.status == NodeStatus.NOT_FOUND:
        return NOT_FOUND_LABEL
    if node.status == NodeStatus.ERROR:
        return f"❌ Error: {node.error}"
    if node.status == NodeStatus.REPEATED:
        return f"↺ see {node.location or 'above'}"
    return str(node.location)


def build_table(root: DependencyNode) -> Table:
    table = Table(box=box.SIMPLE_HEAD, show_lines=False)
    table.add_column("Dependency", style="cyan", no_wrap=True)
    table.add_column("Resolved Location (best guess)")

    for _depth, node in root.walk():
        style = None
        if node.status in (NodeStatus.NOT_FOUND, NodeStatus.ERROR):
            style = "yellow" if node.status == NodeStatus.NOT_FOUND else "red"
        elif node.status == NodeStatus.REPEATED:
            style = "dim"
        table.add_row(escape(node.name), escape(location_label(node)), style=style)
    return table


def _tree_label(node: DependencyNode) -> str:
    if node.status == NodeStatus.RESOLVED:
        return escape(node.name)
    colour = {NodeStatus.NOT_FOUND: "yellow", NodeStatus.ERROR: "red"}.get(node.status, "dim")
    return f"{escape(node.name)} [{colour}]{escape(location_label(node))}[/{colour}]"


def build_tree(root: DependencyNode) -> Tree:
    tree = Tree(escape(root.name), guide_style="dim")
    _add_children(tree, root)
    return tree


def _add_children(branch: Tree, node: DependencyNode) -> None:
    for child in node.children:
        _add_children(branch.add(_tree_label(child)), child)


def print_table(root: DependencyNode, console: Optional[Console] = None) -> None:
    (console or Console()).print(build_table(root))


def print_tree(root: DependencyNode, console: Optional[Console] = None) -> None:
    (console or Console()).print(build_tree(root))
