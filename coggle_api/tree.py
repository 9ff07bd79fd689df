"""
Tree analysis - Walking and summarizing a materialized node tree.

These helpers work on the list returned by Diagram.get_nodes() or
Diagram.arrange() and never contact the service.
"""

from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .node import Node


@dataclass
class TreeSummary:
    """Summary of a diagram's node tree."""
    total_nodes: int
    root_count: int
    leaf_count: int
    depth: int
    nodes_per_level: dict[int, int]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_nodes": self.total_nodes,
            "root_count": self.root_count,
            "leaf_count": self.leaf_count,
            "depth": self.depth,
            "nodes_per_level": self.nodes_per_level,
        }


def walk(nodes: Iterable["Node"]) -> Iterator["Node"]:
    """Yield every node of a forest, depth-first, parents before children."""
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(nodes: Iterable["Node"], node_id: str) -> Optional["Node"]:
    """Find a node anywhere in the tree by id."""
    for node in walk(nodes):
        if node.id == node_id:
            return node
    return None


def summarize_tree(nodes: Iterable["Node"]) -> TreeSummary:
    """
    Summarize the shape of a node tree.

    Args:
        nodes: Top-level nodes, as returned by Diagram.get_nodes()

    Returns:
        TreeSummary with counts per level; depth is 0 for an empty tree and
        1 for a lone root
    """
    roots = list(nodes)
    per_level: dict[int, int] = defaultdict(int)
    leaves = 0

    # BFS, level by level
    level = 0
    current = roots
    while current:
        level += 1
        per_level[level] += len(current)
        next_level = []
        for node in current:
            if node.children:
                next_level.extend(node.children)
            else:
                leaves += 1
        current = next_level

    return TreeSummary(
        total_nodes=sum(per_level.values()),
        root_count=len(roots),
        leaf_count=leaves,
        depth=level,
        nodes_per_level=dict(per_level),
    )
