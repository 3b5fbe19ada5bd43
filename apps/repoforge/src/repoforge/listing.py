"""Convert a flat contents listing into a git-style tree."""

import logging
from collections.abc import Iterable
from typing import Literal

from ghrest import ContentItem, Tree, TreeEntry
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DirectoryNode(BaseModel):
    """Node of the intermediate directory hierarchy."""

    name: str
    kind: Literal["dir", "file"]
    children: list["DirectoryNode"] = Field(default_factory=list)

    def child(self, name: str) -> "DirectoryNode | None":
        for node in self.children:
            if node.name == name:
                return node
        return None


def build_hierarchy(items: Iterable[ContentItem], root_name: str = "repo") -> DirectoryNode:
    """
    Build a directory hierarchy from listing items.

    Every path segment becomes a directory node, except the last segment
    of an item typed "file". Sibling nodes are unique by name.
    """
    root = DirectoryNode(name=root_name, kind="dir")
    for item in items:
        parts = [part for part in item.path.split("/") if part]
        parent = root
        for i, part in enumerate(parts):
            is_last = i == len(parts) - 1
            node = parent.child(part)
            if node is None:
                kind = "file" if is_last and item.type == "file" else "dir"
                node = DirectoryNode(name=part, kind=kind)
                parent.children.append(node)
            elif node.kind == "file" and not is_last:
                # A path was listed below an entry first seen as a file.
                logger.debug("Promoting %s to a directory", part)
                node.kind = "dir"
            parent = node
    return root


def flatten_hierarchy(node: DirectoryNode, base: str = "") -> list[TreeEntry]:
    """Flatten a hierarchy pre-order; the node itself is not emitted."""
    entries: list[TreeEntry] = []
    if node.kind != "dir":
        return entries
    for child in node.children:
        path = f"{base}/{child.name}" if base else child.name
        entries.append(TreeEntry(path=path, type="tree" if child.kind == "dir" else "blob"))
        if child.kind == "dir":
            entries.extend(flatten_hierarchy(child, path))
    return entries


def listing_to_tree(items: list[ContentItem], root_name: str = "repo") -> Tree:
    """Synthesize a Tree from a contents listing (no sha, never truncated)."""
    root = build_hierarchy(items, root_name)
    return Tree(sha=None, truncated=False, tree=flatten_hierarchy(root))
