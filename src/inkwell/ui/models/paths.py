"""Folder/document tree models received from the host process.

A snapshot arrives as nested mappings::

    {"hash": 1, "name": "notes", "children": [
        {"hash": 2, "type": "directory", "name": "drafts", "children": [...]},
        {"hash": 3, "type": "file", "name": "todo.md"},
    ]}

The top-level node carries no ``type`` and is the root of the snapshot.
Nodes are immutable once parsed; a new snapshot always produces new nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping

Identifier = int | str


class NodeKind(str, Enum):
    """Kind of entry in a path tree."""

    ROOT = "root"
    FOLDER = "directory"
    DOCUMENT = "file"


_KIND_ALIASES: dict[str, NodeKind] = {
    "directory": NodeKind.FOLDER,
    "dir": NodeKind.FOLDER,
    "folder": NodeKind.FOLDER,
    "file": NodeKind.DOCUMENT,
    "document": NodeKind.DOCUMENT,
}


@dataclass(frozen=True, slots=True)
class PathNode:
    """One folder or document in a tree snapshot.

    Attributes:
        identifier: Opaque stable id, unique within one snapshot.
        kind: Root, folder, or document.
        name: Display name, if the host sent one.
        path: Filesystem path, if the host sent one.
        children: Ordered child nodes. Always empty for documents.
        extra: Remaining host fields, passed back untouched when a node is
            handed to a collaborator.
    """

    identifier: Identifier
    kind: NodeKind
    name: str = ""
    path: str = ""
    children: tuple[PathNode, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def is_folder(self) -> bool:
        """Root and folders can both hold children."""
        return self.kind is not NodeKind.DOCUMENT

    def walk(self) -> Iterator[PathNode]:
        """Yield this node and every descendant, depth-first pre-order."""
        stack: list[PathNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the host's wire shape (without children)."""
        payload: dict[str, Any] = dict(self.extra)
        payload["hash"] = self.identifier
        if not self.is_root:
            payload["type"] = self.kind.value
        if self.name:
            payload["name"] = self.name
        if self.path:
            payload["path"] = self.path
        return payload


def parse_node(payload: Mapping[str, Any]) -> PathNode:
    """Build a :class:`PathNode` tree from a host mapping.

    Raises:
        ValueError: If a node has no identifier or an unknown ``type``.
    """
    if "hash" not in payload:
        raise ValueError("tree node is missing its 'hash' identifier")

    raw_kind = payload.get("type")
    if raw_kind is None:
        kind = NodeKind.ROOT
    else:
        try:
            kind = _KIND_ALIASES[str(raw_kind).lower()]
        except KeyError:
            raise ValueError(f"unknown node type {raw_kind!r}") from None

    children: tuple[PathNode, ...] = ()
    if kind is not NodeKind.DOCUMENT:
        children = tuple(parse_node(child) for child in payload.get("children") or ())

    extra = {
        key: value
        for key, value in payload.items()
        if key not in {"hash", "type", "name", "path", "children"}
    }
    return PathNode(
        identifier=payload["hash"],
        kind=kind,
        name=str(payload.get("name") or ""),
        path=str(payload.get("path") or ""),
        children=children,
        extra=extra,
    )


__all__ = ["Identifier", "NodeKind", "PathNode", "parse_node"]
