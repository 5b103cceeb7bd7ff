"""Path index domain service.

Holds the current folder/document tree snapshot and answers identifier
lookups against it. The snapshot is replaced wholesale; nodes are never
mutated through this component.
"""

from __future__ import annotations

import logging

from ..models.paths import Identifier, PathNode

LOGGER = logging.getLogger(__name__)


class PathIndex:
    """Read/replace store for the host's tree snapshot.

    References handed out before a :meth:`replace` belong to the old
    snapshot; callers holding them must look them up again by identifier.
    """

    __slots__ = ("_root", "_parents", "_node_count")

    def __init__(self, root: PathNode | None = None) -> None:
        self._root: PathNode | None = None
        self._parents: dict[Identifier, PathNode] = {}
        self._node_count = 0
        if root is not None:
            self.replace(root)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def root(self) -> PathNode | None:
        """The current snapshot's root, or None before the first tree arrives."""
        return self._root

    @property
    def node_count(self) -> int:
        return self._node_count

    def replace(self, root: PathNode | None) -> None:
        """Install ``root`` as the new snapshot.

        The parent table is rebuilt before the root is swapped in, so no
        reader ever sees the new root paired with the old parent table.
        """
        parents: dict[Identifier, PathNode] = {}
        count = 0
        if root is not None:
            for node in root.walk():
                count += 1
                for child in node.children:
                    parents.setdefault(child.identifier, node)

        self._parents = parents
        self._node_count = count
        self._root = root
        LOGGER.debug(
            "PathIndex.replace: root=%s, nodes=%d",
            None if root is None else root.identifier,
            count,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, identifier: Identifier | None, root: PathNode | None = None) -> PathNode | None:
        """Return the first node matching ``identifier`` in pre-order, or None.

        Args:
            identifier: The identifier to search for.
            root: Subtree to search; defaults to the current snapshot.
        """
        start = self._root if root is None else root
        if start is None or identifier is None:
            return None
        for node in start.walk():
            if node.identifier == identifier:
                return node
        return None

    def parent_of(self, identifier: Identifier) -> PathNode | None:
        """Return the parent of ``identifier`` in the current snapshot.

        None for the root itself and for identifiers not in the snapshot.
        """
        return self._parents.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return self.find(identifier) is not None  # type: ignore[arg-type]


__all__ = ["PathIndex"]
