"""Session state domain service.

Tracks which document and which folder the user is currently looking at.
Both are non-owning references into the :class:`PathIndex` snapshot and
are re-resolved by identifier whenever that snapshot is replaced.
"""

from __future__ import annotations

import logging

from ..events import CurrentDocumentChanged, CurrentFolderChanged, EventBus
from ..models.paths import PathNode
from .path_index import PathIndex

LOGGER = logging.getLogger(__name__)


class SessionState:
    """Current document/folder holder.

    Events Emitted:
        - CurrentDocumentChanged: When the current document identifier changes
        - CurrentFolderChanged: When the current folder identifier changes
    """

    __slots__ = ("_bus", "_current_document", "_current_folder")

    def __init__(self, event_bus: EventBus) -> None:
        self._bus = event_bus
        self._current_document: PathNode | None = None
        self._current_folder: PathNode | None = None

    # ------------------------------------------------------------------
    # Current document
    # ------------------------------------------------------------------

    def get_current_document(self) -> PathNode | None:
        return self._current_document

    def set_current_document(self, node: PathNode | None) -> None:
        previous = self._current_document
        self._current_document = node
        LOGGER.debug("SessionState.set_current_document: %s", _ident(node))
        if _ident(previous) != _ident(node):
            self._bus.publish(CurrentDocumentChanged(identifier=_ident(node)))

    # ------------------------------------------------------------------
    # Current folder
    # ------------------------------------------------------------------

    def get_current_folder(self) -> PathNode | None:
        return self._current_folder

    def set_current_folder(self, node: PathNode | None) -> None:
        previous = self._current_folder
        self._current_folder = node
        LOGGER.debug("SessionState.set_current_folder: %s", _ident(node))
        if _ident(previous) != _ident(node):
            self._bus.publish(CurrentFolderChanged(identifier=_ident(node)))

    # ------------------------------------------------------------------
    # Snapshot resync
    # ------------------------------------------------------------------

    def replace_selection(self, folder: PathNode | None, document: PathNode | None) -> None:
        """Install ``folder`` and ``document`` together, then publish.

        Both fields are assigned before any event goes out, so a subscriber
        to either event reads a folder and a document from the same snapshot.
        """
        previous_folder = self._current_folder
        previous_document = self._current_document
        self._current_folder = folder
        self._current_document = document

        if _ident(previous_folder) != _ident(folder):
            self._bus.publish(CurrentFolderChanged(identifier=_ident(folder)))
        if _ident(previous_document) != _ident(document):
            self._bus.publish(CurrentDocumentChanged(identifier=_ident(document)))

    def resync(self, index: PathIndex) -> None:
        """Re-resolve both references against ``index``'s new snapshot.

        A current folder is looked up again by identifier (None when it was
        removed); with no current folder the snapshot root becomes current.
        A current document is looked up again the same way.
        """
        folder = self._current_folder
        folder = index.root if folder is None else index.find(folder.identifier)

        document = self._current_document
        if document is not None:
            document = index.find(document.identifier)

        self.replace_selection(folder, document)
        LOGGER.debug("SessionState.resync: folder=%s, document=%s", _ident(folder), _ident(document))


def _ident(node: PathNode | None):
    return None if node is None else node.identifier


__all__ = ["SessionState"]
