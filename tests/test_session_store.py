"""Tests for SessionState domain service."""

from __future__ import annotations

from typing import Any

import pytest

from inkwell.ui.domain.path_index import PathIndex
from inkwell.ui.domain.session_store import SessionState
from inkwell.ui.events import CurrentDocumentChanged, CurrentFolderChanged, EventBus
from inkwell.ui.models.paths import parse_node

from tests.helpers import collect


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def session(event_bus: EventBus) -> SessionState:
    return SessionState(event_bus=event_bus)


@pytest.fixture
def index(tree_payload: dict[str, Any]) -> PathIndex:
    return PathIndex(parse_node(tree_payload))


def _without(payload: dict[str, Any], identifier: int) -> dict[str, Any]:
    """Return a copy of ``payload`` with the node ``identifier`` removed."""
    copy = dict(payload)
    if "children" in copy:
        copy["children"] = [_without(child, identifier) for child in copy["children"] if child["hash"] != identifier]
    return copy


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCurrentReferences:
    """Tests for the current document/folder accessors."""

    def test_starts_empty(self, session: SessionState) -> None:
        assert session.get_current_document() is None
        assert session.get_current_folder() is None

    def test_set_and_get_document(self, session: SessionState, index: PathIndex) -> None:
        document = index.find(6)
        session.set_current_document(document)
        assert session.get_current_document() is document

    def test_set_and_get_folder(self, session: SessionState, index: PathIndex) -> None:
        folder = index.find(2)
        session.set_current_folder(folder)
        assert session.get_current_folder() is folder

    def test_document_change_publishes_event(self, session: SessionState, index: PathIndex, event_bus: EventBus) -> None:
        received = collect(event_bus, CurrentDocumentChanged)
        session.set_current_document(index.find(6))
        session.set_current_document(None)
        assert [event.identifier for event in received] == [6, None]

    def test_same_identifier_does_not_publish(self, session: SessionState, index: PathIndex, event_bus: EventBus) -> None:
        session.set_current_folder(index.find(2))
        received = collect(event_bus, CurrentFolderChanged)
        session.set_current_folder(index.find(2))
        assert received == []


class TestResync:
    """Tests for re-resolving references after a snapshot replacement."""

    def test_defaults_folder_to_root(self, session: SessionState, index: PathIndex) -> None:
        session.resync(index)
        assert session.get_current_folder() is index.root
        assert session.get_current_document() is None

    def test_rebinds_to_new_snapshot_nodes(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any]
    ) -> None:
        session.set_current_folder(index.find(4))
        session.set_current_document(index.find(5))

        index.replace(parse_node(tree_payload))
        session.resync(index)

        assert session.get_current_folder() is index.find(4)
        assert session.get_current_document() is index.find(5)

    def test_removed_document_becomes_none(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any]
    ) -> None:
        session.set_current_document(index.find(6))

        index.replace(parse_node(_without(tree_payload, 6)))
        session.resync(index)

        assert session.get_current_document() is None

    def test_removed_folder_becomes_none(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any]
    ) -> None:
        session.set_current_folder(index.find(3))

        index.replace(parse_node(_without(tree_payload, 3)))
        session.resync(index)

        assert session.get_current_folder() is None

    def test_resync_is_idempotent(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any]
    ) -> None:
        session.set_current_folder(index.find(2))
        session.set_current_document(index.find(5))

        index.replace(parse_node(tree_payload))
        session.resync(index)
        first = (session.get_current_folder(), session.get_current_document())

        index.replace(parse_node(tree_payload))
        session.resync(index)
        second = (session.get_current_folder(), session.get_current_document())

        assert first == second
        assert second[0] is not None and second[0].identifier == 2
        assert second[1] is not None and second[1].identifier == 5

    def test_resync_against_empty_index(self, session: SessionState, index: PathIndex) -> None:
        session.set_current_document(index.find(5))
        session.resync(PathIndex())
        assert session.get_current_folder() is None
        assert session.get_current_document() is None

    def test_folder_subscribers_see_the_resynced_document(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any], event_bus: EventBus
    ) -> None:
        session.set_current_folder(index.find(3))
        session.set_current_document(index.find(6))
        seen: list[Any] = []
        event_bus.subscribe(CurrentFolderChanged, lambda event: seen.append(session.get_current_document()))

        index.replace(parse_node(_without(_without(tree_payload, 3), 6)))
        session.resync(index)

        assert seen == [None]

    def test_document_subscribers_see_the_resynced_folder(
        self, session: SessionState, index: PathIndex, tree_payload: dict[str, Any], event_bus: EventBus
    ) -> None:
        session.set_current_folder(index.find(3))
        session.set_current_document(index.find(6))
        seen: list[Any] = []
        event_bus.subscribe(CurrentDocumentChanged, lambda event: seen.append(session.get_current_folder()))

        index.replace(parse_node(_without(_without(tree_payload, 3), 6)))
        session.resync(index)

        assert seen == [None]


class TestReplaceSelection:
    """Tests for installing folder and document in one step."""

    def test_publishes_only_changed_references(
        self, session: SessionState, index: PathIndex, event_bus: EventBus
    ) -> None:
        session.set_current_folder(index.find(2))
        folders = collect(event_bus, CurrentFolderChanged)
        documents = collect(event_bus, CurrentDocumentChanged)

        session.replace_selection(index.find(2), index.find(5))

        assert folders == []
        assert [event.identifier for event in documents] == [5]
        assert session.get_current_document() is index.find(5)
