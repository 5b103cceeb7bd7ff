"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from inkwell.ui.application.context import RendererContext
from inkwell.ui.application.renderer import Renderer
from inkwell.ui.bootstrap import create_renderer
from inkwell.ui.events import EventBus
from inkwell.ui.infrastructure.host_channel import RecordingHostChannel
from inkwell.ui.presentation.collaborators import Collaborators

from tests.helpers import FakeChecker


@pytest.fixture
def tree_payload() -> dict[str, Any]:
    """A small snapshot: root -> (notes -> (drafts -> a.md), todo.md), archive."""
    return {
        "hash": 1,
        "name": "workspace",
        "path": "/home/writer/workspace",
        "children": [
            {
                "hash": 2,
                "type": "directory",
                "name": "notes",
                "path": "/home/writer/workspace/notes",
                "children": [
                    {
                        "hash": 4,
                        "type": "directory",
                        "name": "drafts",
                        "path": "/home/writer/workspace/notes/drafts",
                        "children": [
                            {
                                "hash": 5,
                                "type": "file",
                                "name": "a.md",
                                "path": "/home/writer/workspace/notes/drafts/a.md",
                                "modtime": 1700000000,
                            }
                        ],
                    },
                    {
                        "hash": 6,
                        "type": "file",
                        "name": "todo.md",
                        "path": "/home/writer/workspace/notes/todo.md",
                    },
                ],
            },
            {
                "hash": 3,
                "type": "directory",
                "name": "archive",
                "path": "/home/writer/workspace/archive",
                "children": [],
            },
        ],
    }


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def channel() -> RecordingHostChannel:
    return RecordingHostChannel()


@pytest.fixture
def ui() -> Collaborators:
    """Collaborators backed by MagicMocks, with an editor that has content."""
    editor = MagicMock(name="editor")
    editor.get_value.return_value = "# Draft\n\nSome words here."
    editor.get_written_words.return_value = 4
    return Collaborators(
        directories=MagicMock(name="directories"),
        preview=MagicMock(name="preview"),
        editor=editor,
        body=MagicMock(name="body"),
        overlay=MagicMock(name="overlay"),
        toolbar=MagicMock(name="toolbar"),
        pomodoro=MagicMock(name="pomodoro"),
    )


@pytest.fixture
def renderer(channel: RecordingHostChannel, ui: Collaborators, event_bus: EventBus) -> Renderer:
    return create_renderer(channel, ui=ui, checker_factory=FakeChecker.factory, event_bus=event_bus)


@pytest.fixture
def context(renderer: Renderer) -> RendererContext:
    return renderer.context
