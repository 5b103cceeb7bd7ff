"""Interfaces of the UI collaborators the router drives.

The widgets themselves (directory list, preview list, editor surface,
dialog layer, overlay, toolbar, pomodoro popup) live outside the renderer
core. The router only sees these protocols.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from ..models.paths import Identifier, PathNode

LOGGER = logging.getLogger(__name__)


class DirectoryView(Protocol):
    def empty(self) -> None: ...
    def refresh(self) -> None: ...
    def select(self, identifier: Identifier) -> None: ...
    def toggle_theme(self) -> None: ...
    def toggle_display(self) -> None: ...


class PreviewView(Protocol):
    def refresh(self) -> None: ...
    def select(self, identifier: Identifier) -> None: ...
    def handle_search_result(self, result: Any) -> None: ...
    def begin_search(self, term: str) -> None: ...
    def toggle_theme(self) -> None: ...
    def toggle_snippets(self) -> None: ...
    def toggle_directories(self) -> None: ...


class EditorView(Protocol):
    def open(self, document: PathNode) -> None: ...
    def close(self) -> None: ...
    def get_value(self) -> str: ...
    def get_written_words(self) -> int: ...
    def open_find(self) -> None: ...
    def run_command(self, command: Any) -> None: ...
    def focus(self) -> None: ...
    def zoom(self, step: int) -> None: ...
    def toggle_theme(self) -> None: ...
    def toggle_directories(self) -> None: ...
    def toggle_preview(self) -> None: ...


class BodyView(Protocol):
    """Dialog and notification layer."""

    def request_dir_name(self, parent: PathNode | None) -> None: ...
    def request_new_dir_name(self, folder: PathNode | None) -> None: ...
    def request_file_name(self, parent: PathNode | None) -> None: ...
    def request_new_file_name(self, document: PathNode | None) -> None: ...
    def display_export(self, document: PathNode) -> None: ...
    def display_preferences(self, preferences: Any) -> None: ...
    def set_spellcheck_langs(self, languages: Mapping[str, bool]) -> None: ...
    def quicklook(self, content: Any) -> None: ...
    def close_quicklook(self) -> None: ...
    def notify(self, message: Any) -> None: ...
    def toggle_theme(self) -> None: ...


class OverlayView(Protocol):
    def show(self, message: str) -> None: ...
    def update(self, message: str) -> None: ...
    def close(self) -> None: ...


class ToolbarView(Protocol):
    def focus_search(self) -> None: ...
    def search_progress(self, index: int, count: int) -> None: ...
    def end_search(self) -> None: ...
    def update_word_count(self, words: int) -> None: ...
    def toggle_theme(self) -> None: ...


class PomodoroView(Protocol):
    def popup(self) -> None: ...


class _LoggingView:
    """Collaborator stand-in that logs every call and returns None."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __getattr__(self, method: str) -> Callable[..., None]:
        if method.startswith("_"):
            raise AttributeError(method)

        def _call(*args: Any, **kwargs: Any) -> None:
            LOGGER.debug("%s.%s%s", self._name, method, args)

        return _call


class _LoggingEditor(_LoggingView):
    def get_value(self) -> str:
        return ""

    def get_written_words(self) -> int:
        return 0


@dataclass(slots=True)
class Collaborators:
    """The set of UI collaborators handed to the router."""

    directories: DirectoryView = field(default_factory=lambda: _LoggingView("directories"))
    preview: PreviewView = field(default_factory=lambda: _LoggingView("preview"))
    editor: EditorView = field(default_factory=lambda: _LoggingEditor("editor"))
    body: BodyView = field(default_factory=lambda: _LoggingView("body"))
    overlay: OverlayView = field(default_factory=lambda: _LoggingView("overlay"))
    toolbar: ToolbarView = field(default_factory=lambda: _LoggingView("toolbar"))
    pomodoro: PomodoroView = field(default_factory=lambda: _LoggingView("pomodoro"))

    def themed(self) -> tuple[Any, ...]:
        """Collaborators that follow the light/dark theme, in toggle order."""
        return (self.directories, self.preview, self.editor, self.body, self.toolbar)


__all__ = [
    "BodyView",
    "Collaborators",
    "DirectoryView",
    "EditorView",
    "OverlayView",
    "PomodoroView",
    "PreviewView",
    "ToolbarView",
]
