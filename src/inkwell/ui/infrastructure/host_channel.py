"""Outbound requests from the renderer to the host process.

:class:`HostChannel` is the transport seam: anything with a ``send``
method can carry requests (a Qt signal bridge, a test recorder). The
renderer never talks to a channel directly; it goes through
:class:`HostRequests`, which names every request the renderer can make.
Requests are fire-and-forget; replies come back as inbound commands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from ..models.paths import Identifier

LOGGER = logging.getLogger(__name__)


class HostChannel(Protocol):
    """Transport that delivers ``(command, content)`` pairs to the host."""

    def send(self, command: str, content: Any = None) -> None:
        ...


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    command: str
    content: Any = None


class RecordingHostChannel:
    """Channel that keeps every request in memory.

    Used by the replay CLI and by tests to observe outbound traffic.
    """

    def __init__(self) -> None:
        self.requests: list[OutboundRequest] = []

    def send(self, command: str, content: Any = None) -> None:
        self.requests.append(OutboundRequest(command=command, content=content))

    def commands(self) -> list[str]:
        return [request.command for request in self.requests]

    def clear(self) -> None:
        self.requests.clear()


class HostRequests:
    """Typed facade over a :class:`HostChannel`.

    Method names describe intent; the wire command names live here only.
    """

    __slots__ = ("_channel",)

    def __init__(self, channel: HostChannel) -> None:
        self._channel = channel

    def _send(self, command: str, content: Any = None) -> None:
        LOGGER.debug("-> host: %s", command)
        self._channel.send(command, content)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def request_paths(self) -> None:
        self._send("get-paths", {})

    def request_config(self, key: str) -> None:
        self._send("config-get", key)

    def request_environment(self, tool: str) -> None:
        """Ask whether an external tool (``pandoc``, ``pdflatex``) is installed."""
        self._send("config-get-env", tool)

    def request_spellcheck_languages(self) -> None:
        self._send("typo-request-lang", {})

    # ------------------------------------------------------------------
    # Spell-check data
    # ------------------------------------------------------------------

    def request_affix(self, language: str) -> None:
        self._send("typo-request-aff", language)

    def request_dictionary(self, language: str) -> None:
        self._send("typo-request-dic", language)

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def open_directory(self) -> None:
        self._send("dir-open", {})

    def select_directory(self, identifier: Identifier) -> None:
        self._send("dir-select", identifier)

    def request_new_directory(self, name: str, parent: Identifier | None) -> None:
        self._send("dir-new", {"name": name, "hash": parent})

    def request_directory_rename(self, name: str, identifier: Identifier) -> None:
        self._send("dir-rename", {"hash": identifier, "name": name})

    def delete_directory(self, identifier: Identifier | None = None) -> None:
        self._send("dir-delete", {} if identifier is None else {"hash": identifier})

    def request_move(self, source: Identifier, target: Identifier) -> None:
        self._send("request-move", {"from": source, "to": target})

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def request_file(self, identifier: Identifier) -> None:
        self._send("file-get", identifier)

    def request_new_file(self, name: str, parent: Identifier | None) -> None:
        self._send("file-new", {"name": name, "hash": parent})

    def request_file_rename(self, name: str, identifier: Identifier) -> None:
        self._send("file-rename", {"hash": identifier, "name": name})

    def delete_file(self, identifier: Identifier | None = None) -> None:
        self._send("file-delete", {} if identifier is None else {"hash": identifier})

    def save_file(self, document: Mapping[str, Any]) -> None:
        """Save a document; ``document["hash"]`` is None for a new one."""
        self._send("file-save", dict(document))

    def request_quicklook(self, identifier: Identifier) -> None:
        self._send("file-get-quicklook", identifier)

    def request_export(self, identifier: Identifier, extension: str) -> None:
        self._send("export", {"hash": identifier, "ext": extension})

    def mark_modified(self) -> None:
        self._send("file-modified", {})

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def request_preferences(self) -> None:
        self._send("get-preferences", {})

    def save_settings(self, config: Mapping[str, Any]) -> None:
        self._send("update-config", dict(config))

    def notify_theme_toggled(self) -> None:
        self._send("toggle-theme")

    def notify_snippets_toggled(self) -> None:
        self._send("toggle-snippets")


__all__ = ["HostChannel", "HostRequests", "OutboundRequest", "RecordingHostChannel"]
