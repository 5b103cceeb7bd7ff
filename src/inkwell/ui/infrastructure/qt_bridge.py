"""Qt signal transport between the host glue and the renderer."""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal

LOGGER = logging.getLogger(__name__)


class QtHostBridge(QObject):
    """Carries messages in both directions as Qt signals.

    ``inbound`` fires for every message from the host and is connected to
    the command router, so messages are handled one at a time on the
    bridge's thread. ``outbound`` fires for every renderer request; the
    host glue connects it to whatever actually reaches the host process.
    Instances satisfy :class:`~inkwell.ui.infrastructure.host_channel.HostChannel`.
    """

    inbound = Signal(str, object)
    outbound = Signal(str, object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

    def send(self, command: str, content: Any = None) -> None:
        self.outbound.emit(command, content)

    def deliver(self, command: str, content: Any = None) -> None:
        """Feed one host message into the renderer."""
        self.inbound.emit(command, content)

    def connect_dispatcher(self, dispatch: Callable[[str, Any], None]) -> None:
        self.inbound.connect(dispatch)
        LOGGER.debug("QtHostBridge: inbound connected to %s", getattr(dispatch, "__qualname__", dispatch))


__all__ = ["QtHostBridge"]
