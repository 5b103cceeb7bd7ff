"""Explicit context shared by the router and its use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from ...services.settings import RendererSettings
    from ..domain.path_index import PathIndex
    from ..domain.session_store import SessionState
    from ..domain.spellcheck_pipeline import SpellcheckPipeline
    from ..events import EventBus
    from ..infrastructure.host_channel import HostRequests
    from ..presentation.collaborators import Collaborators


@dataclass(slots=True)
class RendererContext:
    """Everything a command handler may read or change.

    One instance per renderer session; nothing here is module-global.
    """

    event_bus: EventBus
    path_index: PathIndex
    session: SessionState
    spellcheck: SpellcheckPipeline
    settings: RendererSettings
    host: HostRequests
    ui: Collaborators


__all__ = ["RendererContext"]
