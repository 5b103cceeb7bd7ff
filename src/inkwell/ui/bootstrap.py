"""Renderer bootstrap module.

This module provides the factory function that creates and wires together
every component of the renderer, returning a facade ready to receive host
messages.

The bootstrap process:
1. Creates the event bus
2. Instantiates the domain managers
3. Wraps the host channel in the outbound request API
4. Builds the explicit context, the router and the facade

:func:`create_qt_renderer` does the same over a :class:`QtHostBridge` and
connects the bridge's inbound signal to the renderer.

Usage:
    from inkwell.ui.bootstrap import create_renderer
    from inkwell.ui.infrastructure import RecordingHostChannel

    renderer = create_renderer(RecordingHostChannel())
    renderer.init()
    renderer.handle_message("paths", tree)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..services.settings import RendererSettings
from .application.context import RendererContext
from .application.renderer import Renderer
from .application.router import CommandRouter
from .domain.path_index import PathIndex
from .domain.session_store import SessionState
from .domain.spellcheck_pipeline import SpellcheckPipeline
from .events import EventBus
from .infrastructure.host_channel import HostRequests
from .infrastructure.qt_bridge import QtHostBridge
from .presentation.collaborators import Collaborators

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from ..services.spellcheck import CheckerFactory
    from .infrastructure.host_channel import HostChannel

_LOGGER = logging.getLogger(__name__)


def create_renderer(
    channel: HostChannel,
    *,
    ui: Collaborators | None = None,
    checker_factory: CheckerFactory | None = None,
    settings: RendererSettings | None = None,
    event_bus: EventBus | None = None,
) -> Renderer:
    """Create and wire all renderer components.

    Args:
        channel: Transport for outbound requests.
        ui: UI collaborators. Defaults to logging stand-ins, which is what
            headless runs (replay, tests) want.
        checker_factory: Builds one checker per loaded language. Defaults to
            the word-list checker.
        settings: Startup settings. Defaults to built-in values.
        event_bus: Bus to publish on, for callers that subscribe before
            the first message arrives.

    Returns:
        The :class:`Renderer` facade; its ``context`` exposes every part.
    """
    _LOGGER.debug("Bootstrapping renderer...")

    # =========================================================================
    # 1. Event bus
    # =========================================================================
    bus = event_bus or EventBus()

    # =========================================================================
    # 2. Domain managers
    # =========================================================================
    path_index = PathIndex()
    session = SessionState(event_bus=bus)
    spellcheck = SpellcheckPipeline(checker_factory=checker_factory)

    # =========================================================================
    # 3. Outbound request API
    # =========================================================================
    host = HostRequests(channel)

    # =========================================================================
    # 4. Context, router, facade
    # =========================================================================
    context = RendererContext(
        event_bus=bus,
        path_index=path_index,
        session=session,
        spellcheck=spellcheck,
        settings=settings or RendererSettings(),
        host=host,
        ui=ui or Collaborators(),
    )
    renderer = Renderer(context, CommandRouter(context))
    _LOGGER.debug("Renderer ready")
    return renderer


def create_qt_renderer(
    bridge: QtHostBridge | None = None,
    *,
    ui: Collaborators | None = None,
    checker_factory: CheckerFactory | None = None,
    settings: RendererSettings | None = None,
    event_bus: EventBus | None = None,
) -> tuple[Renderer, QtHostBridge]:
    """Create a renderer that talks to the host over Qt signals.

    The bridge carries outbound requests on its ``outbound`` signal, and its
    ``inbound`` signal is connected to :meth:`Renderer.handle_message`, so
    :meth:`QtHostBridge.deliver` is all the host glue needs to call.

    Returns:
        The renderer and the bridge it is connected to.
    """
    if bridge is None:
        bridge = QtHostBridge()
    renderer = create_renderer(
        bridge,
        ui=ui,
        checker_factory=checker_factory,
        settings=settings,
        event_bus=event_bus,
    )
    bridge.connect_dispatcher(renderer.handle_message)
    return renderer, bridge


__all__ = ["create_qt_renderer", "create_renderer"]
