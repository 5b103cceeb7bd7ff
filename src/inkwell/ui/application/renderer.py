"""Renderer facade.

The Renderer is what the hosting shell talks to. It owns the
:class:`CommandRouter`, runs the startup handshake and exposes the
handful of queries and forwarding helpers the editor surface needs
(spell-check lookups, search progress, word counts).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .router import CommandRouter

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from ..infrastructure.host_channel import HostRequests
    from .context import RendererContext

LOGGER = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome"

# Requested in this order during init(); each is answered by a ``config`` message
STARTUP_CONFIG_KEYS: tuple[str, ...] = ("darkTheme", "snippets", "app_lang")
STARTUP_ENV_TOOLS: tuple[str, ...] = ("pandoc", "pdflatex")


class Renderer:
    """Facade over the router and the renderer context.

    Example:
        renderer = Renderer(context)
        renderer.init()
        renderer.handle_message("paths", tree_payload)
        renderer.typo_check("colour")
    """

    __slots__ = ("_context", "_router", "_initialized")

    def __init__(self, context: RendererContext, router: CommandRouter | None = None) -> None:
        self._context = context
        self._router = router or CommandRouter(context)
        self._initialized = False

    @property
    def context(self) -> RendererContext:
        return self._context

    @property
    def router(self) -> CommandRouter:
        return self._router

    @property
    def host(self) -> HostRequests:
        """Outbound request API, for collaborators that talk to the host."""
        return self._context.host

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> None:
        """Show the welcome overlay and ask the host for startup state.

        Emits, in order: one ``config-get`` per startup key, one
        ``config-get-env`` per external tool, ``get-paths`` and
        ``typo-request-lang``. Calling it twice is a no-op.
        """
        if self._initialized:
            LOGGER.debug("Renderer already initialized")
            return
        self._initialized = True

        self._context.ui.overlay.show(WELCOME_MESSAGE)
        host = self._context.host
        for key in STARTUP_CONFIG_KEYS:
            host.request_config(key)
        for tool in STARTUP_ENV_TOOLS:
            host.request_environment(tool)
        host.request_paths()
        host.request_spellcheck_languages()
        LOGGER.info("Renderer initialized; waiting for host state")

    def handle_message(self, command: str, content: Any = None) -> None:
        self._router.dispatch(command, content)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def typo_check(self, word: str) -> bool:
        return self._context.spellcheck.is_correct(word)

    def typo_suggest(self, word: str) -> list[str]:
        return self._context.spellcheck.suggest(word)

    def get_locale(self) -> str:
        return self._context.settings.locale

    # ------------------------------------------------------------------
    # Forwarding helpers
    # ------------------------------------------------------------------

    def begin_search(self, term: str) -> None:
        self._context.ui.preview.begin_search(term)

    def search_progress(self, index: int, count: int) -> None:
        self._context.ui.toolbar.search_progress(index, count)

    def end_search(self) -> None:
        self._context.ui.toolbar.end_search()

    def update_word_count(self, words: int) -> None:
        self._context.ui.toolbar.update_word_count(words)


__all__ = ["Renderer", "STARTUP_CONFIG_KEYS", "STARTUP_ENV_TOOLS", "WELCOME_MESSAGE"]
