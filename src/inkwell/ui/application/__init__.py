"""Application layer for the renderer.

Use Cases:
    - ApplyConfigUseCase: Host configuration values, with one-time UI toggles
    - LoadSpellcheckUseCase: Drives the spell-check pipeline from ``typo-*`` messages

Router and facade:
    - CommandRouter: Exhaustive tag -> handler table for host messages
    - Renderer: Startup handshake, queries and forwarding helpers

All use cases receive the shared :class:`RendererContext` through their
constructor and may emit events on its bus.
"""

from __future__ import annotations

from .config_ops import ApplyConfigUseCase
from .context import RendererContext
from .renderer import Renderer
from .router import CommandRouter
from .spellcheck_ops import LoadSpellcheckUseCase

__all__: list[str] = [
    "ApplyConfigUseCase",
    "CommandRouter",
    "LoadSpellcheckUseCase",
    "Renderer",
    "RendererContext",
]
