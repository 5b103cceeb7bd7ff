"""Service layer helpers (settings, spell-check checkers)."""

from .settings import CONFIG_KEYS, RendererSettings, load_settings
from .spellcheck import Checker, CheckerFactory, WordListChecker, default_checker_factory

__all__ = [
    "CONFIG_KEYS",
    "Checker",
    "CheckerFactory",
    "RendererSettings",
    "WordListChecker",
    "default_checker_factory",
    "load_settings",
]
