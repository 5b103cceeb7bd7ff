"""Renderer settings and environment overrides.

The host process owns persisted configuration; the renderer only keeps
the handful of values it needs at runtime. Startup defaults come from
this module (optionally overridden through environment variables), and
the host's ``config`` messages then replace them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

__all__ = [
    "RendererSettings",
    "CONFIG_KEYS",
    "DEFAULT_LOCALE",
    "load_settings",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

_ENV_OVERRIDES: Mapping[str, str] = {
    "INKWELL_LOCALE": "locale",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "INKWELL_PANDOC": "pandoc_available",
    "INKWELL_PDFLATEX": "pdflatex_available",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Host configuration key -> RendererSettings field
CONFIG_KEYS: Mapping[str, str] = {
    "darkTheme": "dark_theme",
    "snippets": "snippets",
    "app_lang": "locale",
    "pandoc": "pandoc_available",
    "pdflatex": "pdflatex_available",
}


@dataclass(slots=True)
class RendererSettings:
    """Runtime settings mirrored from the host's configuration."""

    locale: str = DEFAULT_LOCALE
    dark_theme: bool = False
    snippets: bool = True
    pandoc_available: bool = False
    pdflatex_available: bool = False

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def update(self, **changes: Any) -> dict[str, Any]:
        """Apply ``changes`` and return the subset that actually changed.

        Raises:
            KeyError: If a change names an unknown field.
        """
        known = {f.name for f in fields(self)}
        changed: dict[str, Any] = {}
        for name, value in changes.items():
            if name not in known:
                raise KeyError(name)
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed[name] = value
        return changed


def load_settings(env: Mapping[str, str] | None = None) -> RendererSettings:
    """Return startup settings with environment overrides applied."""

    source = os.environ if env is None else env
    settings = RendererSettings()

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = source.get(env_name)
        if value:
            setattr(settings, field_name, value.strip())

    for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
        raw = source.get(env_name)
        if raw is None:
            continue
        flag = _parse_bool(raw)
        if flag is None:
            LOGGER.warning("Ignoring %s=%r: expected a boolean", env_name, raw)
            continue
        setattr(settings, field_name, flag)

    return settings


def _parse_bool(raw: str) -> bool | None:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None
