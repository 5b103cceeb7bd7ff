"""Application of host configuration values.

The host answers each startup ``config-get``/``config-get-env`` request
with one ``config`` message. Values are stored on
:class:`~inkwell.services.settings.RendererSettings`; the theme and
snippet keys additionally flip the UI away from its built-in default the
first time they arrive.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ...services.settings import CONFIG_KEYS
from ..events import SettingsChanged

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from .context import RendererContext

LOGGER = logging.getLogger(__name__)

# Keys whose first application may toggle the UI
_UI_TOGGLE_KEYS = frozenset({"darkTheme", "snippets"})


class ApplyConfigUseCase:
    """Applies one configuration key/value pair.

    Reapplying a key is harmless: plain values are overwritten, and the
    theme/snippet UI toggles fire at most once per session per key.

    Events Emitted:
        - SettingsChanged: When a stored value actually changes
    """

    __slots__ = ("_context", "_initialized")

    def __init__(self, context: RendererContext) -> None:
        self._context = context
        self._initialized: set[str] = set()

    def is_initialized(self, key: str) -> bool:
        return key in self._initialized

    def execute(self, key: str, value: Any) -> bool:
        """Apply ``key``; return False for keys the renderer does not know."""
        field_name = CONFIG_KEYS.get(key)
        if field_name is None:
            LOGGER.warning("Ignoring unknown configuration key %r", key)
            return False

        expected = str if field_name == "locale" else bool
        if not isinstance(value, expected):
            LOGGER.warning(
                "Rejected configuration %s=%r: expected %s", key, value, expected.__name__
            )
            return True

        if key in _UI_TOGGLE_KEYS:
            if key in self._initialized:
                LOGGER.debug("Configuration %s already applied; ignoring %r", key, value)
                return True
            self._initialized.add(key)
            changed = self._apply_ui_toggle(key, value)
        else:
            self._initialized.add(key)
            changed = self._context.settings.update(**{field_name: value})

        LOGGER.debug("Configuration %s=%r applied", key, value)
        if changed:
            self._context.event_bus.publish(SettingsChanged(settings=changed))
        return True

    def _apply_ui_toggle(self, key: str, enabled: bool) -> dict[str, Any]:
        settings = self._context.settings
        ui = self._context.ui
        if key == "darkTheme":
            # The UI starts light; settings change only when a toggle fires
            if enabled and not settings.dark_theme:
                for collaborator in ui.themed():
                    collaborator.toggle_theme()
                return settings.update(dark_theme=True)
            return {}

        # Snippets start visible
        if not enabled and settings.snippets:
            ui.preview.toggle_snippets()
            return settings.update(snippets=False)
        return {}


__all__ = ["ApplyConfigUseCase"]
