"""Spell-check loading use case.

Feeds host responses into the :class:`SpellcheckPipeline` and carries out
the effects it returns: requests go to the host, progress goes to the
overlay, milestones go to the event bus.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Mapping

from ..events import (
    ProtocolViolation,
    SpellcheckLanguageFailed,
    SpellcheckLanguageLoaded,
    SpellcheckReady,
)
from ..models.spellcheck import (
    InputRejected,
    LanguageFailed,
    LanguageLoaded,
    PipelineEffect,
    PipelineReady,
    PipelineStage,
    RequestAffix,
    RequestDictionary,
)

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from .context import RendererContext

LOGGER = logging.getLogger(__name__)

_MESSAGES = {
    "get_lang": "Loading spellchecker languages…",
    "request_file": "Requesting dictionary files for {language}…",
    "init_done": "Spellchecker for {language} initialized",
    "init_failed": "Could not load the spellchecker for {language}",
}


class LoadSpellcheckUseCase:
    """Drives dictionary loading from ``typo-*`` host messages.

    Events Emitted:
        - SpellcheckLanguageLoaded: After each language's checker is built
        - SpellcheckLanguageFailed: When a language's data is unusable
        - SpellcheckReady: Once every requested language is processed
        - ProtocolViolation: When a response arrives that was not requested
    """

    __slots__ = ("_context",)

    def __init__(self, context: RendererContext) -> None:
        self._context = context

    def begin(self, languages: Mapping[str, bool], *, command: str = "typo-lang") -> None:
        if self._context.spellcheck.stage is PipelineStage.IDLE:
            self._context.ui.overlay.update(_MESSAGES["get_lang"])
        self._run(self._context.spellcheck.begin(languages), command)

    def affix_received(self, data: bytes, *, command: str = "typo-aff") -> None:
        self._run(self._context.spellcheck.on_affix_received(data), command)

    def dictionary_received(self, data: bytes, *, command: str = "typo-dic") -> None:
        self._run(self._context.spellcheck.on_dictionary_received(data), command)

    def _run(self, effects: Iterable[PipelineEffect], command: str) -> None:
        ui = self._context.ui
        host = self._context.host
        bus = self._context.event_bus

        for effect in effects:
            if isinstance(effect, RequestAffix):
                ui.overlay.update(_MESSAGES["request_file"].format(language=effect.language))
                host.request_affix(effect.language)
            elif isinstance(effect, RequestDictionary):
                host.request_dictionary(effect.language)
            elif isinstance(effect, LanguageLoaded):
                ui.overlay.update(_MESSAGES["init_done"].format(language=effect.language))
                bus.publish(SpellcheckLanguageLoaded(language=effect.language))
            elif isinstance(effect, LanguageFailed):
                ui.overlay.update(_MESSAGES["init_failed"].format(language=effect.language))
                bus.publish(SpellcheckLanguageFailed(language=effect.language, reason=effect.reason))
            elif isinstance(effect, PipelineReady):
                ui.overlay.close()
                bus.publish(SpellcheckReady(languages=effect.languages))
            elif isinstance(effect, InputRejected):
                LOGGER.warning("Unexpected %s response: %s", command, effect.reason)
                bus.publish(ProtocolViolation(command=command, reason=effect.reason))


__all__ = ["LoadSpellcheckUseCase"]
