"""Spell-check loading pipeline.

Loads dictionaries one language at a time: ask the host for the affix
data, then for the dictionary data, build a checker from the pair, and
move on to the next language that is not loaded yet. At most one request
is outstanding at any time; a response that never arrives leaves the
pipeline parked in its awaiting stage.

Stages::

    IDLE --begin--> AWAITING_AFFIX(lang) --affix--> AWAITING_DICTIONARY(lang)
         \\                 ^                               |
          \\                 +------- next not-ready -------+
           +--(nothing requested)--> READY <--- all loaded -+
"""

from __future__ import annotations

import logging
from typing import Mapping

from ...services.spellcheck import Checker, CheckerFactory, default_checker_factory
from ..models.spellcheck import (
    AffixReceived,
    DictionaryReceived,
    InputRejected,
    LanguageFailed,
    LanguageLoaded,
    LanguagesRequested,
    PendingArtifact,
    PipelineEffect,
    PipelineInput,
    PipelineReady,
    PipelineStage,
    RequestAffix,
    RequestDictionary,
)

LOGGER = logging.getLogger(__name__)


class SpellcheckPipeline:
    """Finite-state machine that assembles per-language checkers.

    All transitions go through :meth:`advance`, which returns the effects
    the caller must carry out (host requests, progress reports). The
    pipeline itself performs no I/O.
    """

    __slots__ = (
        "_factory",
        "_stage",
        "_language",
        "_load_state",
        "_pending",
        "_checkers",
        "_loaded",
        "_failed",
    )

    def __init__(self, checker_factory: CheckerFactory | None = None) -> None:
        self._factory: CheckerFactory = checker_factory or default_checker_factory
        self._stage = PipelineStage.IDLE
        self._language: str | None = None
        # Insertion order decides load order
        self._load_state: dict[str, bool] = {}
        self._pending = PendingArtifact()
        self._checkers: list[Checker] = []
        self._loaded: list[str] = []
        self._failed: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def stage(self) -> PipelineStage:
        return self._stage

    @property
    def current_language(self) -> str | None:
        """Language whose data is outstanding, if any."""
        return self._language

    @property
    def load_state(self) -> dict[str, bool]:
        """Copy of the language -> ready mapping, in load order."""
        return dict(self._load_state)

    @property
    def pending(self) -> PendingArtifact:
        return self._pending

    @property
    def checkers(self) -> tuple[Checker, ...]:
        return tuple(self._checkers)

    @property
    def loaded_languages(self) -> tuple[str, ...]:
        return tuple(self._loaded)

    @property
    def failed_languages(self) -> dict[str, str]:
        return dict(self._failed)

    def is_ready(self) -> bool:
        return self._stage is PipelineStage.READY

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def advance(self, event: PipelineInput) -> tuple[PipelineEffect, ...]:
        """Apply ``event`` to the current stage and return the resulting effects.

        Inputs that do not fit the current stage change nothing and yield a
        single :class:`InputRejected` effect.
        """
        if isinstance(event, LanguagesRequested):
            return self._begin(event.languages)
        if isinstance(event, AffixReceived):
            return self._on_affix(event.data)
        if isinstance(event, DictionaryReceived):
            return self._on_dictionary(event.data)
        return (self._reject(type(event).__name__, "unsupported pipeline input"),)

    def begin(self, languages: Mapping[str, bool]) -> tuple[PipelineEffect, ...]:
        return self.advance(LanguagesRequested(languages=languages))

    def on_affix_received(self, data: bytes) -> tuple[PipelineEffect, ...]:
        return self.advance(AffixReceived(data=data))

    def on_dictionary_received(self, data: bytes) -> tuple[PipelineEffect, ...]:
        return self.advance(DictionaryReceived(data=data))

    def _begin(self, languages: Mapping[str, bool]) -> tuple[PipelineEffect, ...]:
        if self._stage is not PipelineStage.IDLE:
            return (self._reject("languages", f"languages already requested (stage={self._stage.value})"),)

        for language, wanted in languages.items():
            if wanted:
                self._load_state[language] = False

        LOGGER.debug("SpellcheckPipeline.begin: languages=%s", list(self._load_state))
        return (self._request_next_or_finish(),)

    def _on_affix(self, data: bytes) -> tuple[PipelineEffect, ...]:
        if self._stage is not PipelineStage.AWAITING_AFFIX or self._language is None:
            return (self._reject("affix", f"no affix request outstanding (stage={self._stage.value})"),)

        self._pending.affix_data = data
        self._stage = PipelineStage.AWAITING_DICTIONARY
        LOGGER.debug(
            "SpellcheckPipeline: affix for %s received (%d bytes)",
            self._language,
            len(data),
        )
        return (RequestDictionary(language=self._language),)

    def _on_dictionary(self, data: bytes) -> tuple[PipelineEffect, ...]:
        if self._stage is not PipelineStage.AWAITING_DICTIONARY or self._language is None:
            return (self._reject("dictionary", f"no dictionary request outstanding (stage={self._stage.value})"),)

        language = self._language
        self._pending.dictionary_data = data
        affix = self._pending.affix_data or b""
        effects: list[PipelineEffect] = []

        try:
            checker = self._factory(language, affix, data)
        except Exception as exc:
            LOGGER.exception("SpellcheckPipeline: could not build checker for %s", language)
            del self._load_state[language]
            self._failed[language] = str(exc) or type(exc).__name__
            effects.append(LanguageFailed(language=language, reason=self._failed[language]))
        else:
            self._checkers.append(checker)
            self._loaded.append(language)
            self._load_state[language] = True
            effects.append(LanguageLoaded(language=language))
            LOGGER.debug("SpellcheckPipeline: checker for %s ready", language)
        finally:
            self._pending.clear()
            self._language = None

        effects.append(self._request_next_or_finish())
        return tuple(effects)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _next_not_ready(self) -> str | None:
        for language, ready in self._load_state.items():
            if not ready:
                return language
        return None

    def _request_next_or_finish(self) -> RequestAffix | PipelineReady:
        """Ask for the next language still loading, or become ready."""
        language = self._next_not_ready()
        if language is None:
            return self._finish()
        self._language = language
        self._stage = PipelineStage.AWAITING_AFFIX
        return RequestAffix(language=language)

    def _finish(self) -> PipelineReady:
        self._stage = PipelineStage.READY
        self._language = None
        LOGGER.info("Spellcheck ready: %s", ", ".join(self._loaded) or "no languages")
        return PipelineReady(languages=tuple(self._loaded))

    def _reject(self, input_name: str, reason: str) -> InputRejected:
        LOGGER.warning("SpellcheckPipeline ignored %s: %s", input_name, reason)
        return InputRejected(input_name=input_name, reason=reason)

    # ------------------------------------------------------------------
    # Checker queries
    # ------------------------------------------------------------------

    def is_correct(self, word: str) -> bool:
        """True when at least one loaded checker accepts ``word``.

        Before the pipeline is ready, and when no language produced a
        checker, every word counts as correct.
        """
        if not self.is_ready() or not self._checkers:
            return True
        return any(checker.check(word) for checker in self._checkers)

    def suggest(self, word: str) -> list[str]:
        """Suggestions from every checker, concatenated in load order."""
        if not self.is_ready():
            return []
        suggestions: list[str] = []
        for checker in self._checkers:
            suggestions.extend(checker.suggest(word))
        return suggestions


__all__ = ["SpellcheckPipeline"]
