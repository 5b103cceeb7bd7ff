"""State, inputs, and effects of the spell-check loading pipeline.

The pipeline is driven by :class:`PipelineInput` values and answers each
one with a tuple of :class:`PipelineEffect` values. Effects describe what
should happen next (ask the host for data, report progress) without
performing any I/O themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class PipelineStage(Enum):
    """Stage of the spell-check loading pipeline.

    Values:
        IDLE: No languages requested yet.
        AWAITING_AFFIX: An affix request is outstanding.
        AWAITING_DICTIONARY: A dictionary request is outstanding.
        READY: Every requested language has been processed.
    """

    IDLE = "idle"
    AWAITING_AFFIX = "awaiting-affix"
    AWAITING_DICTIONARY = "awaiting-dictionary"
    READY = "ready"


@dataclass(slots=True)
class PendingArtifact:
    """Raw data held for the language currently being loaded."""

    affix_data: bytes | None = None
    dictionary_data: bytes | None = None

    def clear(self) -> None:
        self.affix_data = None
        self.dictionary_data = None

    @property
    def is_empty(self) -> bool:
        return self.affix_data is None and self.dictionary_data is None


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True, slots=True)
class LanguagesRequested:
    """The host's language selection: tag -> should be checked."""

    languages: Mapping[str, bool]


@dataclass(frozen=True, slots=True)
class AffixReceived:
    data: bytes


@dataclass(frozen=True, slots=True)
class DictionaryReceived:
    data: bytes


PipelineInput = Union[LanguagesRequested, AffixReceived, DictionaryReceived]


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True, slots=True)
class RequestAffix:
    language: str


@dataclass(frozen=True, slots=True)
class RequestDictionary:
    language: str


@dataclass(frozen=True, slots=True)
class LanguageLoaded:
    language: str


@dataclass(frozen=True, slots=True)
class LanguageFailed:
    language: str
    reason: str


@dataclass(frozen=True, slots=True)
class PipelineReady:
    languages: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class InputRejected:
    """The input was not valid for the current stage; nothing changed."""

    input_name: str
    reason: str


PipelineEffect = Union[
    RequestAffix,
    RequestDictionary,
    LanguageLoaded,
    LanguageFailed,
    PipelineReady,
    InputRejected,
]


__all__ = [
    "PipelineStage",
    "PendingArtifact",
    "LanguagesRequested",
    "AffixReceived",
    "DictionaryReceived",
    "PipelineInput",
    "RequestAffix",
    "RequestDictionary",
    "LanguageLoaded",
    "LanguageFailed",
    "PipelineReady",
    "InputRejected",
    "PipelineEffect",
]
