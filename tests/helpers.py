"""Shared test helpers and stub classes."""

from __future__ import annotations

from typing import Any, Callable


class FakeChecker:
    """Checker stub whose vocabulary is the whitespace-separated dictionary text.

    Example:
        pipeline = SpellcheckPipeline(checker_factory=FakeChecker.factory)
    """

    def __init__(self, language: str, affix_data: bytes, dictionary_data: bytes) -> None:
        self.language = language
        self.affix_data = affix_data
        self.words = set(dictionary_data.decode("utf-8").split())

    @classmethod
    def factory(cls, language: str, affix_data: bytes, dictionary_data: bytes) -> "FakeChecker":
        return cls(language, affix_data, dictionary_data)

    def check(self, word: str) -> bool:
        return word in self.words

    def suggest(self, word: str) -> list[str]:
        return sorted(w for w in self.words if w[:1] == word[:1] and w != word)


def collect(bus: Any, event_type: type) -> list[Any]:
    """Subscribe a list collector to ``event_type`` and return the list."""
    received: list[Any] = []
    bus.subscribe(event_type, received.append)
    return received


def failing_factory(message: str = "corrupt dictionary") -> Callable[..., Any]:
    def _factory(language: str, affix_data: bytes, dictionary_data: bytes) -> Any:
        raise ValueError(message)

    return _factory
