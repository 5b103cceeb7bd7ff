"""Spell-check capabilities consumed by the loading pipeline."""

from __future__ import annotations

import difflib
import logging
from typing import Callable, Iterable, Protocol, Sequence

LOGGER = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class Checker(Protocol):
    """One language's word-correctness and suggestion queries."""

    def check(self, word: str) -> bool:
        ...

    def suggest(self, word: str) -> Sequence[str]:
        ...


CheckerFactory = Callable[[str, bytes, bytes], Checker]
"""Builds a checker from ``(language, affix_data, dictionary_data)``."""


class WordListChecker:
    """Checker backed by the stems listed in a Hunspell ``.dic`` file.

    Affix rules are not expanded, so inflected forms that the dictionary
    only produces through affix flags are reported as misspelled.
    """

    __slots__ = ("language", "_words", "_lowered", "_affix_size")

    def __init__(self, language: str, affix_data: bytes, dictionary_data: bytes) -> None:
        self.language = language
        self._affix_size = len(affix_data)
        self._words = frozenset(_parse_dictionary(_decode(dictionary_data)))
        self._lowered = frozenset(word.lower() for word in self._words)
        LOGGER.debug(
            "WordListChecker(%s): %d entries, affix=%d bytes",
            language,
            len(self._words),
            self._affix_size,
        )

    def __len__(self) -> int:
        return len(self._words)

    def check(self, word: str) -> bool:
        candidate = word.strip()
        if not candidate:
            return True
        if candidate in self._words:
            return True
        # Sentence-initial capitals and all-caps words match a lowercase entry
        if candidate[:1].isupper() and candidate.lower() in self._lowered:
            return True
        return False

    def suggest(self, word: str) -> list[str]:
        candidate = word.strip()
        if not candidate:
            return []
        return difflib.get_close_matches(candidate, self._words, n=MAX_SUGGESTIONS, cutoff=0.7)


def default_checker_factory(language: str, affix_data: bytes, dictionary_data: bytes) -> Checker:
    """Return the stock :class:`WordListChecker`."""
    return WordListChecker(language, affix_data, dictionary_data)


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        # Older Hunspell dictionaries ship as ISO-8859-1
        return data.decode("latin-1")


def _parse_dictionary(text: str) -> Iterable[str]:
    lines = text.splitlines()
    if lines and lines[0].strip().isdigit():
        lines = lines[1:]
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        # word[/FLAGS][\tmorphology]
        stem = entry.split("\t", 1)[0].split(" ", 1)[0]
        stem = _split_flags(stem)
        if stem:
            yield stem


def _split_flags(entry: str) -> str:
    index = 0
    while True:
        index = entry.find("/", index)
        if index == -1:
            return entry
        if index > 0 and entry[index - 1] == "\\":
            index += 1
            continue
        return entry[:index].replace("\\/", "/")


__all__ = [
    "Checker",
    "CheckerFactory",
    "WordListChecker",
    "default_checker_factory",
    "MAX_SUGGESTIONS",
]
