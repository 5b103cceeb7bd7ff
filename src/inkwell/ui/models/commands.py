"""Inbound command tags, typed payloads, and payload validation.

Every message from the host is ``(command, content)``. :func:`parse_command`
turns that pair into a :class:`Command` whose payload is one of a small set
of typed variants, validating the raw content against a JSON schema first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Union

from jsonschema import Draft7Validator, ValidationError

from .paths import Identifier, PathNode, parse_node


class CommandTag(str, Enum):
    """Commands the renderer understands."""

    PATHS = "paths"
    PATHS_UPDATE = "paths-update"
    DIR_SET_CURRENT = "dir-set-current"
    DIR_FIND = "dir-find"
    DIR_OPEN = "dir-open"
    DIR_RENAME = "dir-rename"
    DIR_NEW = "dir-new"
    DIR_DELETE = "dir-delete"
    FILE_SET_CURRENT = "file-set-current"
    FILE_OPEN = "file-open"
    FILE_CLOSE = "file-close"
    FILE_SAVE = "file-save"
    FILE_RENAME = "file-rename"
    FILE_NEW = "file-new"
    FILE_FIND = "file-find"
    FILE_INSERT = "file-insert"
    FILE_DELETE = "file-delete"
    FILE_SEARCH_RESULT = "file-search-result"
    TOGGLE_THEME = "toggle-theme"
    TOGGLE_SNIPPETS = "toggle-snippets"
    TOGGLE_DIRECTORIES = "toggle-directories"
    TOGGLE_PREVIEW = "toggle-preview"
    EXPORT = "export"
    OPEN_PREFERENCES = "open-preferences"
    PREFERENCES = "preferences"
    CM_COMMAND = "cm-command"
    CONFIG = "config"
    TYPO_LANG = "typo-lang"
    TYPO_AFF = "typo-aff"
    TYPO_DIC = "typo-dic"
    QUICKLOOK = "quicklook"
    FILE_QUICKLOOK = "file-quicklook"
    NOTIFY = "notify"
    POMODORO = "pomodoro"
    ZOOM_RESET = "zoom-reset"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"

    @classmethod
    def lookup(cls, value: str) -> CommandTag | None:
        """Return the tag for ``value``, or None when it is not a known command."""
        try:
            return cls(value)
        except ValueError:
            return None


class PayloadError(ValueError):
    """Raised when a known command carries content of the wrong shape."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(f"{command}: {message}")
        self.command = command
        self.message = message


# =============================================================================
# Payload variants
# =============================================================================


@dataclass(frozen=True, slots=True)
class NoPayload:
    """Command carries no meaningful content."""


@dataclass(frozen=True, slots=True)
class TreePayload:
    root: PathNode


@dataclass(frozen=True, slots=True)
class NodePayload:
    """A single node, or None (``file-close`` and friends)."""

    node: PathNode | None


@dataclass(frozen=True, slots=True)
class TargetPayload:
    """Optional identifier of the entry to act on; None means "the current one"."""

    identifier: Identifier | None


@dataclass(frozen=True, slots=True)
class TogglePayload:
    """``emit`` is False when the host sent the ``no-emit`` marker."""

    emit: bool = True


@dataclass(frozen=True, slots=True)
class ConfigPayload:
    key: str
    value: Any


@dataclass(frozen=True, slots=True)
class LanguagesPayload:
    languages: Mapping[str, bool]


@dataclass(frozen=True, slots=True)
class BlobPayload:
    data: bytes


@dataclass(frozen=True, slots=True)
class OpaquePayload:
    """Content handed to a collaborator without interpretation."""

    content: Any


Payload = Union[
    NoPayload,
    TreePayload,
    NodePayload,
    TargetPayload,
    TogglePayload,
    ConfigPayload,
    LanguagesPayload,
    BlobPayload,
    OpaquePayload,
]


@dataclass(frozen=True, slots=True)
class Command:
    """A validated inbound message."""

    tag: CommandTag
    payload: Payload


# =============================================================================
# Schemas
# =============================================================================

_IDENTIFIER_SCHEMA: Dict[str, Any] = {"type": ["integer", "string"]}

TREE_NODE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {
        "node": {
            "type": "object",
            "required": ["hash"],
            "properties": {
                "hash": _IDENTIFIER_SCHEMA,
                "type": {"type": "string"},
                "name": {"type": "string"},
                "path": {"type": "string"},
                "children": {"type": "array", "items": {"$ref": "#/definitions/node"}},
            },
            "additionalProperties": True,
        }
    },
    "allOf": [{"$ref": "#/definitions/node"}],
}

_OPTIONAL_NODE_SCHEMA: Dict[str, Any] = {
    "anyOf": [
        {"type": "null"},
        {"type": "object", "maxProperties": 0},
        {"$ref": "#/definitions/node"},
    ],
    "definitions": TREE_NODE_SCHEMA["definitions"],
}

_TARGET_SCHEMA: Dict[str, Any] = {
    "anyOf": [
        {"type": "null"},
        {
            "type": "object",
            "properties": {"hash": _IDENTIFIER_SCHEMA},
            "additionalProperties": True,
        },
    ]
}

_TOGGLE_SCHEMA: Dict[str, Any] = {
    "anyOf": [{"type": "null"}, {"type": "string"}, {"type": "object"}],
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["key"],
    "properties": {"key": {"type": "string", "minLength": 1}, "value": {}},
    "additionalProperties": False,
}

LANGUAGES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "boolean"},
}

_QUICKLOOK_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["hash"],
    "properties": {"hash": _IDENTIFIER_SCHEMA},
    "additionalProperties": True,
}

_TREE_VALIDATOR = Draft7Validator(TREE_NODE_SCHEMA)
_OPTIONAL_NODE_VALIDATOR = Draft7Validator(_OPTIONAL_NODE_SCHEMA)
_TARGET_VALIDATOR = Draft7Validator(_TARGET_SCHEMA)
_TOGGLE_VALIDATOR = Draft7Validator(_TOGGLE_SCHEMA)
_CONFIG_VALIDATOR = Draft7Validator(CONFIG_SCHEMA)
_LANGUAGES_VALIDATOR = Draft7Validator(LANGUAGES_SCHEMA)
_QUICKLOOK_VALIDATOR = Draft7Validator(_QUICKLOOK_SCHEMA)

_NO_EMIT = "no-emit"


# =============================================================================
# Parsers
# =============================================================================


def _parse_none(content: Any) -> Payload:
    return NoPayload()


def _parse_tree(content: Any) -> Payload:
    _TREE_VALIDATOR.validate(content)
    return TreePayload(root=parse_node(content))


def _parse_optional_node(content: Any) -> Payload:
    _OPTIONAL_NODE_VALIDATOR.validate(content)
    if not content:
        return NodePayload(node=None)
    return NodePayload(node=parse_node(content))


def _parse_target(content: Any) -> Payload:
    _TARGET_VALIDATOR.validate(content)
    if content is None:
        return TargetPayload(identifier=None)
    return TargetPayload(identifier=content.get("hash"))


def _parse_quicklook(content: Any) -> Payload:
    _QUICKLOOK_VALIDATOR.validate(content)
    return TargetPayload(identifier=content["hash"])


def _parse_toggle(content: Any) -> Payload:
    _TOGGLE_VALIDATOR.validate(content)
    return TogglePayload(emit=content != _NO_EMIT)


def _parse_config(content: Any) -> Payload:
    _CONFIG_VALIDATOR.validate(content)
    return ConfigPayload(key=content["key"], value=content.get("value"))


def _parse_languages(content: Any) -> Payload:
    _LANGUAGES_VALIDATOR.validate(content)
    return LanguagesPayload(languages=dict(content))


def _parse_blob(content: Any) -> Payload:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return BlobPayload(data=bytes(content))
    if isinstance(content, str):
        return BlobPayload(data=content.encode("utf-8"))
    raise TypeError(f"expected bytes or str, got {type(content).__name__}")


def _parse_opaque(content: Any) -> Payload:
    return OpaquePayload(content=content)


_PARSERS: Dict[CommandTag, Callable[[Any], Payload]] = {
    CommandTag.PATHS: _parse_tree,
    CommandTag.PATHS_UPDATE: _parse_tree,
    CommandTag.DIR_SET_CURRENT: _parse_optional_node,
    CommandTag.DIR_FIND: _parse_none,
    CommandTag.DIR_OPEN: _parse_none,
    CommandTag.DIR_RENAME: _parse_target,
    CommandTag.DIR_NEW: _parse_target,
    CommandTag.DIR_DELETE: _parse_target,
    CommandTag.FILE_SET_CURRENT: _parse_optional_node,
    CommandTag.FILE_OPEN: _parse_optional_node,
    CommandTag.FILE_CLOSE: _parse_none,
    CommandTag.FILE_SAVE: _parse_none,
    CommandTag.FILE_RENAME: _parse_target,
    CommandTag.FILE_NEW: _parse_target,
    CommandTag.FILE_FIND: _parse_none,
    CommandTag.FILE_INSERT: _parse_opaque,
    CommandTag.FILE_DELETE: _parse_target,
    CommandTag.FILE_SEARCH_RESULT: _parse_opaque,
    CommandTag.TOGGLE_THEME: _parse_toggle,
    CommandTag.TOGGLE_SNIPPETS: _parse_toggle,
    CommandTag.TOGGLE_DIRECTORIES: _parse_none,
    CommandTag.TOGGLE_PREVIEW: _parse_none,
    CommandTag.EXPORT: _parse_none,
    CommandTag.OPEN_PREFERENCES: _parse_none,
    CommandTag.PREFERENCES: _parse_opaque,
    CommandTag.CM_COMMAND: _parse_opaque,
    CommandTag.CONFIG: _parse_config,
    CommandTag.TYPO_LANG: _parse_languages,
    CommandTag.TYPO_AFF: _parse_blob,
    CommandTag.TYPO_DIC: _parse_blob,
    CommandTag.QUICKLOOK: _parse_quicklook,
    CommandTag.FILE_QUICKLOOK: _parse_opaque,
    CommandTag.NOTIFY: _parse_opaque,
    CommandTag.POMODORO: _parse_none,
    CommandTag.ZOOM_RESET: _parse_none,
    CommandTag.ZOOM_IN: _parse_none,
    CommandTag.ZOOM_OUT: _parse_none,
}


def parse_command(tag: CommandTag, content: Any) -> Command:
    """Validate ``content`` for ``tag`` and wrap it in a :class:`Command`.

    Raises:
        PayloadError: If the content does not match the command's shape.
    """
    parser = _PARSERS[tag]
    try:
        payload = parser(content)
    except ValidationError as error:
        raise PayloadError(tag.value, _format_validation_error(error)) from error
    except (TypeError, ValueError) as exc:
        raise PayloadError(tag.value, str(exc)) from exc
    except RecursionError as exc:
        raise PayloadError(tag.value, "content is nested too deeply") from exc
    return Command(tag=tag, payload=payload)


def _format_validation_error(error: ValidationError) -> str:
    path = ".".join(str(part) for part in error.absolute_path)
    if path:
        return f"{path}: {error.message}"
    return error.message


__all__ = [
    "CommandTag",
    "Command",
    "PayloadError",
    "Payload",
    "NoPayload",
    "TreePayload",
    "NodePayload",
    "TargetPayload",
    "TogglePayload",
    "ConfigPayload",
    "LanguagesPayload",
    "BlobPayload",
    "OpaquePayload",
    "TREE_NODE_SCHEMA",
    "CONFIG_SCHEMA",
    "LANGUAGES_SCHEMA",
    "parse_command",
]
