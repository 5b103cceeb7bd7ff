"""Event bus and the events published by the renderer core.

Domain components publish what happened (tree replaced, current folder
moved, a dictionary finished loading) without knowing who listens. The
bus is synchronous: handlers run inside ``publish`` on the caller's
thread, which for the renderer is always the message loop.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, TYPE_CHECKING
from weakref import WeakMethod

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from typing import DefaultDict

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Handler = Callable[[E], None]


@dataclass(slots=True)
class Event:
    """Base class for all renderer events.

    Subclasses are slotted dataclasses::

        @dataclass(slots=True)
        class CurrentFolderChanged(Event):
            identifier: int | str | None
    """


# =============================================================================
# Path tree events
# =============================================================================


@dataclass(slots=True)
class TreeReplaced(Event):
    """Emitted after a new tree snapshot is installed and the session resynced.

    Attributes:
        root_id: Identifier of the new root node, or None for an empty tree.
        node_count: Number of nodes in the new snapshot.
    """

    root_id: int | str | None
    node_count: int


@dataclass(slots=True)
class CurrentFolderChanged(Event):
    """Emitted when the session's current folder reference changes."""

    identifier: int | str | None


@dataclass(slots=True)
class CurrentDocumentChanged(Event):
    """Emitted when the session's current document reference changes."""

    identifier: int | str | None


# =============================================================================
# Spell-check events
# =============================================================================


@dataclass(slots=True)
class SpellcheckLanguageLoaded(Event):
    """Emitted when one language's checker has been built."""

    language: str


@dataclass(slots=True)
class SpellcheckLanguageFailed(Event):
    """Emitted when a language's data could not be turned into a checker.

    Attributes:
        language: The language tag that was dropped.
        reason: Human-readable failure description.
    """

    language: str
    reason: str


@dataclass(slots=True)
class SpellcheckReady(Event):
    """Emitted once every requested language has been processed.

    Attributes:
        languages: Languages with a working checker, in load order.
    """

    languages: tuple[str, ...]


# =============================================================================
# Diagnostics
# =============================================================================


@dataclass(slots=True)
class ProtocolViolation(Event):
    """Emitted when a response arrives that the receiver did not ask for."""

    command: str
    reason: str


@dataclass(slots=True)
class UnrecognizedCommand(Event):
    """Emitted when the router receives a tag it has no handler for."""

    command: str


@dataclass(slots=True)
class CommandRejected(Event):
    """Emitted when a known command carries a malformed payload."""

    command: str
    reason: str


@dataclass(slots=True)
class SettingsChanged(Event):
    """Emitted when a host configuration value has been applied.

    Attributes:
        settings: Mapping of the changed setting names to their new values.
    """

    settings: dict[str, Any]


class EventBus(Generic[E]):
    """A typed publish-subscribe event bus.

    Bound-method handlers are held through ``WeakMethod`` so a collaborator
    that goes away unsubscribes itself; plain functions and lambdas are held
    strongly.

    Example::

        bus = EventBus()
        bus.subscribe(TreeReplaced, lambda event: print(event.node_count))
        bus.publish(TreeReplaced(root_id=1, node_count=4))

    Thread Safety:
        Not thread-safe. Publish from the message loop only.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: DefaultDict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Register ``handler`` for events of exactly ``event_type``."""
        self._handlers[event_type].append(_HandlerRef.create(handler))
        logger.debug(
            "Subscribed handler %s to event type %s",
            _handler_name(handler),
            event_type.__name__,
        )

    def unsubscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Remove the first registration of ``handler``; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers is None:
            return

        for i, handler_ref in enumerate(handlers):
            if handler_ref.matches(handler):
                handlers.pop(i)
                logger.debug(
                    "Unsubscribed handler %s from event type %s",
                    _handler_name(handler),
                    event_type.__name__,
                )
                return

    def publish(self, event: E) -> None:
        """Deliver ``event`` to its handlers in registration order.

        A handler that raises is logged and skipped; the remaining handlers
        still run.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)

        if handlers is None:
            logger.debug("No handlers for event type %s", event_type.__name__)
            return

        logger.debug(
            "Publishing %s to %d handler(s)",
            event_type.__name__,
            len(handlers),
        )

        dead_indices: list[int] = []
        for i, handler_ref in enumerate(list(handlers)):
            handler = handler_ref.resolve()
            if handler is None:
                dead_indices.append(i)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )

        for i in reversed(dead_indices):
            handlers.pop(i)

    def clear(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()
        logger.debug("Cleared all event handlers")

    def handler_count(self, event_type: type[E] | None = None) -> int:
        """Return the handler count for ``event_type``, or across all types."""
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())


class _HandlerRef:
    """Weak reference for bound methods, strong reference for everything else."""

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: Any, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> _HandlerRef:
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                pass
        return cls(handler, is_weak=False)

    def resolve(self) -> Handler | None:
        if not self._is_weak:
            return self._ref
        return self._ref()

    def matches(self, handler: Handler) -> bool:
        resolved = self.resolve()
        if resolved is None:
            return False
        return resolved == handler


def _handler_name(handler: Handler) -> str:
    if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
        return f"{type(handler.__self__).__name__}.{handler.__func__.__name__}"
    if hasattr(handler, "__name__"):
        return handler.__name__
    return repr(handler)


__all__ = [
    "Event",
    "EventBus",
    "Handler",
    "TreeReplaced",
    "CurrentFolderChanged",
    "CurrentDocumentChanged",
    "SpellcheckLanguageLoaded",
    "SpellcheckLanguageFailed",
    "SpellcheckReady",
    "ProtocolViolation",
    "UnrecognizedCommand",
    "CommandRejected",
    "SettingsChanged",
]
