"""UI-side renderer package: routing, domain state and host adapters."""

from .bootstrap import create_qt_renderer, create_renderer
from .events import EventBus

__all__ = ["EventBus", "create_qt_renderer", "create_renderer"]
