"""Domain layer for the renderer.

Domain Managers:
    - PathIndex: Current folder/document tree snapshot and lookups
    - SessionState: Current document and folder selection
    - SpellcheckPipeline: Dictionary loading state machine and checker queries

All domain managers:
    - Receive dependencies via constructor injection
    - Have no direct dependencies on Qt or the host transport
"""

from __future__ import annotations

from .path_index import PathIndex
from .session_store import SessionState
from .spellcheck_pipeline import SpellcheckPipeline

__all__: list[str] = [
    "PathIndex",
    "SessionState",
    "SpellcheckPipeline",
]
