"""Value types shared by the renderer layers: tree nodes, commands, pipeline steps."""

from __future__ import annotations

from .commands import Command, CommandTag, PayloadError, parse_command
from .paths import Identifier, NodeKind, PathNode, parse_node
from .spellcheck import PendingArtifact, PipelineStage

__all__: list[str] = [
    "Command",
    "CommandTag",
    "Identifier",
    "NodeKind",
    "PathNode",
    "PayloadError",
    "PendingArtifact",
    "PipelineStage",
    "parse_command",
    "parse_node",
]
