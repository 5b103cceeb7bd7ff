"""Presentation layer: interfaces of the UI collaborators."""

from __future__ import annotations

from .collaborators import Collaborators

__all__ = ["Collaborators"]
