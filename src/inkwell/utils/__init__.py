"""Utility helpers shared across the renderer."""
