"""Inkwell renderer core: host command routing, path index, session and spell-check loading."""

__version__ = "0.1.0"
