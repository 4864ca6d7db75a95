"""Jotion: hierarchical note documents with ownership, publishing and trash."""

__version__ = "0.1.0"
