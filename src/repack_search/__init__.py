"""Hybrid search over indexed and live game repack listings."""

__version__ = "0.1.0"
