"""Aho-Corasick multi-pattern matching over byte strings."""

__version__ = "0.1.0"
__all__ = ["api", "fast", "slow"]