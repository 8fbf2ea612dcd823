"""Rebuild laminate cross-section sketches as linked layers of plies."""

__version__ = "0.1.0"
__all__ = ["geometry", "layers", "sketch", "handler"]