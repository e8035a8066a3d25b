"""Selection - only/except filtering of extracted example groups."""

from .selector import select

__all__ = ["select"]
