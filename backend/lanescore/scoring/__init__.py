"""Scoring engines for the supported games."""

from . import bowling

__all__ = [
    "bowling",
]
