"""Snapshot diffing."""

from .comparator import Comparator, compare, merge

__all__ = ["Comparator", "compare", "merge"]
