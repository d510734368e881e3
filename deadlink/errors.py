"""Error taxonomy for snapshot map operations and the tracker facade."""

from __future__ import annotations


class DeadlinkError(Exception):
    """Base class for all deadlink errors."""


class InvalidKeyError(DeadlinkError, TypeError):
    """A map operation was given a value that has no object identity."""


class InvalidValueError(DeadlinkError, ValueError):
    """A map assignment was given something other than an edge list."""


class NoSnapshotError(DeadlinkError, RuntimeError):
    """The tracker was asked for a diff before any snapshot was taken."""


__all__ = ["DeadlinkError", "InvalidKeyError", "InvalidValueError", "NoSnapshotError"]
