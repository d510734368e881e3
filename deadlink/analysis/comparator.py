"""Snapshot diff.

``compare`` answers "what changed between these two points in the program's
life": unchanged nodes are dropped and only edges that are not common to both
sides are reported. ``merge`` is the older union view, where every shared node
carries the union of its old and new incoming edges.

Edge lists are treated as unordered multisets keyed by source identity, never
by path text.
"""

from __future__ import annotations

from deadlink.core.edges import diff_edges, merge_edges, same_sources
from deadlink.core.snapshot import Snapshot
from deadlink.logging import get_logger

_LOG = get_logger("comparator")


class Comparator:
    """Reduces two snapshots to a third one describing the delta."""

    def compare(self, a: Snapshot, b: Snapshot) -> Snapshot:
        """Strict difference of a (before) and b (after).

        - node only in a: kept unchanged (known before, not re-observed);
        - node in both with the same edge sources: dropped;
        - node in both otherwise: only the edges present on one side;
        - node only in b: inserted with its b edges.
        """
        result = a.copy()
        pending = b.copy()
        changed = 0
        for obj, edges_a in a.items():
            if obj not in pending:
                continue
            edges_b = pending[obj]
            del pending[obj]
            if same_sources(edges_a, edges_b):
                del result[obj]
                continue
            result[obj] = diff_edges(edges_a, edges_b)
            changed += 1
        added = self._absorb(result, pending)
        _LOG.debug(f"deadlink: compare -> {changed} changed, {added} new, {len(result)} total")
        return result

    def merge(self, a: Snapshot, b: Snapshot) -> Snapshot:
        """Union view: shared nodes carry both edge lists, deduplicated by source."""
        result = a.copy()
        pending = b.copy()
        for obj, edges_a in a.items():
            if obj not in pending:
                continue
            edges_b = pending[obj]
            del pending[obj]
            result[obj] = merge_edges(edges_a, edges_b)
        added = self._absorb(result, pending)
        _LOG.debug(f"deadlink: merge -> {added} new, {len(result)} total")
        return result

    @staticmethod
    def _absorb(result: Snapshot, pending: Snapshot) -> int:
        added = 0
        for obj, edges in pending.items():
            result[obj] = list(edges)
            added += 1
        return added


def compare(a: Snapshot, b: Snapshot) -> Snapshot:
    return Comparator().compare(a, b)


def merge(a: Snapshot, b: Snapshot) -> Snapshot:
    return Comparator().merge(a, b)


__all__ = ["Comparator", "compare", "merge"]
