"""
Leak tracker facade.

Holds one "before" Snapshot per tracker instance and diffs later states
against it. Callers keep the tracker (there is no process-wide instance)::

    tracker = LeakTracker()
    tracker.snap(app=app)
    run_workload(app)
    print(format_snapshot(tracker.leaks(app=app), skip_empty=True))
"""

from __future__ import annotations

import gc
from typing import Any, List, Optional

from deadlink.analysis.comparator import Comparator
from deadlink.config import DeadlinkConfig, load_config
from deadlink.core.snapshot import IgnoreRule, Snapshot
from deadlink.core.walker import FieldEnumerator, instance_fields
from deadlink.errors import NoSnapshotError
from deadlink.logging import configure_logging, get_logger
from deadlink.reporting.text import format_snapshot, should_use_color

_LOG = get_logger("tracker")


class LeakTracker:
    """Caller-held "before/after" helper over Snapshot and Comparator."""

    def __init__(
        self,
        config: Optional[DeadlinkConfig] = None,
        *,
        fields: FieldEnumerator = instance_fields,
        comparator: Optional[Comparator] = None,
    ) -> None:
        self.config = config or load_config()
        if self.config.verbose:
            configure_logging(verbose=True)
        self.comparator = comparator or Comparator()
        self._fields = fields
        self._ignore: List[IgnoreRule] = []
        self._snapshot: Optional[Snapshot] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    def _new_snapshot(self) -> Snapshot:
        snap = Snapshot(fields=self._fields)
        if self._ignore:
            snap.ignore(*self._ignore)
        return snap

    def ignore(self, *rules: IgnoreRule) -> None:
        """Ignore rules for the held snapshot and every snapshot built later."""
        self._ignore.extend(rules)
        if self._snapshot is not None:
            self._snapshot.ignore(*rules)

    def snap(self, /, *objects: Any, **labeled: Any) -> Snapshot:
        """Take the held snapshot on first call; extend it with new roots afterwards."""
        if self._snapshot is None:
            self._snapshot = self._new_snapshot()
        self._snapshot.update_map(*objects, **labeled)
        _LOG.debug(f"deadlink: tracker holds {len(self._snapshot)} node(s)")
        return self._snapshot

    def build(self, /, *objects: Any, **labeled: Any) -> Snapshot:
        """A fresh snapshot of the given roots with this tracker's ignore rules."""
        snap = self._new_snapshot()
        snap.update_map(*objects, **labeled)
        return snap

    def leaks(self, /, *objects: Any, **labeled: Any) -> Snapshot:
        """Snapshot the given roots now and strictly diff it against the held snapshot."""
        held = self._require()
        if self.config.gc_collect:
            gc.collect()
        current = self.build(*objects, **labeled)
        held.clear()
        current.clear()
        return self.comparator.compare(held, current)

    def compare(self, snapshot: Snapshot) -> Snapshot:
        """Strictly diff an externally built snapshot against the held one."""
        return self.comparator.compare(self._require(), snapshot)

    def report(self, snapshot: Snapshot, *, title: str = "Deadlink Report") -> str:
        """Text report for a diff using the configured skip_empty and color settings."""
        return format_snapshot(
            snapshot,
            title=title,
            skip_empty=self.config.skip_empty,
            use_color=should_use_color(self.config.color),
        )

    def reset(self) -> None:
        self._snapshot = None

    def _require(self) -> Snapshot:
        if self._snapshot is None:
            raise NoSnapshotError("No snapshot taken yet: call snap() first.")
        return self._snapshot


__all__ = ["LeakTracker"]
