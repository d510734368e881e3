"""Deadlink: runtime object-graph leak detector.

Layout:

- deadlink/core       - Snapshot, edges, field walker, identity map
- deadlink/analysis   - Comparator (strict diff and union merge)
- deadlink/reporting  - structured and text reports
- deadlink/tracker    - LeakTracker before/after facade
"""

from deadlink.analysis.comparator import Comparator
from deadlink.core.edges import ROOT, Reference
from deadlink.core.snapshot import Snapshot
from deadlink.errors import DeadlinkError, InvalidKeyError, InvalidValueError, NoSnapshotError
from deadlink.reporting import PlainRenderer, format_snapshot
from deadlink.tracker import LeakTracker

__version__ = "0.1.0"

__all__ = [
    "ROOT",
    "Comparator",
    "DeadlinkError",
    "InvalidKeyError",
    "InvalidValueError",
    "LeakTracker",
    "NoSnapshotError",
    "PlainRenderer",
    "Reference",
    "Snapshot",
    "format_snapshot",
]
