"""Plain structured report over a Snapshot: counts plus per-node reference paths."""

from __future__ import annotations

from typing import Any, Dict, List

from deadlink.core.edges import ROOT, reference_count
from deadlink.core.snapshot import Snapshot


def type_name(obj: object) -> str:
    klass = type(obj)
    if klass.__module__ in ("builtins", "__main__"):
        return klass.__qualname__
    return f"{klass.__module__}.{klass.__qualname__}"


class PlainRenderer:
    """Builds a dict report: caller data, ``Total count`` and ``References``."""

    def __init__(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self._data: Dict[str, Any] = {}

    def data(self, **data: Any) -> "PlainRenderer":
        """Extra key/values copied into the report head."""
        self._data.update(data)
        return self

    def render(self, skip_empty: bool = False) -> Dict[str, Any]:
        result: Dict[str, Any] = dict(self._data)
        result["Total count"] = len(self.snapshot)
        refs: Dict[str, List[str]] = {}
        for obj, edges in self.snapshot.items():
            details: List[str] = []
            for edge in edges:
                if edge is ROOT:
                    continue
                parent = edge.source
                details.append(f"{edge.path} parent: {'gone' if parent is None else type_name(parent)}")
            if skip_empty and not details:
                continue
            refs[node_label(self.snapshot, obj, reference_count(edges))] = details
        result["References"] = refs
        return result


def node_label(snapshot: Snapshot, obj: object, count: int) -> str:
    """``[alias] <type> <identity> (<non-root edge count>)``; alias only for string aliases."""
    alias = snapshot.get_root_alias(obj)
    prefix = f"[{alias}] " if isinstance(alias, str) else ""
    return f"{prefix}{type_name(obj)} {id(obj):#x} ({count})"


__all__ = ["PlainRenderer", "node_label", "type_name"]
