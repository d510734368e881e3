"""Edge model: incoming references recorded for a tracked object.

An edge list is an unordered multiset. Two edges are "the same" when they come
from the same source object (the path text is not part of the key), and any
number of root markers collapse into one.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, List, Literal, Optional, Set, Union


class EdgeKind(Enum):
    """Marker for objects passed in directly as graph roots."""

    ROOT = "root"

    def __repr__(self) -> str:
        return "ROOT"


ROOT = EdgeKind.ROOT


@dataclass(frozen=True, eq=False)
class Reference:
    """Incoming reference: weak handle to the source object and the path used to reach it."""

    ref: weakref.ReferenceType
    path: str

    @classmethod
    def to(cls, source: object, path: str) -> "Reference":
        return cls(weakref.ref(source), path)

    @property
    def source(self) -> Optional[Any]:
        """The source object, or None once it has been collected."""
        return self.ref()

    @property
    def is_alive(self) -> bool:
        return self.ref() is not None

    def __iter__(self):
        yield self.ref
        yield self.path

    def __repr__(self) -> str:
        src = self.ref()
        owner = "gone" if src is None else type(src).__name__
        return f"Reference({owner}, {self.path!r})"


Edge = Union[Literal[EdgeKind.ROOT], Reference]


def is_edge(value: object) -> bool:
    if value is ROOT:
        return True
    return (
        isinstance(value, Reference)
        and isinstance(value.ref, weakref.ReferenceType)
        and isinstance(value.path, str)
        and bool(value.path)
    )


def is_edge_list(value: object) -> bool:
    return isinstance(value, list) and all(is_edge(e) for e in value)


def source_key(edge: Edge) -> Hashable:
    """Dedup key: ROOT, the identity of a live source, or the edge itself once the source is gone."""
    if edge is ROOT:
        return ROOT
    src = edge.ref()
    if src is None:
        return ("gone", id(edge))
    return id(src)


def merge_edges(old: List[Edge], new: List[Edge]) -> List[Edge]:
    """Union of both lists deduplicated by source identity; ROOT kept at most once."""
    result = list(old)
    seen: Set[Hashable] = {source_key(e) for e in old}
    for edge in new:
        key = source_key(edge)
        if key in seen:
            continue
        seen.add(key)
        result.append(edge)
    return result


def diff_edges(a: List[Edge], b: List[Edge]) -> List[Edge]:
    """Edges whose source appears on only one side: a-only edges, then b-only edges."""
    keys_a = {source_key(e) for e in a}
    keys_b = {source_key(e) for e in b}
    only_a = [e for e in a if source_key(e) not in keys_b]
    only_b = [e for e in b if source_key(e) not in keys_a]
    return only_a + only_b


def same_sources(a: List[Edge], b: List[Edge]) -> bool:
    return {source_key(e) for e in a} == {source_key(e) for e in b}


def reference_count(edges: List[Edge]) -> int:
    """Number of non-root edges."""
    return sum(1 for e in edges if e is not ROOT)


__all__ = [
    "ROOT",
    "Edge",
    "EdgeKind",
    "Reference",
    "diff_edges",
    "is_edge",
    "is_edge_list",
    "merge_edges",
    "reference_count",
    "same_sources",
    "source_key",
]
