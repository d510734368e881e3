"""Object graph snapshot.

A Snapshot records, for every object reachable from a set of root objects,
the list of edges (incoming references) that point at it. Nothing is held
strongly: node keys, root registrations, ignored objects and edge sources are
all weak, so taking a snapshot never keeps an object alive.

Typical use::

    before = Snapshot.make(app=app)
    ...                           # exercise the program
    before.update_map()           # re-walk the same roots, merge new edges
    leaks = Comparator().compare(before, Snapshot.make(app=app))
"""

from __future__ import annotations

import weakref
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional, Set, Tuple, Union

from deadlink.core.edges import ROOT, Edge, Reference, is_edge_list, merge_edges
from deadlink.core.identity import IdentityMap
from deadlink.core.walker import FieldEnumerator, instance_fields, iterate_object
from deadlink.errors import InvalidKeyError, InvalidValueError
from deadlink.logging import get_logger

_LOG = get_logger("snapshot")

RootAlias = Union[int, str]
IgnoreRule = Union[type, Callable[[Any], bool], object]


def _require_identity(obj: object) -> None:
    try:
        weakref.ref(obj)
    except TypeError:
        raise InvalidKeyError(
            f"Key must be an object with identity, got {type(obj).__name__!r}."
        ) from None


def _labeled(objects: Tuple[Any, ...], labeled: Dict[str, Any]) -> List[Tuple[RootAlias, Any]]:
    pairs: List[Tuple[RootAlias, Any]] = list(enumerate(objects))
    pairs.extend(labeled.items())
    return pairs


class Snapshot:
    """Identity-keyed map ``object -> list[Edge]`` plus the root set that produced it."""

    def __init__(self, *, fields: FieldEnumerator = instance_fields) -> None:
        self._map: IdentityMap[List[Edge]] = IdentityMap()
        self._roots: IdentityMap[RootAlias] = IdentityMap()
        self._fields = fields

        self._ignore_classes: Set[type] = set()
        self._ignore_objects: IdentityMap[bool] = IdentityMap()
        self._ignore_callables: List[Callable[[Any], bool]] = []

    @classmethod
    def make(cls, /, *objects: Any, **labeled: Any) -> "Snapshot":
        """Snapshot the graphs reachable from the given roots.

        Positional roots are aliased by their index, keyword roots by the keyword.
        """
        snap = cls()
        snap._walk_roots(_labeled(objects, labeled))
        return snap

    def _spawn(self) -> "Snapshot":
        """Empty snapshot sharing this one's field enumerator and ignore rules."""
        snap = type(self)(fields=self._fields)
        snap._ignore_classes = set(self._ignore_classes)
        snap._ignore_objects = self._ignore_objects.copy()
        snap._ignore_callables = list(self._ignore_callables)
        return snap

    def _walk_roots(self, roots: List[Tuple[RootAlias, Any]]) -> None:
        for alias, obj in roots:
            _require_identity(obj)
            self._roots[obj] = alias
            self._link(obj)
        for alias, obj in roots:
            self.snap_object(obj, alias if isinstance(alias, str) else None)
        _LOG.debug(f"deadlink: walked {len(roots)} root(s), {len(self._map)} node(s) tracked")

    # --- mapping protocol -------------------------------------------------

    def __contains__(self, obj: object) -> bool:
        _require_identity(obj)
        return obj in self._map

    def __getitem__(self, obj: object) -> List[Edge]:
        _require_identity(obj)
        return self._map[obj]

    def get(self, obj: object, default: Any = None) -> Any:
        _require_identity(obj)
        return self._map.get(obj, default)

    def __setitem__(self, obj: object, edges: List[Edge]) -> None:
        _require_identity(obj)
        if not is_edge_list(edges):
            raise InvalidValueError("Value must be a list of edges (ROOT or Reference).")
        self._map[obj] = edges

    def __delitem__(self, obj: object) -> None:
        _require_identity(obj)
        del self._map[obj]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._map)

    def items(self) -> Iterator[Tuple[Any, List[Edge]]]:
        """Lazy ``(object, edges)`` pairs reflecting the current state."""
        return self._map.items()

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"<Snapshot nodes={len(self._map)} roots={len(self._roots)}>"

    def copy(self) -> "Snapshot":
        """Shallow structural clone: new containers, same edge entries, no re-walk."""
        clone = self._spawn()
        clone._map = self._map.copy(list)
        clone._roots = self._roots.copy()
        return clone

    __copy__ = copy

    # --- roots --------------------------------------------------------------

    def get_root_alias(self, obj: object) -> Optional[RootAlias]:
        return self._roots.get(obj)

    def roots(self) -> Iterator[Tuple[Any, RootAlias]]:
        return self._roots.items()

    # --- walking ------------------------------------------------------------

    def snap_object(self, obj: object, alias: Optional[str] = None) -> None:
        """Walk obj's reachable graph into this snapshot, breadth first.

        An object already present in the map gets the new edge but is not
        expanded again, which is what terminates the walk on cycles. Ignored
        objects are walked like any other; clear() removes them afterwards.
        """
        queue: Deque[Tuple[Any, str]] = deque([(obj, alias or type(obj).__name__)])
        while queue:
            parent, parent_path = queue.popleft()
            for child, field in iterate_object(parent, self._fields):
                path = f"{parent_path}.{field}"
                known = child in self._map
                self._link(child, parent, path)
                if not known:
                    queue.append((child, path))

    def _link(self, obj: object, parent: object = None, path: Optional[str] = None) -> None:
        edges = self._map.get(obj)
        if edges is None:
            edges = []
            self._map[obj] = edges
        edges.append(ROOT if parent is None else Reference.to(parent, path))

    def update_map(self, /, *objects: Any, **labeled: Any) -> None:
        """Re-walk every root and merge the fresh edges into this snapshot.

        Extra objects not yet registered become roots first. Nodes and edges
        are only ever added; see merge_edges for the dedup rule.
        """
        for alias, obj in _labeled(objects, labeled):
            _require_identity(obj)
            if obj not in self._roots:
                self._roots[obj] = alias

        before = len(self._map)
        fresh = self._spawn()
        fresh._walk_roots(list((alias, obj) for obj, alias in self._roots.items()))
        for obj, edges in fresh.items():
            current = self._map.get(obj)
            self._map[obj] = edges if current is None else merge_edges(current, edges)
        _LOG.debug(f"deadlink: update_map {before} -> {len(self._map)} node(s)")

    # --- ignore rules and pruning ----------------------------------------

    def ignore(self, *rules: IgnoreRule) -> None:
        """Register ignore rules: classes, predicates (any other callable) or objects."""
        for rule in rules:
            if isinstance(rule, type):
                self._ignore_classes.add(rule)
            elif callable(rule):
                self._ignore_callables.append(rule)
            else:
                _require_identity(rule)
                self._ignore_objects[rule] = True

    def is_ignored(self, target: object) -> bool:
        """True if target (an object or a class) matches any ignore rule."""
        if target in self._ignore_objects:
            return True
        klass = target if isinstance(target, type) else type(target)
        if klass in self._ignore_classes:
            return True
        return any(predicate(target) for predicate in self._ignore_callables)

    def clear(self, remove_ignored: bool = True, remove_roots: bool = False) -> None:
        """Prune stale edges.

        Drops edges whose source has been collected and, with remove_ignored,
        ignored nodes and edges coming from ignored sources. remove_roots also
        drops ROOT markers. A node is never removed just for running out of edges.
        """
        removed_nodes = removed_edges = 0
        for obj, edges in list(self._map.items()):
            if remove_ignored and self.is_ignored(obj):
                del self._map[obj]
                removed_nodes += 1
                continue
            kept: List[Edge] = []
            for edge in edges:
                if edge is ROOT:
                    if not remove_roots:
                        kept.append(edge)
                    continue
                source = edge.source
                if source is None:
                    continue
                if remove_ignored and self.is_ignored(source):
                    continue
                kept.append(edge)
            if len(kept) != len(edges):
                removed_edges += len(edges) - len(kept)
                self._map[obj] = kept
        self._map.purge()
        self._roots.purge()
        _LOG.debug(f"deadlink: clear removed {removed_nodes} node(s), {removed_edges} edge(s)")


__all__ = ["IgnoreRule", "RootAlias", "Snapshot"]
