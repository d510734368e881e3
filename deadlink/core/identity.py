"""Identity-keyed mapping that never keeps its keys alive.

Keys are compared by identity (``id()``), not by ``__eq__``/``__hash__``, so
unhashable objects and objects with custom equality are tracked correctly.
Each entry holds a weak reference to its key; when the key is collected the
entry disappears. A lookup only matches while the stored reference still
resolves to the very same object, so a recycled ``id()`` is never mistaken for
the old key.
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar

from deadlink.errors import InvalidKeyError

V = TypeVar("V")


class IdentityMap(Generic[V]):
    """Weak, identity-keyed ``object -> V`` mapping."""

    def __init__(self) -> None:
        self._data: Dict[int, Tuple[weakref.ReferenceType, V]] = {}

    def _remover(self, key: int) -> Callable[[weakref.ReferenceType], None]:
        selfref = weakref.ref(self)

        def remove(ref: weakref.ReferenceType) -> None:
            owner = selfref()
            if owner is None:
                return
            entry = owner._data.get(key)
            if entry is not None and entry[0] is ref:
                del owner._data[key]

        return remove

    def _entry(self, obj: object) -> Optional[Tuple[weakref.ReferenceType, V]]:
        entry = self._data.get(id(obj))
        if entry is None or entry[0]() is not obj:
            return None
        return entry

    def __contains__(self, obj: object) -> bool:
        return self._entry(obj) is not None

    def __getitem__(self, obj: object) -> V:
        entry = self._entry(obj)
        if entry is None:
            raise KeyError(obj)
        return entry[1]

    def get(self, obj: object, default: Any = None) -> Any:
        entry = self._entry(obj)
        return default if entry is None else entry[1]

    def __setitem__(self, obj: object, value: V) -> None:
        entry = self._entry(obj)
        if entry is not None:
            self._data[id(obj)] = (entry[0], value)
            return
        key = id(obj)
        try:
            ref = weakref.ref(obj, self._remover(key))
        except TypeError:
            raise InvalidKeyError(
                f"{type(obj).__name__!r} object cannot be tracked by identity"
            ) from None
        self._data[key] = (ref, value)

    def __delitem__(self, obj: object) -> None:
        if self._entry(obj) is None:
            raise KeyError(obj)
        del self._data[id(obj)]

    def __iter__(self) -> Iterator[Any]:
        for _key, obj, _value in self._live():
            yield obj

    def items(self) -> Iterator[Tuple[Any, V]]:
        """Lazy ``(obj, value)`` pairs over entries whose key is still alive."""
        for _key, obj, value in self._live():
            yield obj, value

    def _live(self) -> Iterator[Tuple[int, Any, V]]:
        # Entries are listed up front: weakref callbacks may drop keys mid-pass.
        for key, (ref, value) in list(self._data.items()):
            obj = ref()
            if obj is not None:
                yield key, obj, value

    def __len__(self) -> int:
        return sum(1 for ref, _value in list(self._data.values()) if ref() is not None)

    def __bool__(self) -> bool:
        return any(ref() is not None for ref, _value in list(self._data.values()))

    def purge(self) -> int:
        """Drop entries whose key is gone. Returns the number removed."""
        dead = [key for key, (ref, _value) in list(self._data.items()) if ref() is None]
        for key in dead:
            self._data.pop(key, None)
        return len(dead)

    def copy(self, copy_value: Optional[Callable[[V], V]] = None) -> "IdentityMap[V]":
        """New map over the same keys; values pass through copy_value when given."""
        clone: IdentityMap[V] = IdentityMap()
        for obj, value in self.items():
            clone[obj] = copy_value(value) if copy_value is not None else value
        return clone


__all__ = ["IdentityMap"]
