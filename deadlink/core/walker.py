"""Field discovery for a single object.

The walker only knows how to list an object's direct object-typed children.
How fields are enumerated is a pluggable capability (``FieldEnumerator``);
the default reads the instance ``__dict__`` and every ``__slots__`` entry,
regardless of leading underscores.

Containers held in a field are expanded one level deep: ``items[3]`` or
``handlers[key]``. Containers nested inside containers are not followed.

Objects that cannot be weakly referenced (``@dataclass(slots=True)``, slotted
classes without ``__weakref__``) cannot be nodes, but their fields are read
through: their children are reported against the object being iterated, with
the longer path (``cache.payload``).
"""

from __future__ import annotations

import functools
import types
import weakref
from collections import deque
from typing import Any, Deque, Iterable, Iterator, List, Protocol, Tuple

# Values that are never graph nodes.
_SCALARS = (type(None), bool, int, float, complex, str, bytes, bytearray, memoryview, range, slice)
_SEQUENCES = (list, tuple, deque)
_SETS = (set, frozenset)
_CONTAINERS = _SEQUENCES + _SETS + (dict,)
_WEAK = (
    weakref.ReferenceType,
    weakref.ProxyType,
    weakref.CallableProxyType,
    weakref.WeakSet,
    weakref.WeakKeyDictionary,
    weakref.WeakValueDictionary,
    weakref.finalize,
)
_NEVER = _SCALARS + _CONTAINERS + _WEAK

# Recorded as nodes but never expanded.
OPAQUE_TYPES: Tuple[type, ...] = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.MethodWrapperType,
    types.ModuleType,
    functools.partial,
    type,
)
_OPAQUE = OPAQUE_TYPES + _CONTAINERS


class FieldEnumerator(Protocol):
    """Lists the ``(name, value)`` fields an object directly holds."""

    def __call__(self, obj: object) -> Iterable[Tuple[str, Any]]: ...


def _mangle_prefix(klass: type) -> str:
    return f"_{klass.__name__.lstrip('_')}"


def _unmangle(name: str, prefixes: Tuple[str, ...]) -> str:
    # _Owner__field -> __field, only for an Owner in the instance's MRO
    for prefix in prefixes:
        rest = name[len(prefix):]
        if name.startswith(prefix) and rest.startswith("__") and not rest.endswith("__"):
            return rest
    return name


def instance_fields(obj: object) -> Iterator[Tuple[str, Any]]:
    """Default enumerator: instance ``__dict__`` plus slot values along the MRO."""
    mro = type(obj).__mro__
    prefixes = tuple(_mangle_prefix(klass) for klass in mro if klass.__name__.strip("_"))
    seen = set()
    try:
        namespace = vars(obj)
    except TypeError:
        namespace = None
    if isinstance(namespace, dict):
        for name, value in list(namespace.items()):
            seen.add(name)
            yield _unmangle(name, prefixes), value
    for klass in mro:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"{_mangle_prefix(klass)}{slot}"
            if slot in seen:
                continue
            seen.add(slot)
            try:
                value = object.__getattribute__(obj, slot)
            except AttributeError:
                continue
            yield _unmangle(slot, prefixes), value


def is_reference(value: object) -> bool:
    """True for values that can be graph nodes: weakly referenceable, not scalar or container."""
    if isinstance(value, _NEVER):
        return False
    try:
        weakref.ref(value)
    except TypeError:
        return False
    return True


def is_opaque(obj: object) -> bool:
    return isinstance(obj, _OPAQUE)


def is_transparent(value: object) -> bool:
    """True for plain objects that hold fields but cannot be weakly referenced."""
    if isinstance(value, _NEVER) or is_opaque(value):
        return False
    return not is_reference(value)


def _container_items(value: object) -> Iterator[Tuple[Any, Any]]:
    if isinstance(value, dict):
        yield from list(value.items())
    elif isinstance(value, _SEQUENCES):
        yield from enumerate(list(value))
    elif isinstance(value, _SETS):
        # Sets carry no stable key.
        for element in list(value):
            yield "*", element


def iterate_object(obj: object, fields: FieldEnumerator = instance_fields) -> List[Tuple[Any, str]]:
    """Direct object-typed children of obj as ``(child, field_path)`` pairs.

    Transparent values (see ``is_transparent``) are read through, so a child
    held by one is returned with the combined path.
    """
    if is_opaque(obj):
        return []
    result: List[Tuple[Any, str]] = []
    pending: Deque[Tuple[Any, str]] = deque([(obj, "")])
    seen = {id(obj)}

    def visit(value: Any, path: str) -> None:
        if is_reference(value):
            result.append((value, path))
        elif is_transparent(value) and id(value) not in seen:
            seen.add(id(value))
            pending.append((value, f"{path}."))

    while pending:
        holder, prefix = pending.popleft()
        for name, value in fields(holder):
            path = f"{prefix}{name}"
            if isinstance(value, _CONTAINERS):
                for key, element in _container_items(value):
                    visit(element, f"{path}[{key}]")
            else:
                visit(value, path)
    return result


__all__ = [
    "FieldEnumerator",
    "OPAQUE_TYPES",
    "instance_fields",
    "is_opaque",
    "is_reference",
    "is_transparent",
    "iterate_object",
]
