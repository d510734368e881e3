"""Graph capture layer: identity map, edges, field walker and Snapshot."""

from .edges import ROOT, Edge, EdgeKind, Reference, merge_edges
from .identity import IdentityMap
from .snapshot import Snapshot
from .walker import FieldEnumerator, instance_fields, iterate_object

__all__ = [
    "ROOT",
    "Edge",
    "EdgeKind",
    "FieldEnumerator",
    "IdentityMap",
    "Reference",
    "Snapshot",
    "instance_fields",
    "iterate_object",
    "merge_edges",
]
