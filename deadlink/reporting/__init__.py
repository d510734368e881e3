"""Report formatting: structured dict and text with colors."""

from deadlink.reporting.plain import PlainRenderer, node_label, type_name
from deadlink.reporting.text import format_snapshot, should_use_color

__all__ = [
    "PlainRenderer",
    "format_snapshot",
    "node_label",
    "should_use_color",
    "type_name",
]
