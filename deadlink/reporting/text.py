"""
Text report for a Snapshot: colors and a short summary header.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from deadlink.core.snapshot import Snapshot
from deadlink.reporting.plain import PlainRenderer

# ANSI codes (no external deps)
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_CYAN = "\033[36m"


def _color(text: str, code: str, use_color: bool) -> str:
    return f"{code}{text}{_RESET}" if use_color else text


def should_use_color(force: Optional[bool] = None) -> bool:
    """Use color only when stdout is TTY, unless force is set."""
    if force is not None:
        return force
    return sys.stdout.isatty()


def format_snapshot(
    snapshot: Snapshot,
    *,
    title: str = "Deadlink Report",
    skip_empty: bool = False,
    use_color: bool = False,
    limit: Optional[int] = None,
) -> str:
    """Format a snapshot (usually a diff) as text. use_color from should_use_color()."""
    report = PlainRenderer(snapshot).render(skip_empty=skip_empty)
    refs = report["References"]

    c = lambda t, code: _color(t, code, use_color)

    lines: List[str] = [
        c(f"--- {title} ---", _CYAN),
        f"Total count: {report['Total count']}",
        "",
    ]
    shown = list(refs.items()) if limit is None else list(refs.items())[:limit]
    for label, details in shown:
        lines.append(c(label, _BOLD))
        for detail in details:
            code = _RED if detail.endswith("parent: gone") else _YELLOW
            path, _, parent = detail.rpartition(" parent: ")
            lines.append(f"  {path} {c('<-', _DIM)} {c(parent, code)}")
    if limit is not None and len(refs) > limit:
        lines.append(f"{c('...', _DIM)} and {len(refs) - limit} more")
    return "\n".join(lines).rstrip() + "\n"


__all__ = ["format_snapshot", "should_use_color"]
