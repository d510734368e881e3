"""Pytest configuration: project root on sys.path, and a helper to force collection."""
import gc
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))


@pytest.fixture
def collect():
    """Run the cyclic collector until nothing more is freed; returns the total freed."""

    def run() -> int:
        total = 0
        while True:
            freed = gc.collect()
            total += freed
            if not freed:
                return total

    return run
