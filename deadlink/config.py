"""Runtime configuration for the tracker and reporting (env + optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(slots=True)
class DeadlinkConfig:
    gc_collect: bool = True
    skip_empty: bool = False
    color: Optional[bool] = None
    verbose: bool = False


def _env_bool(name: str, default: Optional[bool]) -> Optional[bool]:
    value = os.environ.get(name, "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def load_environment(env_file: Optional[Path] = None) -> bool:
    """Load a .env file (default: ./.env). Values in the file override exported ones."""
    path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if not path.is_file():
        return False
    return load_dotenv(path, override=True)


def load_config() -> DeadlinkConfig:
    """Build configuration from DEADLINK_* environment variables."""
    cfg = DeadlinkConfig()
    cfg.gc_collect = bool(_env_bool("DEADLINK_GC_COLLECT", cfg.gc_collect))
    cfg.skip_empty = bool(_env_bool("DEADLINK_SKIP_EMPTY", cfg.skip_empty))
    cfg.color = _env_bool("DEADLINK_COLOR", cfg.color)
    cfg.verbose = bool(_env_bool("DEADLINK_VERBOSE", cfg.verbose))
    return cfg


__all__ = ["DeadlinkConfig", "load_config", "load_environment"]
