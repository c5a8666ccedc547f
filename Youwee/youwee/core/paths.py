from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .config import APP_NAME


@lru_cache(maxsize=1)
def appdata_dir() -> Path:
    base = os.environ.get("LOCALAPPDATA") or os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base).resolve() / APP_NAME
    return Path.home() / APP_NAME


@lru_cache(maxsize=1)
def runtime_storage_dir() -> Path:
    target = appdata_dir()
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(
            f"Unable to create storage directory: {target}. "
            "Check folder permissions and available disk space."
        ) from exc
    return target
