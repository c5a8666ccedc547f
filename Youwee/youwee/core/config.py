from __future__ import annotations

import json
import os
from pathlib import Path

from .models import AppConfig

APP_NAME = "Youwee"
APP_VERSION = "0.9.0"
INSTANCE_SERVER_NAME = "YouweeInstanceServer"

DEEP_LINK_SCHEME_PREFIX = "youwee://"
DEEP_LINK_DOWNLOAD_PREFIX = "youwee://download"
DEEP_LINK_VERSION_MARKER = "v=1"
DEEP_LINK_PAYLOAD_MARKER = "url="
MAX_EXTERNAL_LINK_LENGTH = 4096
MAX_PENDING_EXTERNAL_LINKS = 100

CONFIG_FILENAME = "Youwee_config.json"
CONFIG_SCHEMA_VERSION = 1

LOCK_TIMEOUT_SECONDS_MIN = 0.05
LOCK_TIMEOUT_SECONDS_MAX = 10.0
FORWARD_TIMEOUT_MS_MIN = 100
FORWARD_TIMEOUT_MS_MAX = 10000


def _paths():
    from . import paths as paths_module

    return paths_module


def _coerce_int(value: object, default: int, minimum: int, maximum: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = default
    return max(minimum, min(maximum, parsed))


def _coerce_float(value: object, default: float, minimum: float, maximum: float) -> float:
    if isinstance(value, bool):
        parsed = default
    else:
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            parsed = default
    if parsed != parsed:
        parsed = default
    return max(minimum, min(maximum, parsed))


def _coerce_bool(value: object, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off"}:
            return False
    return default


def default_config() -> AppConfig:
    return AppConfig(
        schema_version=CONFIG_SCHEMA_VERSION,
        lock_timeout_seconds=1.0,
        forward_timeout_ms=1500,
        single_instance_enabled=True,
    )


def _sanitize_payload(payload: dict[str, object]) -> AppConfig:
    defaults = default_config()
    return AppConfig(
        schema_version=CONFIG_SCHEMA_VERSION,
        lock_timeout_seconds=_coerce_float(
            payload.get("lock_timeout_seconds", defaults.lock_timeout_seconds),
            defaults.lock_timeout_seconds,
            LOCK_TIMEOUT_SECONDS_MIN,
            LOCK_TIMEOUT_SECONDS_MAX,
        ),
        forward_timeout_ms=_coerce_int(
            payload.get("forward_timeout_ms", defaults.forward_timeout_ms),
            defaults.forward_timeout_ms,
            FORWARD_TIMEOUT_MS_MIN,
            FORWARD_TIMEOUT_MS_MAX,
        ),
        single_instance_enabled=_coerce_bool(
            payload.get("single_instance_enabled"),
            default=defaults.single_instance_enabled,
        ),
    )


def config_path() -> Path:
    return _paths().runtime_storage_dir() / CONFIG_FILENAME


def _load_config_from_path(path: Path) -> AppConfig | None:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            return _sanitize_payload(raw)
    except (OSError, UnicodeError, json.JSONDecodeError, TypeError, ValueError):
        return None
    return None


def load_config(path: Path | None = None) -> AppConfig:
    target = path if path is not None else config_path()
    if target.exists():
        loaded = _load_config_from_path(target)
        if loaded is not None:
            return loaded
    return default_config()


def config_to_dict(config: AppConfig) -> dict[str, object]:
    return {
        "schema_version": CONFIG_SCHEMA_VERSION,
        "lock_timeout_seconds": float(config.lock_timeout_seconds),
        "forward_timeout_ms": int(config.forward_timeout_ms),
        "single_instance_enabled": bool(config.single_instance_enabled),
    }


def save_config(config: AppConfig, path: Path | None = None) -> str | None:
    payload = config_to_dict(config)
    target = path if path is not None else config_path()
    tmp_path = target.with_suffix(f"{target.suffix}.tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(str(tmp_path), str(target))
        return str(target)
    except (OSError, TypeError, ValueError):
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        return None


def load_or_create_config(path: Path | None = None) -> AppConfig:
    target = path if path is not None else config_path()
    if target.exists():
        return load_config(target)
    config = default_config()
    save_config(config, target)
    return config
