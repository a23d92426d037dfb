from __future__ import annotations

import json
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path("~/.config/quotesync/config.json").expanduser()

CONFIG_ENV_OVERRIDES = {
    "db_path": "QUOTESYNC_DB_PATH",
    "remote_url": "QUOTESYNC_REMOTE_URL",
    "remote_limit": "QUOTESYNC_REMOTE_LIMIT",
    "remote_category": "QUOTESYNC_REMOTE_CATEGORY",
    "remote_timeout_s": "QUOTESYNC_REMOTE_TIMEOUT_S",
    "sync_interval_s": "QUOTESYNC_SYNC_INTERVAL_S",
    "sync_enabled": "QUOTESYNC_SYNC_ENABLED",
    "post_on_add": "QUOTESYNC_POST_ON_ADD",
    "daemon_log": "QUOTESYNC_DAEMON_LOG",
}

INT_KEYS = {"remote_limit", "sync_interval_s"}
FLOAT_KEYS = {"remote_timeout_s"}
BOOL_KEYS = {"sync_enabled", "post_on_add"}


def get_config_path(path: Path | None = None) -> Path:
    candidate = path or Path(os.getenv("QUOTESYNC_CONFIG", DEFAULT_CONFIG_PATH))
    return candidate.expanduser()


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = get_config_path(path)
    if not config_path.exists():
        return {}
    raw = config_path.read_text()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid config json") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be an object")
    return data


def write_config_file(data: dict[str, Any], path: Path | None = None) -> Path:
    config_path = get_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return config_path


def get_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, env_var in CONFIG_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            overrides[key] = value
    return overrides


@dataclass
class QuoteSyncConfig:
    db_path: str = "~/.quotesync.sqlite"
    remote_url: str = "https://jsonplaceholder.typicode.com/posts"
    remote_limit: int = 5
    # Remote records carry no category of their own.
    remote_category: str = "Server"
    remote_timeout_s: float = 10.0
    sync_interval_s: int = 15
    sync_enabled: bool = True
    post_on_add: bool = True
    daemon_log: str | None = "~/.quotesync/sync-daemon.log"


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    if value.lower() in {"1", "true", "yes", "on"}:
        return True
    if value.lower() in {"0", "false", "off", "no"}:
        return False
    return default


def _parse_int(value: object, default: int, *, key: str) -> int:
    if value is None:
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default


def _parse_float(value: object, default: float, *, key: str) -> float:
    if value is None:
        return default
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid float for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default


def _coerce_bool(value: object, default: bool, *, key: str) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return _parse_bool(value, default)
    warnings.warn(f"Invalid bool for {key}: {value!r}", RuntimeWarning, stacklevel=2)
    return default


def load_config(path: Path | None = None) -> QuoteSyncConfig:
    cfg = QuoteSyncConfig()
    config_path = get_config_path(path)
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except json.JSONDecodeError:
            data = {}
        if isinstance(data, dict):
            cfg = _apply_dict(cfg, data)
    cfg = _apply_env(cfg)
    return cfg


def _apply_dict(cfg: QuoteSyncConfig, data: dict[str, Any]) -> QuoteSyncConfig:
    for key, value in data.items():
        if not hasattr(cfg, key):
            continue
        if key in INT_KEYS:
            setattr(cfg, key, _parse_int(value, getattr(cfg, key), key=key))
            continue
        if key in FLOAT_KEYS:
            setattr(cfg, key, _parse_float(value, getattr(cfg, key), key=key))
            continue
        if key in BOOL_KEYS:
            setattr(cfg, key, _coerce_bool(value, getattr(cfg, key), key=key))
            continue
        setattr(cfg, key, value)
    return cfg


def _apply_env(cfg: QuoteSyncConfig) -> QuoteSyncConfig:
    cfg.db_path = os.getenv("QUOTESYNC_DB_PATH", cfg.db_path)
    cfg.remote_url = os.getenv("QUOTESYNC_REMOTE_URL", cfg.remote_url)
    cfg.remote_limit = _parse_int(
        os.getenv("QUOTESYNC_REMOTE_LIMIT"), cfg.remote_limit, key="remote_limit"
    )
    cfg.remote_category = os.getenv("QUOTESYNC_REMOTE_CATEGORY", cfg.remote_category)
    cfg.remote_timeout_s = _parse_float(
        os.getenv("QUOTESYNC_REMOTE_TIMEOUT_S"), cfg.remote_timeout_s, key="remote_timeout_s"
    )
    cfg.sync_interval_s = _parse_int(
        os.getenv("QUOTESYNC_SYNC_INTERVAL_S"), cfg.sync_interval_s, key="sync_interval_s"
    )
    cfg.sync_enabled = _parse_bool(os.getenv("QUOTESYNC_SYNC_ENABLED"), cfg.sync_enabled)
    cfg.post_on_add = _parse_bool(os.getenv("QUOTESYNC_POST_ON_ADD"), cfg.post_on_add)
    cfg.daemon_log = os.getenv("QUOTESYNC_DAEMON_LOG", cfg.daemon_log)
    return cfg
