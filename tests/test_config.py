import json
from pathlib import Path

import pytest

from quotesync.config import (
    get_config_path,
    get_env_overrides,
    load_config,
    read_config_file,
    write_config_file,
)


def test_defaults_when_no_config(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.remote_url == "https://jsonplaceholder.typicode.com/posts"
    assert cfg.remote_limit == 5
    assert cfg.remote_category == "Server"
    assert cfg.sync_interval_s == 15
    assert cfg.sync_enabled is True


def test_read_config_file_rejects_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not-json}")
    with pytest.raises(ValueError, match="invalid config json"):
        read_config_file(config_path)


def test_read_config_file_rejects_non_object(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2]")
    with pytest.raises(ValueError, match="config must be an object"):
        read_config_file(config_path)


def test_write_config_file_roundtrip(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.json"
    data = {"remote_limit": 8, "remote_url": "https://example.test/posts"}
    write_config_file(data, config_path)
    assert json.loads(config_path.read_text()) == data
    assert read_config_file(config_path) == data


def test_load_config_applies_file_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "remote_limit": "8",
                "remote_timeout_s": 2,
                "sync_enabled": "off",
                "post_on_add": 0,
                "unknown_key": "ignored",
            }
        )
    )
    cfg = load_config(config_path)
    assert cfg.remote_limit == 8
    assert cfg.remote_timeout_s == 2.0
    assert cfg.sync_enabled is False
    assert cfg.post_on_add is False
    assert not hasattr(cfg, "unknown_key")


def test_load_config_ignores_broken_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{broken")
    assert load_config(config_path).remote_limit == 5


def test_env_overrides_win(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"sync_interval_s": 60, "remote_category": "File"}))
    monkeypatch.setenv("QUOTESYNC_SYNC_INTERVAL_S", "30")
    monkeypatch.setenv("QUOTESYNC_REMOTE_CATEGORY", "Env")
    monkeypatch.setenv("QUOTESYNC_SYNC_ENABLED", "no")

    cfg = load_config(config_path)

    assert cfg.sync_interval_s == 30
    assert cfg.remote_category == "Env"
    assert cfg.sync_enabled is False
    assert get_env_overrides()["sync_interval_s"] == "30"


def test_invalid_int_warns_and_keeps_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTESYNC_REMOTE_LIMIT", "lots")
    with pytest.warns(RuntimeWarning, match="remote_limit"):
        cfg = load_config(tmp_path / "missing.json")
    assert cfg.remote_limit == 5


def test_config_path_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "custom.json"
    monkeypatch.setenv("QUOTESYNC_CONFIG", str(target))
    assert get_config_path() == target
