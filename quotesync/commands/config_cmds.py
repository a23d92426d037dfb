from __future__ import annotations

import json
from dataclasses import asdict

from rich import print
from rich.markup import escape


def config_show_cmd(*, read_config_or_exit, load_config, get_env_overrides) -> None:
    """Print the effective configuration."""

    read_config_or_exit()
    config = load_config()
    print(escape(json.dumps(asdict(config), ensure_ascii=False, indent=2)))
    overrides = get_env_overrides()
    if overrides:
        print("[dim]Environment overrides:[/dim] " + ", ".join(sorted(overrides)))


def config_path_cmd(*, get_config_path) -> None:
    """Print the config file path."""

    print(str(get_config_path()))
