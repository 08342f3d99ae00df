# Copyright (c) Syntropy Systems
"""Configuration management for ladderlens."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import yaml

CONFIG_DIR_NAME = ".ladderlens"
CONFIG_FILE_NAME = "config.yaml"
SHARE_BASE_URL_ENV = "LADDERLENS_SHARE_BASE_URL"


@dataclass
class LadderlensConfig:
    """Configuration for ladderlens."""

    # Prefix for generated share links
    share_base_url: str = "http://localhost:8265"

    # Route that renders a shared record
    share_route: str = "/shared"

    # Dashboard bind address
    host: str = "127.0.0.1"
    port: int = 8265

    log_level: str = "WARNING"


def find_config_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .ladderlens directory by walking up from start_path.

    Returns None if no .ladderlens directory is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        config_dir = current / CONFIG_DIR_NAME
        if config_dir.is_dir():
            return config_dir
        current = current.parent

    # Check root
    config_dir = current / CONFIG_DIR_NAME
    if config_dir.is_dir():
        return config_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global ladderlens config directory (~/.ladderlens)."""
    return Path.home() / CONFIG_DIR_NAME


def _config_path(config_dir: Path | None) -> Path | None:
    if config_dir is not None:
        return config_dir / CONFIG_FILE_NAME

    found_dir = find_config_dir()
    if found_dir is not None:
        return found_dir / CONFIG_FILE_NAME

    global_config = get_global_config_dir() / CONFIG_FILE_NAME
    if global_config.exists():
        return global_config
    return None


def load_config(config_dir: Path | None = None) -> LadderlensConfig:
    """Load configuration from .ladderlens/config.yaml or defaults.

    Looks for config in:
    1. Provided config_dir
    2. Nearest .ladderlens directory walking up
    3. ~/.ladderlens/config.yaml
    4. Defaults

    ``LADDERLENS_SHARE_BASE_URL`` overrides the share base URL.
    """
    config = LadderlensConfig()
    config_path = _config_path(config_dir)

    if config_path is not None and config_path.exists():
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})

        share_base_url = data.get("share_base_url")
        if isinstance(share_base_url, str) and share_base_url:
            config.share_base_url = share_base_url
        share_route = data.get("share_route")
        if isinstance(share_route, str) and share_route:
            config.share_route = share_route
        host = data.get("host")
        if isinstance(host, str) and host:
            config.host = host
        port = data.get("port")
        if isinstance(port, int) and not isinstance(port, bool):
            config.port = port
        log_level = data.get("log_level")
        if isinstance(log_level, str) and log_level:
            config.log_level = log_level.upper()

    env_base_url = os.environ.get(SHARE_BASE_URL_ENV)
    if env_base_url:
        config.share_base_url = env_base_url

    return config
