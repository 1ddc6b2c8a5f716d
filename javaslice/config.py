"""Configuration loading for JavaSlice."""

import copy
import os
from pathlib import Path

import yaml
from rich.console import Console

console = Console()

DEFAULT_CONFIG_PATH = Path("config/config.yaml")

DEFAULT_CONFIG = {
    "report": {
        "base_url": "http://localhost:5001",
        "endpoint": "/v1/reports",
        "api_key": None,
        "timeout": 120.0,
        "project_id": "",
        "project_name": "",
        "use_raw": False,
    },
    "audit": {
        "enabled": True,
        "log_root": "logs",
        "max_bytes": 1024 * 1024,
        "max_entries": 50,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8000,
    },
}

# environment variable -> (section, key, type)
ENV_OVERRIDES = {
    "REPORT_BASE_URL": ("report", "base_url", str),
    "REPORT_API_KEY": ("report", "api_key", str),
    "DB_AUDIT_LOG_MAX_BYTES": ("audit", "max_bytes", int),
    "DB_AUDIT_LOG_MAX_DATA": ("audit", "max_entries", int),
}


def _merge(base: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def apply_env_overrides(config: dict, environ=None) -> dict:
    """Apply supported environment variables on top of ``config``."""
    environ = os.environ if environ is None else environ
    for name, (section, key, cast) in ENV_OVERRIDES.items():
        raw = environ.get(name)
        if not raw:
            continue
        try:
            config.setdefault(section, {})[key] = cast(raw)
        except ValueError:
            console.print(f"[yellow]Warning:[/yellow] Ignoring invalid {name}={raw!r}")
    return config


def load_config(config_path: Path | str | None = None, environ=None) -> dict:
    """Load configuration from YAML, layered over the built-in defaults.

    An explicitly given path must exist. Without one, ``config/config.yaml``
    is used when present.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            console.print(f"[red]Error:[/red] Config file not found: {path}")
            console.print("Copy config/config.example.yaml to config/config.yaml and edit it.")
            raise SystemExit(1)
    else:
        path = DEFAULT_CONFIG_PATH

    if path.exists():
        _merge(config, yaml.safe_load(path.read_text()) or {})

    return apply_env_overrides(config, environ)
