"""Configuration loading with layered overrides."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from check_iostat.core.context import Context


# Built-in defaults, replaced key by key by config files
DEFAULTS: dict[str, Any] = {
    "warning": [1000, 5000],
    "critical": [2000, 10000],
    "interval": 8,
    "mount_table": "/proc/mounts",
    "iostat": "iostat",
    "log_dir": None,
}

# Keys holding a path or command; anything but a non-empty string is dropped
STRING_KEYS = {"mount_table", "iostat"}

CONFIG_ENV = "CHECK_IOSTAT_CONFIG"
SYSTEM_CONFIG = Path("/etc/check_iostat/config.yaml")


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def config_paths(context: "Context") -> list[Path]:
    """Config files in precedence order: env override -> user -> system."""
    paths = []
    explicit = context.get_env(CONFIG_ENV)
    if explicit:
        paths.append(Path(explicit))
    paths.append(context.home_dir() / ".config" / "check_iostat" / "config.yaml")
    paths.append(SYSTEM_CONFIG)
    return paths


def _usable(key: str, value: Any) -> bool:
    if key in STRING_KEYS:
        return isinstance(value, str) and bool(value)
    if key == "log_dir":
        return value is None or isinstance(value, str)
    return True


def load_config(context: "Context") -> dict[str, Any]:
    """
    Build the effective settings.

    Args:
        context: Execution context (for env and home lookups)

    Returns:
        DEFAULTS with every known key overridden by the highest-precedence
        config file that defines it. Unknown keys and path or command
        values that are not strings are ignored.
    """
    settings = dict(DEFAULTS)
    for path in reversed(config_paths(context)):
        data = load_config_file(path)
        settings.update({k: v for k, v in data.items() if k in DEFAULTS and _usable(k, v)})
    return settings

