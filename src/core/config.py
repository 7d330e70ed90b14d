"""
Weekly Update Runner - Configuration
Loads runner settings from an optional JSON file on top of built-in defaults.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WEEKLY_UPDATE_CONFIG"
NONINTERACTIVE_ENV_VAR = "WEEKLY_UPDATE_NONINTERACTIVE"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "weekly-update" / "config.json"

# Six days, so a weekly cadence never drifts into always being just late
DEFAULT_THRESHOLD_SECONDS = 6 * 24 * 60 * 60


@dataclass
class RunnerConfig:
    """Settings for one invocation of the runner."""
    log_file: Path = field(default_factory=lambda: Path.home() / "update_log.txt")
    last_run_file: Path = field(default_factory=lambda: Path.home() / ".last_update_run")
    threshold_seconds: int = DEFAULT_THRESHOLD_SECONDS
    required_space_kb: int = 1000000
    disk_check_path: Path = Path("/var/cache/apt/archives")
    network_check_url: str = "http://connectivitycheck.gstatic.com/generate_204"
    network_timeout: float = 10
    step_timeout: int = 1800
    privilege_command: list = field(default_factory=lambda: ["sudo"])
    flatpak_enabled: bool = True
    notifications_enabled: bool = True
    log_level: str = "INFO"

    def plugin_config(self) -> dict:
        """Configuration dict handed to package manager plugins."""
        return {
            "privilege_command": self.privilege_command,
            "timeout": self.step_timeout,
        }


_PATH_FIELDS = {"log_file", "last_run_file", "disk_check_path"}


def get_config_path() -> Path:
    """Config file location, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _coerce(name: str, expected: type, value):
    """
    Convert a JSON value to the type of the config field.

    Raises:
        ValueError: if the value cannot stand for the field
    """
    if name in _PATH_FIELDS:
        if not isinstance(value, str):
            raise ValueError("expected a path string")
        return Path(value).expanduser()
    if expected is bool:
        if not isinstance(value, bool):
            raise ValueError("expected true or false")
        return value
    if expected in (int, float):
        if isinstance(value, bool):
            raise ValueError("expected a number")
        try:
            return expected(value)
        except (TypeError, ValueError):
            raise ValueError("expected a number") from None
    if expected is list:
        if isinstance(value, str):
            return value.split()
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError("expected a list of strings")
        return value
    if not isinstance(value, str):
        raise ValueError("expected a string")
    return value


def load_config(config_path: Optional[Path] = None) -> RunnerConfig:
    """
    Load configuration from file or use defaults.

    Values of the wrong type are logged and replaced by their default.

    Args:
        config_path: Path to a JSON config file. Defaults to
                     ~/.config/weekly-update/config.json.

    Returns:
        RunnerConfig with file values applied over the defaults.
    """
    config_path = config_path or get_config_path()
    data = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            logger.warning(f"Failed to load config {config_path}: {e}")
            data = {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_path}: expected a JSON object")
        data = {}

    types = {f.name: f.type for f in fields(RunnerConfig)}
    values = {}
    for key, value in data.items():
        if key not in types:
            logger.warning(f"Unknown config key ignored: {key}")
            continue
        try:
            values[key] = _coerce(key, types[key], value)
        except ValueError as e:
            logger.warning(f"Invalid value for {key} ({value!r}), using default: {e}")

    config = RunnerConfig(**values)

    # Under the systemd timer there is no terminal to type a password into
    if os.environ.get(NONINTERACTIVE_ENV_VAR) and config.privilege_command[:1] == ["sudo"]:
        if "-n" not in config.privilege_command:
            config.privilege_command = ["sudo", "-n"] + config.privilege_command[1:]

    return config
