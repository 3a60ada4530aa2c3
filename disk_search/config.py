import json
import os
from pathlib import Path

from disk_search.utils.logger import get_logger
from disk_search.utils.system_utils import get_config_dir

logger = get_logger("Config")

CONFIG_FILENAME = "disk_search_config.json"

# Default configuration. Components receive a config dict at construction and
# fall back to this one.
CONFIG = {
    # Indexing
    "root_folder": str(Path.home().parent),
    "skip_directory": "Library",
    "index_filename": "new_index.json",
    "index_path": None,  # overrides <config dir>/<index_filename> when set

    # Search
    "minimum_score": 20,

    # Periodic refresh
    "refresh_interval_hours": 1,
    "startup_delay_seconds": 5,

    # Logging
    "log_dir": None,  # defaults to <config dir>/disk_search/logs
    "log_level": "INFO",
}


def default_config_path():
    return get_config_dir() / "disk_search" / CONFIG_FILENAME


def load_config(config_path=None):
    """Merge settings from the config file into CONFIG, if the file exists."""
    config_path = Path(config_path) if config_path else default_config_path()
    if not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using defaults")
        return CONFIG

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded_config = json.load(f)
        if not isinstance(loaded_config, dict):
            raise ValueError("top-level value must be an object")
        for key, value in loaded_config.items():
            if key not in CONFIG:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            CONFIG[key] = value
        logger.info(f"Loaded configuration from {config_path}")
    except (OSError, ValueError) as e:
        logger.error(f"Error loading config {config_path}: {e}")
    return CONFIG


def save_config(config_path=None):
    """Save current configuration to file"""
    config_path = Path(config_path) if config_path else default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(CONFIG, f, indent=2)
        logger.info(f"Configuration saved to {config_path}")
        return True
    except OSError as e:
        logger.error(f"Error saving config: {e}")
        return False


def resolve_index_path(config=None):
    """Effective location of the persisted index file."""
    config = config or CONFIG
    if config.get("index_path"):
        return Path(config["index_path"])
    return get_config_dir() / config["index_filename"]


def resolve_log_dir(config=None):
    config = config or CONFIG
    if config.get("log_dir"):
        return Path(config["log_dir"])
    return get_config_dir() / "disk_search" / "logs"


def validate_config(config=None):
    """Validate configuration settings"""
    config = config or CONFIG
    issues = []

    root = config.get("root_folder")
    if not root or not os.path.isdir(root):
        issues.append(f"Root folder not found: {root}")

    skip = config.get("skip_directory")
    if skip is not None and (not isinstance(skip, str) or os.sep in skip):
        issues.append(f"Skip directory must be a single path segment: {skip!r}")

    score = config.get("minimum_score")
    if isinstance(score, bool) or not isinstance(score, int):
        issues.append(f"Minimum score must be an integer: {score!r}")

    interval = config.get("refresh_interval_hours")
    if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
        issues.append(f"Refresh interval must be a positive number of hours: {interval!r}")

    delay = config.get("startup_delay_seconds")
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        issues.append(f"Startup delay must be a non-negative number: {delay!r}")

    if issues:
        logger.warning("Configuration validation issues:")
        for issue in issues:
            logger.warning(f"  - {issue}")

    return len(issues) == 0
