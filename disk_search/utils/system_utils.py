import os
import subprocess
import sys
from pathlib import Path
from typing import Optional

import psutil

from disk_search.utils.logger import get_logger

logger = get_logger("SystemUtils")


def get_config_dir() -> Path:
    """
    Return the per-user configuration directory of the host platform.

    Windows uses %APPDATA%, macOS uses ~/Library/Application Support and
    everything else follows the XDG base directory convention.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config and os.path.isabs(xdg_config):
        return Path(xdg_config)
    return Path.home() / ".config"


def format_bytes(bytes_value: int) -> str:
    """Format bytes into human readable string."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if bytes_value < 1024.0:
            return f"{bytes_value:.1f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.1f} PB"


def get_process_memory() -> Optional[int]:
    """Resident set size of the current process in bytes, or None if unavailable."""
    try:
        return psutil.Process().memory_info().rss
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        logger.debug(f"Could not read process memory: {e}")
        return None


def open_path(path: str):
    """Open a file or directory with the platform's default application."""
    if sys.platform == "win32":
        os.startfile(path)
    elif sys.platform == "darwin":
        subprocess.call(["open", path])
    else:
        subprocess.call(["xdg-open", path])
    logger.info(f"Opened: {path}")
