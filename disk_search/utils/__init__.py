from .logger import get_logger, set_log_level, setup_logging
from .system_utils import format_bytes, get_config_dir, get_process_memory, open_path

__all__ = [
    "format_bytes",
    "get_config_dir",
    "get_logger",
    "get_process_memory",
    "open_path",
    "set_log_level",
    "setup_logging",
]
