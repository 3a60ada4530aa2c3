import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "disk_search.log"

# Create the main logger
logger = logging.getLogger("DiskSearch")


def setup_logging(log_dir=None, level="INFO"):
    """Configure file and console logging for the application.

    Returns the path of the log file.
    """
    log_dir = Path(log_dir) if log_dir else Path("logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
    set_log_level(level)
    return log_path


def get_logger(name):
    """Get a logger for a specific module"""
    return logging.getLogger(f"DiskSearch.{name}")


def set_log_level(level):
    """Set the logging level for all loggers"""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logger.setLevel(numeric_level)
    logger.info(f"Log level set to {str(level).upper()}")
