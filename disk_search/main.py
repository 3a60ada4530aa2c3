import sys
import tkinter as tk

from disk_search.config import CONFIG, load_config, resolve_log_dir, validate_config
from disk_search.indexer.scheduler import RefreshScheduler
from disk_search.service import get_default_service
from disk_search.ui.gui import SearchWindow
from disk_search.utils.logger import logger, setup_logging


def main():
    """Main entry point for Disk Search"""
    load_config()
    log_path = setup_logging(resolve_log_dir(), CONFIG["log_level"])
    if not validate_config():
        logger.error("Invalid configuration, fix the issues listed above and restart")
        return 1
    logger.info("Starting Disk Search...")

    service = get_default_service()
    scheduler = RefreshScheduler(service)

    try:
        scheduler.start()

        root = tk.Tk()
        app = SearchWindow(root, service, scheduler, log_path)
        root.protocol("WM_DELETE_WINDOW", app.on_close)

        logger.info("Application started successfully")
        root.mainloop()
    except Exception as e:
        logger.error(f"Critical error starting application: {e}")
        raise
    finally:
        scheduler.stop(timeout=2.0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
