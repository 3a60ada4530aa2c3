import threading
import time

from disk_search.config import CONFIG
from disk_search.utils.logger import get_logger
from disk_search.utils.system_utils import format_bytes, get_process_memory

logger = get_logger("Scheduler")


class RefreshScheduler:
    """Rebuild and persist the index on a fixed cadence in a background thread.

    The first cycle runs after the startup delay, later cycles on every
    interval boundary counted from it. A failed cycle is logged and the next
    one still runs. stop() interrupts the wait and ends the thread.
    """

    def __init__(self, service, config=None, interval_seconds=None, startup_delay=None, max_cycles=None):
        config = config or CONFIG
        self.service = service
        if interval_seconds is None:
            interval_seconds = config["refresh_interval_hours"] * 3600
        if startup_delay is None:
            startup_delay = config["startup_delay_seconds"]
        if interval_seconds <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self.startup_delay = max(0, startup_delay)
        self.max_cycles = max_cycles

        self.cycles_completed = 0
        self.cycles_failed = 0
        self._stop_event = threading.Event()
        self._thread = None
        self._cycle_lock = threading.Lock()

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start the refresh thread."""
        if self.is_running:
            logger.warning("Refresh scheduler already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="IndexRefresh", daemon=True)
        self._thread.start()
        logger.info(
            f"Started index refresh every {self.interval_seconds / 3600:g}h "
            f"(first in {self.startup_delay:g}s)"
        )

    def stop(self, timeout=None):
        """Signal the refresh thread to stop and wait for it."""
        self._stop_event.set()
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Refresh thread still busy with a cycle, it will exit afterwards")
        else:
            self._thread = None
            logger.info("Refresh scheduler stopped")

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)

    def run_cycle(self):
        """Run one refresh cycle now. Returns True on success."""
        with self._cycle_lock:
            logger.info("Refreshing index...")
            start_time = time.perf_counter()
            try:
                index = self.service.refresh()
            except Exception:
                self.cycles_failed += 1
                logger.exception("Index refresh failed, keeping the previous index")
                return False

            self.cycles_completed += 1
            duration = time.perf_counter() - start_time
            memory = get_process_memory()
            memory_text = format_bytes(memory) if memory is not None else "unknown"
            logger.info(
                f"Index refreshed and saved: {len(index)} entries in {duration:.2f}s, "
                f"process memory {memory_text}"
            )
            return True

    def _run(self):
        next_run = time.monotonic() + self.startup_delay
        cycles = 0

        while not self._stop_event.is_set():
            if self._stop_event.wait(max(0.0, next_run - time.monotonic())):
                break

            self.run_cycle()
            cycles += 1
            if self.max_cycles is not None and cycles >= self.max_cycles:
                break

            next_run += self.interval_seconds
            now = time.monotonic()
            if next_run <= now:
                missed = int((now - next_run) // self.interval_seconds) + 1
                next_run += missed * self.interval_seconds
                logger.warning(f"Refresh cycle overran, skipping {missed} scheduled run(s)")
