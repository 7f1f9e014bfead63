"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: Filtering a long stack on the GUI thread freezes the
   window. The worker pushes the whole run to a background thread.
2. Signals: Progress, results and errors reach the GUI through Qt Signals.
3. Cancellation: `stop()` raises a flag that the filter polls between slices.

Classes:
    FilterWorker: Runs StackFilter.apply on one stack.
"""
import logging

from PySide6.QtCore import QThread, Signal

from sincfilter.config import FilterConfig
from sincfilter.controller.driver import StackFilter
from sincfilter.errors import FilterCancelledError
from sincfilter.model.stack import ImageStack

logger = logging.getLogger(__name__)


class FilterWorker(QThread):
    # Signals to update the UI from the background
    progress_updated = Signal(int, str)  # e.g., (40, "Processing 4/10")
    result_ready = Signal(object)  # filtered ImageStack
    cancelled = Signal()
    error_occurred = Signal(str)

    def __init__(self, stack: ImageStack, config: FilterConfig):
        super().__init__()
        self.stack = stack
        self.config = config
        self.is_running = True

    def run(self):
        try:
            logger.info("Starting filter in background thread...")

            # ---- Progress callback ----
            def progress_callback(position: int, n_slices: int) -> None:
                percentage = int(100 * position / n_slices)
                self.progress_updated.emit(percentage, f"Processing {position}/{n_slices}")

            result = StackFilter(self.config).apply(
                self.stack,
                callback=progress_callback,
                abort=lambda: not self.is_running,
            )
            self.result_ready.emit(result)

        except FilterCancelledError as e:
            logger.info(str(e))
            self.cancelled.emit()

        except Exception as e:
            logger.error(f"Error in FilterWorker: {e}")
            self.error_occurred.emit(str(e))

    def stop(self) -> None:
        self.is_running = False
