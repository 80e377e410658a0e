"""
gui_workers.py - GUI Worker Threads

Input discovery and output writing run off the UI thread; results come back
through Qt signals
"""

import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from ..core import OutputPlan, discover_inputs, execute_plan

logger = logging.getLogger(__name__)


class ScanCancelled(Exception):
    pass


class ScanWorker(QThread):
    """Discovers image files under the input paths"""

    progress = Signal(str)          # Path of the file just found
    finished = Signal(list)         # List[InputEntry], not emitted when cancelled
    error = Signal(str)

    def __init__(
        self,
        input_paths: List[Path],
        include_hidden: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.input_paths = list(input_paths)
        self.include_hidden = include_hidden
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def _report(self, path: str):
        if self._cancelled:
            raise ScanCancelled()
        self.progress.emit(path)

    def run(self):
        try:
            entries = discover_inputs(
                self.input_paths,
                include_hidden=self.include_hidden,
                progress_callback=self._report,
            )
        except ScanCancelled:
            logger.debug("Input scan cancelled")
            return
        except Exception as e:
            logger.exception("Input scan failed")
            self.error.emit(str(e))
            return

        # A rescan may have been requested after the last file was found
        if not self._cancelled:
            self.finished.emit(entries)


class OutputWorker(QThread):
    """Writes an output plan"""

    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # OutputResult
    error = Signal(str)

    def __init__(
        self,
        plan: OutputPlan,
        log_dir: Optional[Path] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.log_dir = log_dir

    def run(self):
        try:
            result = execute_plan(
                self.plan,
                progress_callback=self.progress.emit,
                log_dir=self.log_dir,
            )
        except Exception as e:
            logger.exception("Writing outputs failed")
            self.error.emit(str(e))
            return
        self.finished.emit(result)
