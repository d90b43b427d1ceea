from __future__ import annotations
from typing import List

from PyQt6.QtCore import QThread, pyqtSignal

from ..engine import CompanyDeduplicator, DedupConfig


class DedupWorker(QThread):
    progress_signal = pyqtSignal(int)
    finished_signal = pyqtSignal(object)
    failed_signal = pyqtSignal(str)

    def __init__(self, names: List[str], cfg: DedupConfig):
        super().__init__()
        self.names = list(names)
        self.cfg = cfg

    def run(self):
        def cb(p: int):
            self.progress_signal.emit(p)

        try:
            result = CompanyDeduplicator(self.cfg).find_duplicates(self.names, progress_cb=cb)
        except Exception as e:  # reported to the UI thread
            self.failed_signal.emit(str(e))
            return
        self.finished_signal.emit(result)
