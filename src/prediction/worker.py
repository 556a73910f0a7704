"""
Background worker for vocabulary loading.
Runs in a separate QThread (or plain thread) so suggestions stay responsive
while a large word list is inserted.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .engine import DEFAULT_WORD_FREQUENCY, PredictionEngine
from .vocabulary import InsertReport, WordEntry, bulk_insert, load_word_frequencies


@dataclass
class LoadResult:
    generation: int
    report: InsertReport
    superseded: bool = False


class VocabularyWorker(QObject):
    """
    Worker class that feeds a vocabulary into an engine.
    Emits signals for progress and completion.

    Each run takes a new load generation from the engine; if another load
    starts meanwhile, this one runs to the end without writing the rest of
    its entries and reports ``superseded=True``.
    """
    # Signals
    progress = pyqtSignal(int)              # Entries processed so far
    word_rejected = pyqtSignal(str, str)    # (word, offending character)
    finished = pyqtSignal(object)           # Emits LoadResult
    error = pyqtSignal(str)

    def __init__(
        self,
        engine: PredictionEngine,
        entries: Optional[List[WordEntry]] = None,
        path: Optional[Path] = None,
        default_frequency: int = DEFAULT_WORD_FREQUENCY,
        progress_interval: int = 1000,
        parent=None,
    ):
        super().__init__(parent)
        self._engine = engine
        self._entries = entries
        self._path = path
        self._default_frequency = default_frequency
        self._progress_interval = progress_interval
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start_process(self):
        """Load and insert the vocabulary. Runs in the worker thread."""
        self._is_running = True
        generation = self._engine.begin_load()
        try:
            entries = self._entries
            if entries is None:
                if self._path is None:
                    self.error.emit("No vocabulary given")
                    return
                entries = load_word_frequencies(self._path, self._default_frequency)

            report = bulk_insert(
                self._engine,
                entries,
                on_progress=self.progress.emit,
                should_stop=lambda: not self._is_running,
                on_rejected=self.word_rejected.emit,
                progress_interval=self._progress_interval,
                generation=generation,
            )
            superseded = not self._engine.is_current_load(generation)
            self.finished.emit(LoadResult(generation, report, superseded))
        except Exception as e:
            self.error.emit(f"Vocabulary load failed: {str(e)}")
        finally:
            self._is_running = False

    def stop_process(self):
        """Signal the load to stop after the current word."""
        self._is_running = False
