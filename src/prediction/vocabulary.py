"""
Vocabulary feed.
Parses word/frequency lists (CSV lines or a JSON object) and bulk-inserts
them into an engine.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .engine import DEFAULT_WORD_FREQUENCY, PredictionEngine, UnsupportedWordError

logger = logging.getLogger(__name__)

WordEntry = Tuple[str, int]


@dataclass
class InsertReport:
    inserted: int = 0
    rejected: List[Tuple[str, str]] = field(default_factory=list)  # (word, char)
    stopped: bool = False
    superseded: int = 0    # entries dropped after a newer load started

    @property
    def processed(self) -> int:
        return self.inserted + len(self.rejected) + self.superseded


def _parse_frequency(value, default_frequency: int) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        return default_frequency


def parse_word_frequencies(lines: Iterable[str], default_frequency: int = DEFAULT_WORD_FREQUENCY) -> List[WordEntry]:
    """
    Parse ``word,frequency`` lines.

    Words are lower-cased, a frequency that is not an integer falls back to
    ``default_frequency``, and lines with fewer than two fields are skipped.
    """
    entries: List[WordEntry] = []
    for line in lines:
        fields = line.strip().split(",")
        if len(fields) < 2:
            continue
        word = fields[0].strip().lower()
        if not word:
            continue
        entries.append((word, _parse_frequency(fields[1], default_frequency)))
    return entries


def load_word_frequencies(path, default_frequency: int = DEFAULT_WORD_FREQUENCY) -> List[WordEntry]:
    """
    Load a vocabulary file: ``.json`` as a ``{word: frequency}`` object,
    anything else as CSV lines.

    Returns:
        Parsed entries; empty (with the error logged) if the file cannot be read.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object of word frequencies")
                entries = [
                    (str(word).lower(), _parse_frequency(freq, default_frequency))
                    for word, freq in data.items()
                    if str(word).strip()
                ]
            else:
                entries = parse_word_frequencies(f, default_frequency)
    except (OSError, ValueError) as e:
        logger.error("Could not read vocabulary %s: %s", path, e)
        return []
    logger.info("Loaded %d vocabulary entries from %s", len(entries), path)
    return entries


def bulk_insert(
    engine: PredictionEngine,
    entries: Iterable[WordEntry],
    on_progress: Optional[Callable[[int], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    on_rejected: Optional[Callable[[str, str], None]] = None,
    progress_interval: int = 1000,
    generation: Optional[int] = None,
) -> InsertReport:
    """
    Insert entries one by one; unsupported words are recorded and skipped.

    Args:
        engine: Target engine.
        entries: (word, frequency) pairs.
        on_progress: Called with the processed count every ``progress_interval``
            entries and once at the end.
        should_stop: Polled before each entry; True stops the load early.
        on_rejected: Called with (word, char) for every rejected word.
        progress_interval: Entries between progress callbacks.
        generation: Load generation from ``engine.begin_load()``. Once a newer
            load starts, the remaining entries are counted but not written.
    """
    report = InsertReport()
    for word, frequency in entries:
        if should_stop is not None and should_stop():
            report.stopped = True
            break
        try:
            if generation is None:
                engine.insert(word, frequency)
                report.inserted += 1
            elif engine.insert_for_load(word, frequency, generation):
                report.inserted += 1
            else:
                report.superseded += 1
        except UnsupportedWordError as e:
            logger.debug("Rejected vocabulary word: %s", e)
            report.rejected.append((e.word, e.char))
            if on_rejected is not None:
                on_rejected(e.word, e.char)
        if on_progress is not None and report.processed % progress_interval == 0:
            on_progress(report.processed)
    if on_progress is not None:
        on_progress(report.processed)
    logger.info("Inserted %d words, rejected %d, superseded %d%s", report.inserted,
                len(report.rejected), report.superseded,
                " (stopped early)" if report.stopped else "")
    return report
