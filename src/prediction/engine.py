"""
Word prediction engine interface.
Engines resolve an ambiguous key sequence (each key stands for a group of
letters) into word candidates ranked by frequency.
"""
import dataclasses
import logging
import re
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Sequence

from gestures.layouts import GROUPING_6_KEYS, LetterGrouping

logger = logging.getLogger(__name__)

DEFAULT_WORD_FREQUENCY = 99999

_WORD_PATTERN = re.compile(r"^[A-Za-z]+$")


class EngineType(Enum):
    CUSTOM = "custom"
    NATIVE = "native"
    HYBRID = "hybrid"

    @property
    def display_name(self) -> str:
        return _ENGINE_NAMES[self][0]

    @property
    def description(self) -> str:
        return _ENGINE_NAMES[self][1]


_ENGINE_NAMES = {
    EngineType.CUSTOM: ("Custom Trie", "Exact-length matches from a frequency-sorted trie"),
    EngineType.NATIVE: ("Dictionary", "Dictionary-backed completions with a result cache"),
    EngineType.HYBRID: ("Hybrid", "Trie matches and dictionary completions ranked together"),
}


class WordCandidate(NamedTuple):
    text: str
    score: int


class UnsupportedWordError(ValueError):
    """A word contains a character the active letter grouping cannot type."""

    def __init__(self, word: str, char: str):
        self.word = word
        self.char = char
        super().__init__(f"Unsupported character {char!r} in word {word!r}")


@dataclass
class EngineMetrics:
    query_count: int = 0
    total_response_time: float = 0.0
    cache_hits: int = 0

    @property
    def average_response_time(self) -> float:
        """Mean suggest() latency in seconds."""
        if self.query_count == 0:
            return 0.0
        return self.total_response_time / self.query_count

    @property
    def cache_hit_rate(self) -> float:
        if self.query_count == 0:
            return 0.0
        return self.cache_hits / self.query_count


def build_key_map(grouping: LetterGrouping, two_strokes: bool) -> Dict[str, int]:
    """
    Map every letter to the key value the engine indexes it under.

    Two-stroke layouts enter concrete letters, so the key value is the
    letter's code point; other layouts use the group index.
    """
    key_map: Dict[str, int] = {}
    for letters in grouping:
        for letter in letters:
            key_map[letter] = ord(letter) if two_strokes else grouping.key_for(letter)
    return key_map


def is_word_valid(word: str) -> bool:
    return bool(_WORD_PATTERN.match(word))


class PredictionEngine(ABC):
    """
    Base class for word prediction engines.

    Subclasses implement _suggest(), insert() and contains(); the base
    class owns the letter grouping, the lock and the query metrics.
    All public methods are safe to call from a loader thread while the
    UI thread queries suggestions.
    """

    engine_type: EngineType = EngineType.CUSTOM

    def __init__(self, grouping: LetterGrouping = GROUPING_6_KEYS, two_strokes: bool = False):
        self._lock = threading.RLock()
        self._grouping = grouping
        self._two_strokes = two_strokes
        self._key_map = build_key_map(grouping, two_strokes)
        self._metrics = EngineMetrics()
        self._load_generation = 0

    @property
    def is_available(self) -> bool:
        return True

    @property
    def grouping(self) -> LetterGrouping:
        return self._grouping

    @property
    def two_strokes(self) -> bool:
        return self._two_strokes

    @property
    def metrics(self) -> EngineMetrics:
        """Snapshot of the query metrics."""
        with self._lock:
            return dataclasses.replace(self._metrics)

    def suggest(self, keys: Sequence[int]) -> List[WordCandidate]:
        """
        Candidates for a key sequence, best first.

        Never raises: an engine failure is logged and yields no candidates.
        """
        if not keys:
            return []
        start = time.perf_counter()
        try:
            with self._lock:
                results = self._suggest(list(keys))
        except Exception:
            logger.exception("Suggestion query failed [engine=%s, keys=%s]",
                             self.engine_type.value, list(keys))
            results = []
        elapsed = time.perf_counter() - start
        with self._lock:
            self._metrics.query_count += 1
            self._metrics.total_response_time += elapsed
        return results

    def set_key_letter_grouping(self, grouping: LetterGrouping, two_strokes: bool = False):
        """Switch the letter grouping; engines re-index their words."""
        with self._lock:
            if grouping == self._grouping and two_strokes == self._two_strokes:
                return
            self._grouping = grouping
            self._two_strokes = two_strokes
            self._key_map = build_key_map(grouping, two_strokes)
            self._grouping_changed()

    def keys_for_word(self, word: str) -> List[int]:
        """
        Key sequence that types ``word`` under the current grouping.

        Raises:
            UnsupportedWordError: If a character has no key.
        """
        if not is_word_valid(word):
            bad = next((c for c in word if not c.isascii() or not c.isalpha()), "")
            raise UnsupportedWordError(word, bad)
        keys = []
        for char in word.lower():
            key = self._key_map.get(char)
            if key is None:
                raise UnsupportedWordError(word, char)
            keys.append(key)
        return keys

    def begin_load(self) -> int:
        """Start a vocabulary load; any load started earlier is superseded."""
        with self._lock:
            self._load_generation += 1
            return self._load_generation

    def is_current_load(self, generation: int) -> bool:
        with self._lock:
            return generation == self._load_generation

    def insert_for_load(self, word: str, frequency: int, generation: int) -> bool:
        """
        Insert on behalf of load ``generation``.

        Returns:
            False, with nothing written, once a newer load has started.
        """
        with self._lock:
            if generation != self._load_generation:
                return False
            self.insert(word, frequency)
            return True

    def _grouping_changed(self):
        """Hook called under the lock after the grouping changed."""

    @abstractmethod
    def _suggest(self, keys: List[int]) -> List[WordCandidate]:
        ...

    @abstractmethod
    def insert(self, word: str, frequency: int = DEFAULT_WORD_FREQUENCY):
        """
        Add a word or replace its frequency.

        Raises:
            UnsupportedWordError: If the word cannot be typed; nothing changes.
        """

    @abstractmethod
    def contains(self, word: str) -> bool:
        ...
