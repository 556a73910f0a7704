"""
Dictionary-backed completion engine.
Returns every word at least as long as the key sequence whose leading
letters fit the key groups, top results by frequency, with a bounded
result cache.
"""
import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Tuple

from gestures.layouts import GROUPING_6_KEYS, LetterGrouping

from .engine import (
    DEFAULT_WORD_FREQUENCY,
    EngineType,
    PredictionEngine,
    UnsupportedWordError,
    WordCandidate,
)
from .system_dictionary import DEFAULT_LANGUAGE, DEFAULT_SIZE, load_system_dictionary

logger = logging.getLogger(__name__)


class LexiconEngine(PredictionEngine):
    """
    Prefix-completion engine over a flat word dictionary.

    Args:
        grouping: Letter grouping of the active layout.
        two_strokes: Whether keys are letter code points.
        available: False when the platform dictionary is missing; the
            registry refuses to switch to an unavailable engine.
    """

    engine_type = EngineType.NATIVE

    MAX_RESULTS = 10
    CACHE_LIMIT = 1000
    CACHE_EVICTION = 100

    def __init__(
        self,
        grouping: LetterGrouping = GROUPING_6_KEYS,
        two_strokes: bool = False,
        available: bool = True,
    ):
        super().__init__(grouping, two_strokes)
        self._available = available
        self._words: Dict[str, int] = {}
        # first key -> words starting with it
        self._by_first_key: Dict[int, Dict[str, int]] = {}
        self._cache: "OrderedDict[Tuple[int, ...], List[WordCandidate]]" = OrderedDict()

    @classmethod
    def from_system_dictionary(
        cls,
        grouping: LetterGrouping = GROUPING_6_KEYS,
        two_strokes: bool = False,
        language: str = DEFAULT_LANGUAGE,
        size: int = DEFAULT_SIZE,
    ) -> "LexiconEngine":
        """
        Engine seeded with the platform word list of ``language``.

        The engine is unavailable when there is no word list for the language.
        """
        try:
            entries = load_system_dictionary(language, size)
        except LookupError as e:
            logger.warning("No system dictionary for %r: %s", language, e)
            return cls(grouping, two_strokes, available=False)
        engine = cls(grouping, two_strokes)
        engine.load_dictionary(entries)
        return engine

    @property
    def is_available(self) -> bool:
        return self._available

    def __len__(self) -> int:
        with self._lock:
            return len(self._words)

    def _suggest(self, keys: List[int]) -> List[WordCandidate]:
        cache_key = tuple(keys)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._metrics.cache_hits += 1
            return list(cached)

        # No completion for the prefix means none for any extension either
        parent = self._cache.get(cache_key[:-1]) if len(cache_key) > 1 else None
        if parent is not None and not parent:
            self._store(cache_key, [])
            return []

        matches = []
        for word, frequency in self._by_first_key.get(keys[0], {}).items():
            if len(word) < len(keys):
                continue
            if all(self._key_map.get(char) == key for char, key in zip(word, keys)):
                matches.append(WordCandidate(word, frequency))
        matches.sort(key=lambda c: c.score, reverse=True)
        results = matches[:self.MAX_RESULTS]
        self._store(cache_key, results)
        return list(results)

    def _store(self, cache_key: Tuple[int, ...], results: List[WordCandidate]):
        if len(self._cache) >= self.CACHE_LIMIT:
            for _ in range(min(self.CACHE_EVICTION, len(self._cache))):
                self._cache.popitem(last=False)
        self._cache[cache_key] = results

    def insert(self, word: str, frequency: int = DEFAULT_WORD_FREQUENCY):
        word = word.lower()
        with self._lock:
            keys = self.keys_for_word(word)
            self._words[word] = frequency
            self._by_first_key.setdefault(keys[0], {})[word] = frequency
            self._cache.clear()

    def load_dictionary(self, entries: Iterable[Tuple[str, int]]) -> int:
        """
        Add many words at once; words that cannot be typed are skipped.

        Returns:
            Number of words added.
        """
        added = 0
        with self._lock:
            for word, frequency in entries:
                word = word.lower()
                try:
                    keys = self.keys_for_word(word)
                except UnsupportedWordError as e:
                    logger.debug("Skipping dictionary word: %s", e)
                    continue
                self._words[word] = frequency
                self._by_first_key.setdefault(keys[0], {})[word] = frequency
                added += 1
            self._cache.clear()
        return added

    def contains(self, word: str) -> bool:
        with self._lock:
            return word.lower() in self._words

    def _grouping_changed(self):
        self._cache.clear()
        self._by_first_key = {}
        for word, frequency in self._words.items():
            key = self._key_map.get(word[0])
            if key is None:
                logger.debug("Skipping word on re-index: %r", word)
                continue
            self._by_first_key.setdefault(key, {})[word] = frequency
