"""
Trie-backed prediction engine.
Words are stored at the node reached by their full key sequence, sorted by
frequency, so a lookup returns exact-length matches in rank order.
"""
import logging
from typing import Dict, List, Optional

from gestures.layouts import GROUPING_6_KEYS, LetterGrouping

from .engine import (
    DEFAULT_WORD_FREQUENCY,
    EngineType,
    PredictionEngine,
    UnsupportedWordError,
    WordCandidate,
)

logger = logging.getLogger(__name__)


class TrieNode:
    __slots__ = ("children", "words")

    def __init__(self):
        self.children: Dict[int, "TrieNode"] = {}
        self.words: List[WordCandidate] = []

    def add(self, candidate: WordCandidate):
        """Insert after every word with the same or higher score."""
        index = len(self.words)
        for i, existing in enumerate(self.words):
            if existing.score < candidate.score:
                index = i
                break
        self.words.insert(index, candidate)

    def remove(self, word: str):
        self.words = [c for c in self.words if c.text != word]


class TrieEngine(PredictionEngine):
    """Exact-length matches from a key-sequence trie."""

    engine_type = EngineType.CUSTOM

    def __init__(self, grouping: LetterGrouping = GROUPING_6_KEYS, two_strokes: bool = False):
        super().__init__(grouping, two_strokes)
        self._root = TrieNode()
        # word -> frequency, in insertion order; source of truth for rebuilds
        self._frequencies: Dict[str, int] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._frequencies)

    def _find(self, keys: List[int], create: bool = False) -> Optional[TrieNode]:
        node = self._root
        for key in keys:
            child = node.children.get(key)
            if child is None:
                if not create:
                    return None
                child = node.children[key] = TrieNode()
            node = child
        return node

    def _suggest(self, keys: List[int]) -> List[WordCandidate]:
        node = self._find(keys)
        if node is None:
            return []
        return list(node.words)

    def insert(self, word: str, frequency: int = DEFAULT_WORD_FREQUENCY):
        word = word.lower()
        with self._lock:
            keys = self.keys_for_word(word)
            node = self._find(keys, create=True)
            if word in self._frequencies:
                node.remove(word)
                del self._frequencies[word]
            self._frequencies[word] = frequency
            node.add(WordCandidate(word, frequency))

    def contains(self, word: str) -> bool:
        with self._lock:
            return word.lower() in self._frequencies

    def _grouping_changed(self):
        self._root = TrieNode()
        for word, frequency in self._frequencies.items():
            try:
                keys = self.keys_for_word(word)
            except UnsupportedWordError as e:
                logger.debug("Skipping word on rebuild: %s", e)
                continue
            self._find(keys, create=True).add(WordCandidate(word, frequency))
        logger.debug("Rebuilt trie with %d words", len(self._frequencies))
