"""
Hybrid prediction engine.
Combines exact trie matches with dictionary completions.
"""
from typing import Dict, List, Optional

from gestures.layouts import GROUPING_6_KEYS, LetterGrouping

from .engine import DEFAULT_WORD_FREQUENCY, EngineType, PredictionEngine, WordCandidate
from .lexicon_engine import LexiconEngine
from .trie_engine import TrieEngine


class HybridEngine(PredictionEngine):
    """
    Queries a primary engine, then a secondary one.

    A word returned by both keeps the better of the two scores. The merged
    list is sorted by score; on equal scores primary results stay first.
    """

    engine_type = EngineType.HYBRID

    def __init__(
        self,
        primary: Optional[PredictionEngine] = None,
        secondary: Optional[PredictionEngine] = None,
        grouping: LetterGrouping = GROUPING_6_KEYS,
        two_strokes: bool = False,
    ):
        super().__init__(grouping, two_strokes)
        if primary is None:
            primary = TrieEngine(grouping, two_strokes)
        if secondary is None:
            secondary = LexiconEngine(grouping, two_strokes)
        self._primary = primary
        self._secondary = secondary
        for engine in (self._primary, self._secondary):
            engine.set_key_letter_grouping(grouping, two_strokes)

    @property
    def is_available(self) -> bool:
        return self._primary.is_available or self._secondary.is_available

    @property
    def primary(self) -> PredictionEngine:
        return self._primary

    @property
    def secondary(self) -> PredictionEngine:
        return self._secondary

    def _suggest(self, keys: List[int]) -> List[WordCandidate]:
        merged: List[WordCandidate] = []
        positions: Dict[str, int] = {}
        for engine in (self._primary, self._secondary):
            if not engine.is_available:
                continue
            for candidate in engine.suggest(keys):
                index = positions.get(candidate.text)
                if index is None:
                    positions[candidate.text] = len(merged)
                    merged.append(candidate)
                elif candidate.score > merged[index].score:
                    merged[index] = candidate
        merged.sort(key=lambda c: c.score, reverse=True)
        return merged

    def insert(self, word: str, frequency: int = DEFAULT_WORD_FREQUENCY):
        with self._lock:
            # Raises before either engine is touched
            self.keys_for_word(word)
            self._primary.insert(word, frequency)
            self._secondary.insert(word, frequency)

    def contains(self, word: str) -> bool:
        return self._primary.contains(word) or self._secondary.contains(word)

    def _grouping_changed(self):
        for engine in (self._primary, self._secondary):
            engine.set_key_letter_grouping(self._grouping, self._two_strokes)
