"""
Expansion search.
Widens a short candidate list by querying longer key sequences, and
derives the current-word display text from the best candidate.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .engine import WordCandidate

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"

FIRST_LETTER = ord("a")
LAST_LETTER = ord("z")


@dataclass
class Disambiguation:
    """Ranked candidates for one entered key sequence."""
    keys: List[int]
    candidates: List[WordCandidate] = field(default_factory=list)
    direct_count: int = 0
    query_count: int = 0
    unresolved: bool = False

    @property
    def top(self) -> Optional[WordCandidate]:
        return self.candidates[0] if self.candidates else None

    @property
    def words(self) -> List[str]:
        return [c.text for c in self.candidates]


def letter_alphabet() -> List[int]:
    """Expansion alphabet of the two-stroke layouts: code points a..z."""
    return list(range(FIRST_LETTER, LAST_LETTER + 1))


def literal_word(keys: Sequence[int]) -> str:
    return "".join(chr(k) for k in keys if FIRST_LETTER <= k <= LAST_LETTER)


class ExpansionSearch:
    """
    Queries a suggestion source for a key sequence and, if it returns fewer
    than ``display_width`` candidates, for the sequence extended by one more
    key per level.

    Args:
        source: Anything with ``suggest(keys) -> List[WordCandidate]``
            (an engine or the engine registry).
        display_width: Number of candidates the host can show.
        max_depth: Expansion levels for single-gesture layouts.
        two_stroke_depth: Expansion levels for two-stroke layouts.
    """

    def __init__(self, source, display_width: int = 6, max_depth: int = 4, two_stroke_depth: int = 2):
        self._source = source
        self.display_width = display_width
        self.max_depth = max_depth
        self.two_stroke_depth = two_stroke_depth

    def depth_for(self, two_strokes: bool) -> int:
        return self.two_stroke_depth if two_strokes else self.max_depth

    def search(self, keys: Sequence[int], alphabet: Sequence[int], two_strokes: bool = False) -> Disambiguation:
        """
        Resolve ``keys`` into at most ``display_width`` candidates.

        Direct matches keep their order at the front; expansion matches
        follow sorted by score. The number of queries, the direct one
        included, never exceeds ``len(alphabet) ** depth``.

        Args:
            keys: Entered key sequence.
            alphabet: Keys to extend the sequence with.
            two_strokes: Whether ``keys`` are letter code points.

        Returns:
            Disambiguation result; ``unresolved`` when nothing matched.
        """
        keys = list(keys)
        if not keys:
            return Disambiguation(keys)

        depth = self.depth_for(two_strokes)
        budget = max(len(alphabet), 1) ** depth

        direct = self._source.suggest(keys)
        queries = 1
        expanded: List[WordCandidate] = []
        frontier = [keys]
        level = 0
        while (len(direct) + len(expanded) < self.display_width
               and level < depth and alphabet and queries < budget):
            next_frontier = []
            for prefix in frontier:
                for key in alphabet:
                    if queries >= budget:
                        break
                    extended = prefix + [key]
                    expanded.extend(self._source.suggest(extended))
                    queries += 1
                    next_frontier.append(extended)
            frontier = next_frontier
            level += 1

        expanded.sort(key=lambda c: c.score, reverse=True)
        candidates: List[WordCandidate] = []
        seen = set()
        for candidate in direct + expanded:
            if candidate.text in seen:
                continue
            seen.add(candidate.text)
            candidates.append(candidate)
        candidates = candidates[:self.display_width]

        unresolved = False
        if not candidates:
            literal = literal_word(keys) if two_strokes else ""
            if literal:
                candidates = [WordCandidate(literal, 0)]
            else:
                unresolved = True

        logger.debug("Expansion [keys=%s, direct=%d, queries=%d, found=%d]",
                     keys, len(direct), queries, len(candidates))
        return Disambiguation(
            keys=keys,
            candidates=candidates,
            direct_count=min(len(direct), len(candidates)),
            query_count=queries,
            unresolved=unresolved,
        )


def display_word(top: Optional[str], key_count: int, previous: str = "") -> str:
    """
    Text shown for the word being entered.

    The top candidate truncated to the key count when it is long enough,
    otherwise the previous display text, cut to leave room for one
    placeholder, followed by placeholders up to the key count.
    """
    if key_count <= 0:
        return ""
    if top is not None and len(top) >= key_count:
        return top[:key_count]
    return (previous[:key_count - 1] + PLACEHOLDER).ljust(key_count, PLACEHOLDER)
