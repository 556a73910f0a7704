"""
User-added words and learned ratings.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Tuple

from .engine import DEFAULT_WORD_FREQUENCY, UnsupportedWordError, is_word_valid

logger = logging.getLogger(__name__)


@dataclass
class UserWord:
    text: str
    frequency: int = DEFAULT_WORD_FREQUENCY
    added_at: datetime = field(default_factory=datetime.now)


class UserLexicon:
    """
    Words the user typed that the dictionary did not know, plus a usage
    rating for every committed word. A word's learned frequency is the
    default frequency plus its rating.
    """

    def __init__(self, default_frequency: int = DEFAULT_WORD_FREQUENCY):
        self._default_frequency = default_frequency
        self._words: Dict[str, UserWord] = {}
        self._ratings: Dict[str, int] = {}

    def __contains__(self, text: str) -> bool:
        return text.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def add_word(self, text: str) -> UserWord:
        """
        Add a user word (idempotent).

        Raises:
            UnsupportedWordError: If the word has characters other than a-z.
        """
        text = text.lower()
        if not is_word_valid(text):
            bad = next((c for c in text if not c.isascii() or not c.isalpha()), "")
            raise UnsupportedWordError(text, bad)
        word = self._words.get(text)
        if word is None:
            word = UserWord(text, self.frequency_for(text))
            self._words[text] = word
            logger.info("Added user word %r", text)
        return word

    def rating(self, text: str) -> int:
        return self._ratings.get(text.lower(), 0)

    def increment_rating(self, text: str) -> int:
        text = text.lower()
        rating = self._ratings.get(text, 0) + 1
        self._ratings[text] = rating
        if text in self._words:
            self._words[text].frequency = self.frequency_for(text)
        return rating

    def frequency_for(self, text: str) -> int:
        return self._default_frequency + self.rating(text)

    def words(self) -> List[UserWord]:
        return list(self._words.values())

    def vocabulary(self) -> List[Tuple[str, int]]:
        """(word, frequency) entries for re-seeding an engine."""
        return [(w.text, w.frequency) for w in self._words.values()]
