"""
Platform word list for the dictionary-backed engine.
Reads the most common words of a language from wordfreq.
"""
import logging
from typing import List

from wordfreq import top_n_list, zipf_frequency

from .engine import is_word_valid
from .vocabulary import WordEntry

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DEFAULT_SIZE = 20000

# Zipf values are floats around 1..8; scores are integers
ZIPF_SCALE = 100


def load_system_dictionary(language: str = DEFAULT_LANGUAGE, size: int = DEFAULT_SIZE) -> List[WordEntry]:
    """
    Most common words of ``language``, scored by Zipf frequency.

    Words that cannot be typed (apostrophes, digits, accents) are left out.

    Raises:
        LookupError: If wordfreq has no word list for the language.
    """
    entries: List[WordEntry] = []
    skipped = 0
    for word in top_n_list(language, size):
        if not is_word_valid(word):
            skipped += 1
            continue
        entries.append((word.lower(), int(round(zipf_frequency(word, language) * ZIPF_SCALE))))
    logger.info("System dictionary %r: %d words (%d skipped)", language, len(entries), skipped)
    return entries
