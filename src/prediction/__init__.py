"""
SwipeKeys Prediction Module

Word disambiguation engines, expansion search and vocabulary loading.
"""
from .engine import (
    DEFAULT_WORD_FREQUENCY,
    EngineMetrics,
    EngineType,
    PredictionEngine,
    UnsupportedWordError,
    WordCandidate,
)
from .trie_engine import TrieEngine
from .lexicon_engine import LexiconEngine
from .hybrid_engine import HybridEngine
from .expansion import Disambiguation, ExpansionSearch, display_word
from .registry import EngineDescriptor, EngineRegistry
from .vocabulary import InsertReport, bulk_insert, load_word_frequencies, parse_word_frequencies
from .system_dictionary import load_system_dictionary
from .user_words import UserLexicon, UserWord

__all__ = [
    'DEFAULT_WORD_FREQUENCY',
    'EngineMetrics',
    'EngineType',
    'PredictionEngine',
    'UnsupportedWordError',
    'WordCandidate',
    'TrieEngine',
    'LexiconEngine',
    'HybridEngine',
    'Disambiguation',
    'ExpansionSearch',
    'display_word',
    'EngineDescriptor',
    'EngineRegistry',
    'InsertReport',
    'bulk_insert',
    'load_word_frequencies',
    'parse_word_frequencies',
    'load_system_dictionary',
    'UserLexicon',
    'UserWord',
]
