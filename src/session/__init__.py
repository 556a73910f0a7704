"""
SwipeKeys Session Module

Configuration and the host-facing input session.
"""
from .config import Config, load_config
from .input_session import InputSession, SentenceRecord, SessionUpdate, default_registry
from .word_builder import WordBuilder

__all__ = [
    'Config',
    'load_config',
    'InputSession',
    'SentenceRecord',
    'SessionUpdate',
    'default_registry',
    'WordBuilder',
]
