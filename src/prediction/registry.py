"""
Engine registry.
Holds the registered prediction engines and the active one.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from gestures.layouts import LetterGrouping

from .engine import (
    DEFAULT_WORD_FREQUENCY,
    EngineMetrics,
    EngineType,
    PredictionEngine,
    WordCandidate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineDescriptor:
    engine_type: EngineType
    available: bool
    engine: PredictionEngine


class EngineRegistry:
    """
    Registered engines keyed by type, one of them active.

    The first available engine registered becomes active. The registry
    remembers the letter grouping and applies it to every engine,
    including engines registered later.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._engines: Dict[EngineType, PredictionEngine] = {}
        self._active: Optional[PredictionEngine] = None
        self._active_type: Optional[EngineType] = None
        self._grouping: Optional[LetterGrouping] = None
        self._two_strokes = False

    def register(self, engine: PredictionEngine, engine_type: Optional[EngineType] = None):
        """Register (or replace) the engine for a type."""
        if engine_type is None:
            engine_type = engine.engine_type
        if self._grouping is not None:
            engine.set_key_letter_grouping(self._grouping, self._two_strokes)
        with self._lock:
            self._engines[engine_type] = engine
            if self._active_type == engine_type:
                self._active = engine
            elif self._active is None and engine.is_available:
                self._active = engine
                self._active_type = engine_type
        logger.debug("Registered engine %s [available=%s]", engine_type.value, engine.is_available)

    def switch_to(self, engine_type: Union[EngineType, str]) -> bool:
        """
        Make another registered engine active.

        Returns:
            False, leaving the active engine unchanged, if the type is
            unknown, not registered, or its engine is unavailable.
        """
        if not isinstance(engine_type, EngineType):
            try:
                engine_type = EngineType(engine_type)
            except ValueError:
                logger.warning("Unknown engine type: %r", engine_type)
                return False
        with self._lock:
            engine = self._engines.get(engine_type)
            if engine is None or not engine.is_available:
                logger.warning("Cannot switch to engine %s: %s", engine_type.value,
                               "not registered" if engine is None else "unavailable")
                return False
            self._active = engine
            self._active_type = engine_type
        logger.info("Prediction engine: %s", engine_type.display_name)
        return True

    @property
    def active_type(self) -> Optional[EngineType]:
        return self._active_type

    @property
    def active_engine(self) -> Optional[PredictionEngine]:
        return self._active

    def get(self, engine_type: EngineType) -> Optional[PredictionEngine]:
        with self._lock:
            return self._engines.get(engine_type)

    def suggest(self, keys: Sequence[int]) -> List[WordCandidate]:
        engine = self._active
        if engine is None:
            return []
        return engine.suggest(keys)

    def insert(self, word: str, frequency: int = DEFAULT_WORD_FREQUENCY):
        """Insert into the active engine; raises UnsupportedWordError like the engine."""
        engine = self._active
        if engine is None:
            logger.warning("No active engine, dropping word %r", word)
            return
        engine.insert(word, frequency)

    def contains(self, word: str) -> bool:
        engine = self._active
        return engine is not None and engine.contains(word)

    def set_key_letter_grouping(self, grouping: LetterGrouping, two_strokes: bool = False):
        with self._lock:
            self._grouping = grouping
            self._two_strokes = two_strokes
            engines = list(self._engines.values())
        for engine in engines:
            engine.set_key_letter_grouping(grouping, two_strokes)

    def descriptors(self) -> List[EngineDescriptor]:
        with self._lock:
            return [
                EngineDescriptor(engine_type, engine.is_available, engine)
                for engine_type, engine in self._engines.items()
            ]

    def available_engines(self) -> List[EngineType]:
        return [d.engine_type for d in self.descriptors() if d.available]

    def metrics(self, engine_type: Optional[EngineType] = None) -> Optional[EngineMetrics]:
        """Metrics of the given engine, or of the active engine."""
        engine = self.get(engine_type) if engine_type is not None else self._active
        if engine is None:
            return None
        return engine.metrics
