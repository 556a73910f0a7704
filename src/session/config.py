"""
Config loader for SwipeKeys.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

import yaml

from gestures.layouts import KeyboardLayout
from prediction.engine import DEFAULT_WORD_FREQUENCY, EngineType


@dataclass
class KeyboardConfig:
    layout: str = "keys6"   # keys4, keys6, keys8, strokes2 or msr


@dataclass
class GestureConfig:
    # Below either threshold a touch counts as a tap on the zone
    min_swipe_distance: float = 10.0
    min_swipe_velocity: float = 50.0

    def is_swipe(self, distance: float, velocity: float) -> bool:
        return distance >= self.min_swipe_distance and velocity >= self.min_swipe_velocity


@dataclass
class PredictionConfig:
    engine: str = "custom"
    display_width: int = 6
    max_search_depth: int = 4
    two_stroke_search_depth: int = 2
    default_word_frequency: int = DEFAULT_WORD_FREQUENCY
    vocabulary_path: Optional[str] = None
    # Platform word list of the dictionary engine (wordfreq)
    dictionary_language: str = "en"
    dictionary_size: int = 20000


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def validate_config(config: Config) -> Config:
    """
    Check enum-like and numeric settings.

    Raises:
        ValueError: On the first invalid value.
    """
    layouts = [layout.value for layout in KeyboardLayout]
    if config.keyboard.layout not in layouts:
        raise ValueError(f"keyboard.layout must be one of {layouts}, got {config.keyboard.layout!r}")

    engines = [engine.value for engine in EngineType]
    if config.prediction.engine not in engines:
        raise ValueError(f"prediction.engine must be one of {engines}, got {config.prediction.engine!r}")

    for name in ("display_width", "max_search_depth", "two_stroke_search_depth", "default_word_frequency",
                 "dictionary_size"):
        value = getattr(config.prediction, name)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"prediction.{name} must be a positive integer, got {value!r}")

    if not isinstance(config.prediction.dictionary_language, str) or not config.prediction.dictionary_language:
        raise ValueError(f"prediction.dictionary_language must be a language code, "
                         f"got {config.prediction.dictionary_language!r}")

    for name in ("min_swipe_distance", "min_swipe_velocity"):
        value = getattr(config.gestures, name)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
            raise ValueError(f"gestures.{name} must be a non-negative number, got {value!r}")

    if not isinstance(logging.getLevelName(str(config.logging.level).upper()), int):
        raise ValueError(f"logging.level is not a logging level: {config.logging.level!r}")

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ValueError: If a setting has an invalid value.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    config = Config(
        keyboard=_dict_to_dataclass(KeyboardConfig, data.get('keyboard')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        prediction=_dict_to_dataclass(PredictionConfig, data.get('prediction')),
        logging=_dict_to_dataclass(LoggingConfig, data.get('logging')),
    )
    return validate_config(config)
