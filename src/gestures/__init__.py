"""
SwipeKeys Gestures Module

Swipe direction decoding, keyboard layouts and stroke sequencing.
"""
from .decoder import (
    LayoutArity,
    Direction,
    decode,
    direction,
    direction_for_key,
    key_for_angle,
    swipe_angle,
)
from .layouts import (
    KeyboardLayout,
    LetterGrouping,
    MenuAction,
    DEFAULT_LAYOUT,
    get_layout,
)
from .strokes import StrokeKind, StrokeState, StrokeResult, StrokeStateMachine

__all__ = [
    'LayoutArity',
    'Direction',
    'decode',
    'direction',
    'direction_for_key',
    'key_for_angle',
    'swipe_angle',
    'KeyboardLayout',
    'LetterGrouping',
    'MenuAction',
    'DEFAULT_LAYOUT',
    'get_layout',
    'StrokeKind',
    'StrokeState',
    'StrokeResult',
    'StrokeStateMachine',
]
