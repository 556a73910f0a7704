"""
Stroke sequencing.
Turns decoded strokes into letter decisions for every layout: one stroke
per key on the 4/6/8 key layouts, two strokes per letter on the
two-stroke layout, and a master/detail menu on the MSR layout.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .decoder import LayoutArity, Direction, decode, direction_for_key
from .layouts import (
    EXPAND_GROUP,
    KeyboardLayout,
    MenuAction,
    msr_detail_keys,
    msr_master_keys,
)

logger = logging.getLogger(__name__)


class StrokeKind(Enum):
    IDLE = auto()
    FIRST_STROKE_HELD = auto()
    MASTER_MENU = auto()
    DETAIL_MENU = auto()


@dataclass(frozen=True)
class StrokeState:
    """Per-word stroke state; ``key`` is set for the held and detail kinds."""
    kind: StrokeKind
    key: Optional[int] = None

    @classmethod
    def idle(cls) -> "StrokeState":
        return cls(StrokeKind.IDLE)

    @classmethod
    def first_stroke_held(cls, key: int) -> "StrokeState":
        return cls(StrokeKind.FIRST_STROKE_HELD, key)

    @classmethod
    def master_menu(cls) -> "StrokeState":
        return cls(StrokeKind.MASTER_MENU)

    @classmethod
    def detail_menu(cls, key: int) -> "StrokeState":
        return cls(StrokeKind.DETAIL_MENU, key)


@dataclass
class StrokeResult:
    """
    Outcome of one stroke or tap.

    ``entered_key`` is the value to append to the entered key sequence, or
    None when the stroke did not complete a letter decision.
    """
    raw_key: int
    entered_key: Optional[int] = None
    letter: Optional[str] = None
    marker: Optional[Direction] = None
    action: Optional[MenuAction] = None

    @property
    def completes_letter(self) -> bool:
        return self.entered_key is not None


_SINGLE_STROKE_ARITY = {
    KeyboardLayout.KEYS4: LayoutArity.FOUR_WAY,
    KeyboardLayout.KEYS6: LayoutArity.SIX_WAY,
    KeyboardLayout.KEYS8: LayoutArity.EIGHT_WAY,
}


def letter_code(letter: str) -> Optional[int]:
    """Entered key for a concrete a-z letter on the two-stroke layouts."""
    if len(letter) != 1 or not "a" <= letter <= "z":
        return None
    return ord(letter)


class StrokeStateMachine:
    """
    Sequences strokes into letter decisions for one layout.

    Usage:
        machine = StrokeStateMachine(KeyboardLayout.STROKES2)
        machine.stroke(1.0, -1.0)           # first stroke, returns a marker
        result = machine.stroke(1.0, 1.0)   # second stroke, returns a letter
        keys.append(result.entered_key)
    """

    def __init__(self, layout: KeyboardLayout):
        self._layout = layout
        self._grouping = layout.grouping
        self._state = self.initial_state()

    @property
    def layout(self) -> KeyboardLayout:
        return self._layout

    @property
    def state(self) -> StrokeState:
        return self._state

    def initial_state(self) -> StrokeState:
        if self._layout.is_menu:
            return StrokeState.master_menu()
        return StrokeState.idle()

    def reset(self):
        """Drop any half-entered letter (word committed, cleared or abandoned)."""
        self._state = self.initial_state()

    def active_arity(self) -> LayoutArity:
        """Sector table the next stroke is decoded with."""
        if self._layout in _SINGLE_STROKE_ARITY:
            return _SINGLE_STROKE_ARITY[self._layout]
        if self._state.kind == StrokeKind.FIRST_STROKE_HELD:
            if self._state.key == EXPAND_GROUP:
                return LayoutArity.TWO_STROKE_STAGE2_WIDE
            return LayoutArity.TWO_STROKE_STAGE2_NARROW
        return LayoutArity.TWO_STROKE_STAGE1

    def stroke(self, dx: float, dy: float, has_text: bool = False) -> StrokeResult:
        """Decode a swipe with the arity of the current state and apply it."""
        key = decode(dx, dy, self.active_arity())
        return self.select(key, has_text)

    def select(self, key: int, has_text: bool = False) -> StrokeResult:
        """
        Apply an already-known key (a tap, or a decoded swipe).

        Args:
            key: Zone index under the current state's arity.
            has_text: Whether the word or sentence buffer holds text; picks
                the MSR menu variant.
        """
        if self._layout in _SINGLE_STROKE_ARITY:
            if not 0 <= key < self._layout.key_count:
                return StrokeResult(raw_key=key)
            return StrokeResult(raw_key=key, entered_key=key)
        if self._layout.is_menu:
            return self._select_menu(key, has_text)
        return self._select_two_stroke(key)

    def _select_two_stroke(self, key: int) -> StrokeResult:
        if self._state.kind != StrokeKind.FIRST_STROKE_HELD:
            if not self._grouping.letters(key):
                return StrokeResult(raw_key=key)
            logger.debug("First stroke [key=%d]", key)
            self._state = StrokeState.first_stroke_held(key)
            return StrokeResult(
                raw_key=key,
                marker=direction_for_key(key, LayoutArity.TWO_STROKE_STAGE1),
            )

        held = self._state.key
        self._state = StrokeState.idle()
        letter = self._grouping.letter(held, key)
        logger.debug("Second stroke [group=%d, key=%d, letter=%r]", held, key, letter)
        if not letter:
            return StrokeResult(raw_key=key)
        return StrokeResult(raw_key=key, entered_key=letter_code(letter), letter=letter)

    def _select_menu(self, key: int, has_text: bool) -> StrokeResult:
        if self._state.kind != StrokeKind.DETAIL_MENU:
            if not msr_detail_keys(key, has_text):
                return StrokeResult(raw_key=key)
            self._state = StrokeState.detail_menu(key)
            return StrokeResult(
                raw_key=key,
                marker=direction_for_key(key, LayoutArity.TWO_STROKE_STAGE1),
            )

        labels = msr_detail_keys(self._state.key, has_text)
        self._state = StrokeState.master_menu()
        label = labels[key] if 0 <= key < len(labels) else ""

        action = MenuAction.from_label(label)
        if action is not None:
            logger.debug("Menu action %s", action.name)
            return StrokeResult(raw_key=key, action=action)

        letter = label.lower()
        code = letter_code(letter)
        if code is None:
            return StrokeResult(raw_key=key)
        return StrokeResult(raw_key=key, entered_key=code, letter=letter)

    def backspace(self) -> bool:
        """
        Undo a half-entered letter.

        Returns:
            True if the backspace only reset the stroke state; False if the
            caller should remove the last entered key instead.
        """
        if self._state.kind in (StrokeKind.FIRST_STROKE_HELD, StrokeKind.DETAIL_MENU):
            self.reset()
            return True
        return False

    def menu_labels(self, has_text: bool = False) -> List[str]:
        """Labels currently shown on the zones."""
        if self._layout.is_menu:
            if self._state.kind == StrokeKind.DETAIL_MENU:
                return msr_detail_keys(self._state.key, has_text)
            return msr_master_keys(has_text)
        return [letters.upper() for letters in self._grouping]
