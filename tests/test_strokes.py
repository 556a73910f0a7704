import math

import pytest

from gestures.decoder import Direction, LayoutArity
from gestures.layouts import (
    KeyboardLayout,
    MenuAction,
    MSR_MASTER_KEYS_EMPTY,
    MSR_MASTER_KEYS_TEXT,
)
from gestures.strokes import StrokeKind, StrokeState, StrokeStateMachine


@pytest.fixture
def two_stroke():
    return StrokeStateMachine(KeyboardLayout.STROKES2)


@pytest.fixture
def msr():
    return StrokeStateMachine(KeyboardLayout.MSR)


def swipe(machine, angle, has_text=False):
    rad = math.radians(angle)
    return machine.stroke(math.cos(rad), math.sin(rad), has_text)


def test_single_gesture_layouts_enter_keys_directly():
    machine = StrokeStateMachine(KeyboardLayout.KEYS6)
    result = machine.stroke(1.0, 0.0)
    assert result.entered_key == 3
    assert machine.state == StrokeState.idle()
    assert machine.active_arity() == LayoutArity.SIX_WAY

    assert StrokeStateMachine(KeyboardLayout.KEYS4).stroke(0.0, -1.0).entered_key == 0
    assert StrokeStateMachine(KeyboardLayout.KEYS8).stroke(-1.0, 0.0).entered_key == 7


def test_tap_out_of_range_is_ignored():
    machine = StrokeStateMachine(KeyboardLayout.KEYS4)
    assert machine.select(4).entered_key is None
    assert machine.select(3).entered_key == 3


def test_two_stroke_first_stroke_holds_group(two_stroke):
    result = two_stroke.select(0)
    assert result.entered_key is None
    assert result.marker == Direction.UP_RIGHT
    assert two_stroke.state == StrokeState(StrokeKind.FIRST_STROKE_HELD, 0)
    assert two_stroke.active_arity() == LayoutArity.TWO_STROKE_STAGE2_NARROW


def test_two_stroke_narrow_second_stroke(two_stroke):
    two_stroke.select(0)
    result = swipe(two_stroke, 135.0)
    assert result.letter == "d"
    assert result.entered_key == ord("d")
    assert two_stroke.state.kind == StrokeKind.IDLE

    two_stroke.select(1)
    assert swipe(two_stroke, 0.0).letter == "e"


def test_only_second_stroke_completes_letter(two_stroke):
    first = swipe(two_stroke, 150.0)
    assert not first.completes_letter
    assert first.marker is not None
    assert swipe(two_stroke, 0.0).completes_letter


def test_two_stroke_expand_group_uses_wide_table(two_stroke):
    swipe(two_stroke, 150.0)
    assert two_stroke.state == StrokeState.first_stroke_held(5)
    assert two_stroke.active_arity() == LayoutArity.TWO_STROKE_STAGE2_WIDE

    result = swipe(two_stroke, 90.0)
    assert result.raw_key == 3
    assert result.letter == "x"
    assert result.entered_key == ord("x")
    assert two_stroke.state.kind == StrokeKind.IDLE

    swipe(two_stroke, 150.0)
    assert swipe(two_stroke, 190.0).letter == "w"
    swipe(two_stroke, 150.0)
    assert swipe(two_stroke, 0.0).letter == "u"


def test_two_stroke_out_of_range_second_key_is_skipped(two_stroke):
    two_stroke.select(0)
    result = two_stroke.select(5)
    assert result.entered_key is None
    assert result.letter is None
    assert two_stroke.state.kind == StrokeKind.IDLE


def test_backspace_resets_half_entered_letter(two_stroke):
    two_stroke.select(2)
    assert two_stroke.backspace() is True
    assert two_stroke.state.kind == StrokeKind.IDLE
    assert two_stroke.backspace() is False


def test_msr_starts_in_master_menu(msr):
    assert msr.state.kind == StrokeKind.MASTER_MENU
    assert msr.menu_labels() == MSR_MASTER_KEYS_EMPTY
    assert msr.menu_labels(has_text=True) == MSR_MASTER_KEYS_TEXT


def test_msr_letter_selection(msr):
    result = msr.select(0)
    assert result.entered_key is None
    assert msr.state == StrokeState.detail_menu(0)
    assert msr.menu_labels()[:4] == ["A", "B", "C", "D"]

    result = msr.select(2)
    assert result.letter == "c"
    assert result.entered_key == ord("c")
    assert msr.state.kind == StrokeKind.MASTER_MENU


@pytest.mark.parametrize("master, detail, has_text, action", [
    (1, 1, False, MenuAction.YES),
    (4, 1, False, MenuAction.NO),
    (1, 1, True, MenuAction.SPEAK),
    (4, 1, True, MenuAction.DELETE),
    (2, 4, False, MenuAction.CANCEL),
])
def test_msr_action_tokens_never_enter_keys(msr, master, detail, has_text, action):
    msr.select(master, has_text)
    result = msr.select(detail, has_text)
    assert result.action == action
    assert result.entered_key is None
    assert msr.state.kind == StrokeKind.MASTER_MENU


def test_msr_empty_label_does_nothing(msr):
    msr.select(3)
    result = msr.select(1)
    assert result.entered_key is None
    assert result.action is None
    assert msr.state.kind == StrokeKind.MASTER_MENU


def test_msr_backspace_leaves_detail_menu(msr):
    msr.select(5)
    assert msr.backspace() is True
    assert msr.state.kind == StrokeKind.MASTER_MENU
    assert msr.backspace() is False


def test_reset_returns_to_initial_state(two_stroke, msr):
    two_stroke.select(1)
    two_stroke.reset()
    assert two_stroke.state.kind == StrokeKind.IDLE
    msr.select(1)
    msr.reset()
    assert msr.state.kind == StrokeKind.MASTER_MENU


def test_letter_labels_for_single_gesture_layouts():
    machine = StrokeStateMachine(KeyboardLayout.KEYS4)
    assert machine.menu_labels() == ["ABCDEF", "GHIJKL", "MNOPQRS", "TUVWXYZ"]
