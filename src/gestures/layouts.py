"""
Keyboard layout definitions.
Letter groupings for the 4, 6 and 8 key layouts, the two-stroke layout
and the MSR master/detail menu layout.
"""
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


class LetterGrouping:
    """
    Immutable table mapping a key index to the letters it represents.

    Lookups with an index outside the table return an empty string
    instead of raising, so callers can treat them as "no letter".
    """

    def __init__(self, groups: Sequence[str]):
        self._groups: Tuple[str, ...] = tuple(group.lower() for group in groups)
        self._key_for_letter: Dict[str, int] = {}
        for index, group in enumerate(self._groups):
            for letter in group:
                self._key_for_letter.setdefault(letter, index)

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LetterGrouping):
            return NotImplemented
        return self._groups == other._groups

    def __hash__(self) -> int:
        return hash(self._groups)

    def __repr__(self) -> str:
        return f"LetterGrouping({list(self._groups)!r})"

    @property
    def groups(self) -> List[str]:
        return list(self._groups)

    def letters(self, key: int) -> str:
        """Letters on a key, or '' for an index outside the table."""
        if not isinstance(key, int) or not 0 <= key < len(self._groups):
            return ""
        return self._groups[key]

    def letter(self, key: int, index: int) -> str:
        """The ``index``-th letter on ``key``, or '' when either is out of range."""
        letters = self.letters(key)
        if not isinstance(index, int) or not 0 <= index < len(letters):
            return ""
        return letters[index]

    def key_for(self, letter: str) -> Optional[int]:
        """Key index holding ``letter`` (case-insensitive)."""
        return self._key_for_letter.get(letter.lower())


GROUPING_4_KEYS = LetterGrouping(["abcdef", "ghijkl", "mnopqrs", "tuvwxyz"])
GROUPING_6_KEYS = LetterGrouping(["abcd", "efgh", "ijkl", "mnop", "qrstu", "vwxyz"])
GROUPING_8_KEYS = LetterGrouping(["abc", "def", "ghi", "jkl", "mno", "pqrs", "tuv", "wxyz"])
GROUPING_TWO_STROKES = LetterGrouping(["abcd", "efgh", "ijkl", "mnop", "qrst", "uvwxyz"])
GROUPING_MSR = LetterGrouping(["abcd", "efgh", "ijkl", "mnop", "qrst", "uvwxyz"])

# Group whose second stroke uses the wide 16-sector table (6 letters instead of 4)
EXPAND_GROUP = 5


class MenuAction(Enum):
    """Reserved action tokens of the MSR menu layout, keyed by their label."""
    YES = "\U0001F44D\U0001F3FB"
    NO = "\U0001F44E\U0001F3FB"
    SPEAK = "\U0001F4AC"
    DELETE = "⟵"
    CANCEL = "❌"

    @classmethod
    def from_label(cls, label: str) -> Optional["MenuAction"]:
        try:
            return cls(label)
        except ValueError:
            return None


_YES = MenuAction.YES.value
_NO = MenuAction.NO.value
_SPEAK = MenuAction.SPEAK.value
_DELETE = MenuAction.DELETE.value
_CANCEL = MenuAction.CANCEL.value

# Master keys shown while the word and sentence are both empty
MSR_MASTER_KEYS_EMPTY = [
    "C B A\nE   D",
    f"G {_YES} F\nI    H",
    "L K J\nN   M",
    "P   O\nR   Q",
    f"T {_NO} S\nV    U",
    "X   W\nZ   Y",
]

# Master keys shown once there is text to speak or delete
MSR_MASTER_KEYS_TEXT = [
    "C B A\nE   D",
    f"G {_SPEAK} F\nI    H",
    "L K J\nN   M",
    "P   O\nR   Q",
    f"T {_DELETE} S\nV    U",
    "X   W\nZ   Y",
]

MSR_DETAIL_KEYS_EMPTY = [
    ["A", "B", "C", "D", _CANCEL, "E"],
    ["F", _YES, "G", "H", _CANCEL, "I"],
    ["J", "K", "L", "M", _CANCEL, "N"],
    ["O", "", "P", "Q", _CANCEL, "R"],
    ["S", _NO, "T", "U", _CANCEL, "V"],
    ["W", "", "X", "Y", _CANCEL, "Z"],
]

MSR_DETAIL_KEYS_TEXT = [
    ["A", "B", "C", "D", _CANCEL, "E"],
    ["F", _SPEAK, "G", "H", _CANCEL, "I"],
    ["J", "K", "L", "M", _CANCEL, "N"],
    ["O", "", "P", "Q", _CANCEL, "R"],
    ["S", _DELETE, "T", "U", _CANCEL, "V"],
    ["W", "", "X", "Y", _CANCEL, "Z"],
]


class KeyboardLayout(Enum):
    """Selectable input layouts."""
    KEYS4 = "keys4"
    KEYS6 = "keys6"
    KEYS8 = "keys8"
    STROKES2 = "strokes2"
    MSR = "msr"

    @property
    def grouping(self) -> LetterGrouping:
        return LETTER_GROUPINGS[self]

    @property
    def key_count(self) -> int:
        return len(LETTER_GROUPINGS[self])

    @property
    def is_two_stroke(self) -> bool:
        """Layouts that spend two selections per letter and enter concrete letters."""
        return self in (KeyboardLayout.STROKES2, KeyboardLayout.MSR)

    @property
    def is_menu(self) -> bool:
        return self is KeyboardLayout.MSR


DEFAULT_LAYOUT = KeyboardLayout.KEYS6

LETTER_GROUPINGS: Dict[KeyboardLayout, LetterGrouping] = {
    KeyboardLayout.KEYS4: GROUPING_4_KEYS,
    KeyboardLayout.KEYS6: GROUPING_6_KEYS,
    KeyboardLayout.KEYS8: GROUPING_8_KEYS,
    KeyboardLayout.STROKES2: GROUPING_TWO_STROKES,
    KeyboardLayout.MSR: GROUPING_MSR,
}


def get_layout(name: str) -> KeyboardLayout:
    """Get keyboard layout by name, falling back to the default layout."""
    try:
        return KeyboardLayout(name.lower())
    except (AttributeError, ValueError):
        return DEFAULT_LAYOUT


def msr_master_keys(has_text: bool) -> List[str]:
    return list(MSR_MASTER_KEYS_TEXT if has_text else MSR_MASTER_KEYS_EMPTY)


def msr_detail_keys(key: int, has_text: bool) -> List[str]:
    """Detail labels for a master key; empty list for an unknown key."""
    table = MSR_DETAIL_KEYS_TEXT if has_text else MSR_DETAIL_KEYS_EMPTY
    if not 0 <= key < len(table):
        return []
    return list(table[key])
