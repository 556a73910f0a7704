"""
Build-word mode.
Spells an entered key sequence letter by letter: the host cycles through
the letters of the current key and confirms one, key after key.
"""
from typing import List, Optional, Sequence

from gestures.layouts import LetterGrouping


class WordBuilder:
    """
    Letter-scanning state for one key sequence.

    Usage:
        builder = WordBuilder(GROUPING_6_KEYS, [0, 1])
        builder.advance()          # 'a' -> 'b'
        builder.confirm()          # fixes 'b', moves to key 1
        word = builder.confirm()   # 'be'
    """

    def __init__(self, grouping: LetterGrouping, keys: Sequence[int]):
        self._grouping = grouping
        self._keys: List[int] = list(keys)
        self._position = 0
        self._letter_index = 0
        self._letters: List[str] = []
        self._cancelled = False

    @property
    def keys(self) -> List[int]:
        return list(self._keys)

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_finished(self) -> bool:
        return self._position >= len(self._keys)

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def word(self) -> str:
        """Letters confirmed so far."""
        return "".join(self._letters)

    @property
    def current_letter(self) -> str:
        if self.is_finished or self._cancelled:
            return ""
        letters = self._grouping.letters(self._keys[self._position])
        if not letters:
            return ""
        return letters[self._letter_index % len(letters)]

    @property
    def display(self) -> str:
        return self.word + self.current_letter

    def advance(self) -> str:
        """Show the next letter of the current key, wrapping around."""
        if not self.is_finished and not self._cancelled:
            self._letter_index += 1
        return self.current_letter

    def confirm(self) -> Optional[str]:
        """
        Fix the shown letter and move to the next key.

        Returns:
            The spelled word once the last key is confirmed, else None.
        """
        if self.is_finished or self._cancelled:
            return None
        self._letters.append(self.current_letter)
        self._position += 1
        self._letter_index = 0
        if self.is_finished:
            return self.word
        return None

    def cancel(self):
        self._cancelled = True
