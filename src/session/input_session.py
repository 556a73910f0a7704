"""
Input session.
Host-facing facade that ties the stroke state machine, the engine registry
and the expansion search together: feed it swipes and taps, read back the
candidates and the word being entered.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from gestures.decoder import Direction, LayoutArity, direction_for_key
from gestures.layouts import DEFAULT_LAYOUT, KeyboardLayout, MenuAction, get_layout
from gestures.strokes import StrokeResult, StrokeState, StrokeStateMachine
from prediction.engine import DEFAULT_WORD_FREQUENCY, UnsupportedWordError, WordCandidate
from prediction.expansion import ExpansionSearch, display_word, letter_alphabet
from prediction.hybrid_engine import HybridEngine
from prediction.lexicon_engine import LexiconEngine
from prediction.registry import EngineRegistry
from prediction.trie_engine import TrieEngine
from prediction.user_words import UserLexicon

from .config import Config, GestureConfig
from .word_builder import WordBuilder

logger = logging.getLogger(__name__)


@dataclass
class SentenceRecord:
    text: str
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class SessionUpdate:
    """Snapshot returned by every session operation."""
    keys: List[int]
    candidates: List[WordCandidate]
    current_word: str
    sentence: str
    unresolved: bool = False
    marker: Optional[Direction] = None
    action: Optional[MenuAction] = None
    committed: Optional[str] = None
    completed: Optional[SentenceRecord] = None

    @property
    def words(self) -> List[str]:
        return [c.text for c in self.candidates]


class InputSession:
    """
    One user's text-entry session.

    Args:
        registry: Engine registry queried for suggestions.
        layout: Initial keyboard layout.
        user_lexicon: Store for learned words; a fresh one if None.
        display_width: Number of candidates shown.
        max_search_depth: Expansion depth for single-gesture layouts.
        two_stroke_search_depth: Expansion depth for two-stroke layouts.
        default_word_frequency: Base frequency of learned words.
        gestures: Tap/swipe thresholds.
    """

    def __init__(
        self,
        registry: EngineRegistry,
        layout: KeyboardLayout = DEFAULT_LAYOUT,
        user_lexicon: Optional[UserLexicon] = None,
        display_width: int = 6,
        max_search_depth: int = 4,
        two_stroke_search_depth: int = 2,
        default_word_frequency: int = DEFAULT_WORD_FREQUENCY,
        gestures: Optional[GestureConfig] = None,
    ):
        self._registry = registry
        if user_lexicon is None:
            user_lexicon = UserLexicon(default_word_frequency)
        self._user_lexicon = user_lexicon
        self._gestures = gestures if gestures is not None else GestureConfig()
        self._search = ExpansionSearch(
            registry,
            display_width=display_width,
            max_depth=max_search_depth,
            two_stroke_depth=two_stroke_search_depth,
        )
        self._keys: List[int] = []
        self._candidates: List[WordCandidate] = []
        self._unresolved = False
        self._current_word = ""
        self._sentence = ""
        self._history: List[SentenceRecord] = []
        self._layout = layout
        self._machine = StrokeStateMachine(layout)
        self._registry.set_key_letter_grouping(layout.grouping, layout.is_two_stroke)

    @classmethod
    def from_config(cls, config: Config, registry: Optional[EngineRegistry] = None) -> "InputSession":
        """
        Build a session with the custom, native and hybrid engines registered
        and the configured engine active.
        """
        if registry is None:
            registry = default_registry(config.prediction.dictionary_language,
                                        config.prediction.dictionary_size)
        if not registry.switch_to(config.prediction.engine):
            logger.warning("Engine %r unavailable, keeping %s", config.prediction.engine,
                           registry.active_type.value if registry.active_type else None)
        return cls(
            registry,
            layout=get_layout(config.keyboard.layout),
            user_lexicon=UserLexicon(config.prediction.default_word_frequency),
            display_width=config.prediction.display_width,
            max_search_depth=config.prediction.max_search_depth,
            two_stroke_search_depth=config.prediction.two_stroke_search_depth,
            default_word_frequency=config.prediction.default_word_frequency,
            gestures=config.gestures,
        )

    # --- State -----------------------------------------------------------

    @property
    def registry(self) -> EngineRegistry:
        return self._registry

    @property
    def user_lexicon(self) -> UserLexicon:
        return self._user_lexicon

    @property
    def layout(self) -> KeyboardLayout:
        return self._layout

    @property
    def state(self) -> StrokeState:
        return self._machine.state

    @property
    def keys(self) -> List[int]:
        return list(self._keys)

    @property
    def candidates(self) -> List[WordCandidate]:
        return list(self._candidates)

    @property
    def current_word(self) -> str:
        return self._current_word

    @property
    def sentence(self) -> str:
        return self._sentence

    @property
    def history(self) -> List[SentenceRecord]:
        return list(self._history)

    @property
    def has_text(self) -> bool:
        return bool(self._keys) or bool(self._sentence)

    def is_swipe(self, distance: float, velocity: float) -> bool:
        return self._gestures.is_swipe(distance, velocity)

    def menu_labels(self) -> List[str]:
        return self._machine.menu_labels(self.has_text)

    def key_markers(self) -> List[Direction]:
        """Arrow markers for the entered keys (4-key layout only)."""
        if self._layout is not KeyboardLayout.KEYS4:
            return []
        return [direction_for_key(key, LayoutArity.FOUR_WAY) for key in self._keys]

    # --- Input -----------------------------------------------------------

    def set_layout(self, layout: Union[KeyboardLayout, str]) -> SessionUpdate:
        """Switch layouts; the word being entered is abandoned."""
        if not isinstance(layout, KeyboardLayout):
            layout = get_layout(layout)
        self._layout = layout
        self._machine = StrokeStateMachine(layout)
        self._registry.set_key_letter_grouping(layout.grouping, layout.is_two_stroke)
        self._reset_word()
        logger.info("Layout: %s", layout.value)
        return self._update()

    def swipe(self, dx: float, dy: float) -> SessionUpdate:
        return self._apply(self._machine.stroke(dx, dy, self.has_text))

    def tap(self, key: int) -> SessionUpdate:
        return self._apply(self._machine.select(key, self.has_text))

    def _apply(self, result: StrokeResult) -> SessionUpdate:
        if result.action is not None:
            return self._handle_action(result.action)
        if result.completes_letter:
            self._keys.append(result.entered_key)
            self._refresh()
        return self._update(marker=result.marker)

    def _handle_action(self, action: MenuAction) -> SessionUpdate:
        if action is MenuAction.DELETE:
            update = self.backspace()
        elif action is MenuAction.SPEAK:
            if self._keys and not self._unresolved:
                update = self.commit()
            else:
                update = self.complete_sentence()
        else:
            # YES / NO / CANCEL: nothing to enter, the host reports them
            self._machine.reset()
            update = self._update()
        update.action = action
        return update

    def backspace(self) -> SessionUpdate:
        """
        Undo the last input: a half-entered letter, then the last key,
        then the last sentence character. A no-op on an empty session.
        """
        if self._machine.backspace():
            return self._update()
        if self._keys:
            self._keys.pop()
            self._refresh()
        elif self._sentence:
            self._sentence = self._sentence[:-1]
        return self._update()

    def clear(self) -> SessionUpdate:
        """Abandon the word being entered and the sentence."""
        self._reset_word()
        self._sentence = ""
        return self._update()

    # --- Output ----------------------------------------------------------

    def commit(self, word: Optional[str] = None) -> SessionUpdate:
        """
        Append a word to the sentence and learn it.

        Args:
            word: Word to commit; the top candidate if None.
        """
        if word is None:
            if not self._candidates or self._unresolved:
                return self._update()
            word = self._candidates[0].text
        word = word.lower()
        self._learn(word)
        self._sentence += word + " "
        self._reset_word()
        return self._update(committed=word)

    def select_candidate(self, index: int) -> SessionUpdate:
        if not 0 <= index < len(self._candidates):
            return self._update()
        return self.commit(self._candidates[index].text)

    def complete_sentence(self) -> SessionUpdate:
        """Store the sentence in the history and start a new one."""
        text = self._sentence.strip()
        self._reset_word()
        self._sentence = ""
        if not text:
            return self._update()
        record = SentenceRecord(text)
        self._history.append(record)
        logger.info("Sentence: %s", text)
        return self._update(completed=record)

    def build_word(self) -> WordBuilder:
        """
        Start spelling the entered keys letter by letter.

        Raises:
            ValueError: On two-stroke layouts, which already enter letters.
        """
        if self._layout.is_two_stroke:
            raise ValueError(f"Build-word mode needs a single-gesture layout, not {self._layout.value}")
        return WordBuilder(self._layout.grouping, self._keys)

    def _learn(self, word: str):
        try:
            if not self._registry.contains(word):
                self._user_lexicon.add_word(word)
            self._user_lexicon.increment_rating(word)
            self._registry.insert(word, self._user_lexicon.frequency_for(word))
        except UnsupportedWordError as e:
            logger.debug("Not learning word: %s", e)

    # --- Internals -------------------------------------------------------

    def _reset_word(self):
        self._keys = []
        self._candidates = []
        self._unresolved = False
        self._current_word = ""
        self._machine.reset()

    def _alphabet(self) -> List[int]:
        if self._layout.is_two_stroke:
            return letter_alphabet()
        return list(range(self._layout.key_count))

    def _refresh(self):
        if not self._keys:
            self._candidates = []
            self._unresolved = False
            self._current_word = ""
            return
        result = self._search.search(self._keys, self._alphabet(), self._layout.is_two_stroke)
        self._candidates = result.candidates
        self._unresolved = result.unresolved
        top = result.top.text if result.top is not None else None
        self._current_word = display_word(top, len(self._keys), self._current_word)

    def _update(self, **extra) -> SessionUpdate:
        return SessionUpdate(
            keys=list(self._keys),
            candidates=list(self._candidates),
            current_word=self._current_word,
            sentence=self._sentence,
            unresolved=self._unresolved,
            **extra,
        )


def default_registry(dictionary_language: str = "en", dictionary_size: int = 20000) -> EngineRegistry:
    """Registry with the custom, native and hybrid engines; hybrid shares the other two."""
    trie = TrieEngine()
    lexicon = LexiconEngine.from_system_dictionary(language=dictionary_language, size=dictionary_size)
    registry = EngineRegistry()
    registry.register(trie)
    registry.register(lexicon)
    registry.register(HybridEngine(trie, lexicon))
    return registry
