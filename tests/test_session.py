import pytest

from gestures.decoder import Direction
from gestures.layouts import GROUPING_8_KEYS, KeyboardLayout, MenuAction
from gestures.strokes import StrokeKind
from prediction.engine import EngineType, WordCandidate
from prediction.lexicon_engine import LexiconEngine
from prediction.registry import EngineRegistry
from prediction.trie_engine import TrieEngine
from session.config import Config
from session.input_session import InputSession, default_registry


@pytest.fixture
def trie():
    return TrieEngine()


@pytest.fixture
def session(trie):
    registry = EngineRegistry()
    registry.register(trie)
    return InputSession(registry, KeyboardLayout.KEYS8, default_word_frequency=1000)


def tap_all(session, keys):
    update = None
    for key in keys:
        update = session.tap(key)
    return update


def test_layout_grouping_reaches_engine(session, trie):
    assert trie.grouping == GROUPING_8_KEYS
    assert not trie.two_strokes
    session.set_layout("strokes2")
    assert trie.two_strokes


def test_candidates_follow_keys(session, trie):
    trie.insert("ad", 10)
    trie.insert("bee", 5)

    update = session.tap(0)
    assert update.words == ["ad", "bee"]
    assert update.current_word == "a"

    update = session.tap(1)
    assert update.keys == [0, 1]
    assert update.candidates[0] == WordCandidate("ad", 10)
    assert update.current_word == "ad"


def test_unresolved_word_shows_placeholder(session):
    update = tap_all(session, [0, 1])
    assert update.unresolved
    assert update.candidates == []
    assert update.current_word == "??"


def test_backspace_on_empty_session_is_noop(session):
    update = session.backspace()
    assert update.keys == []
    assert update.sentence == ""
    assert session.state.kind == StrokeKind.IDLE


def test_backspace_removes_last_key_then_sentence(session, trie):
    trie.insert("ad", 10)
    tap_all(session, [0, 1])
    assert session.backspace().keys == [0]
    session.commit("ad")
    assert session.sentence == "ad "
    assert session.backspace().sentence == "ad"


def test_commit_learns_words(session, trie):
    trie.insert("ad", 10)
    tap_all(session, [0, 1])
    update = session.commit()
    assert update.committed == "ad"
    assert update.sentence == "ad "
    assert update.keys == []
    assert session.user_lexicon.rating("ad") == 1
    assert "ad" not in session.user_lexicon
    assert trie.suggest([0, 1]) == [WordCandidate("ad", 1001)]

    session.commit("Zed")
    assert "zed" in session.user_lexicon
    assert trie.contains("zed")
    assert session.sentence == "ad zed "


def test_commit_without_candidates_does_nothing(session):
    tap_all(session, [0, 1])
    update = session.commit()
    assert update.committed is None
    assert update.keys == [0, 1]


def test_select_candidate(session, trie):
    trie.insert("ad", 10)
    trie.insert("be", 5)
    tap_all(session, [0, 1])
    assert session.select_candidate(9).committed is None
    assert session.select_candidate(1).committed == "be"


def test_complete_sentence(session):
    session.commit("hi")
    update = session.complete_sentence()
    assert update.completed.text == "hi"
    assert update.sentence == ""
    assert [r.text for r in session.history] == ["hi"]
    assert session.complete_sentence().completed is None


def test_two_stroke_literal_candidate(session):
    session.set_layout(KeyboardLayout.STROKES2)
    update = session.tap(0)
    assert update.marker == Direction.UP_RIGHT
    assert update.keys == []
    update = session.tap(3)
    assert update.keys == [ord("d")]
    assert update.candidates == [WordCandidate("d", 0)]
    assert update.current_word == "d"


def test_layout_change_abandons_word(session):
    tap_all(session, [0, 1])
    update = session.set_layout("keys4")
    assert update.keys == []
    assert session.layout is KeyboardLayout.KEYS4


def test_msr_actions(session):
    session.set_layout(KeyboardLayout.MSR)

    update = tap_all(session, [1, 1])
    assert update.action is MenuAction.YES
    assert update.keys == []

    update = tap_all(session, [0, 0])
    assert update.keys == [ord("a")]
    assert session.has_text

    update = tap_all(session, [4, 1])
    assert update.action is MenuAction.DELETE
    assert update.keys == []

    tap_all(session, [0, 1])
    update = tap_all(session, [1, 1])
    assert update.action is MenuAction.SPEAK
    assert update.committed == "b"
    assert update.sentence == "b "

    update = tap_all(session, [1, 1])
    assert update.action is MenuAction.SPEAK
    assert update.completed.text == "b"
    assert not session.has_text


def test_msr_cancel_keeps_word(session):
    session.set_layout(KeyboardLayout.MSR)
    tap_all(session, [0, 0])
    update = tap_all(session, [2, 4])
    assert update.action is MenuAction.CANCEL
    assert update.keys == [ord("a")]
    assert session.state.kind == StrokeKind.MASTER_MENU


def test_key_markers_for_four_keys(session):
    session.set_layout(KeyboardLayout.KEYS4)
    session.swipe(0, -10)
    session.swipe(0, 10)
    assert session.keys == [0, 3]
    assert session.key_markers() == [Direction.UP, Direction.DOWN]


def test_build_word(session):
    tap_all(session, [0, 1])
    builder = session.build_word()
    builder.advance()
    builder.confirm()
    assert builder.confirm() == "bd"
    session.set_layout(KeyboardLayout.STROKES2)
    with pytest.raises(ValueError):
        session.build_word()


def test_from_config():
    config = Config()
    config.prediction.engine = "hybrid"
    config.keyboard.layout = "keys4"
    session = InputSession.from_config(config)
    assert session.registry.active_type == EngineType.HYBRID
    assert session.layout is KeyboardLayout.KEYS4
    assert session.is_swipe(20.0, 100.0)
    assert set(session.registry.available_engines()) == set(EngineType)


def test_from_config_keeps_engine_when_unavailable():
    registry = EngineRegistry()
    registry.register(TrieEngine())
    registry.register(LexiconEngine(available=False))
    config = Config()
    config.prediction.engine = "native"
    session = InputSession.from_config(config, registry)
    assert session.registry.active_type == EngineType.CUSTOM


def test_default_registry_shares_engines():
    registry = default_registry()
    registry.switch_to(EngineType.HYBRID)
    registry.insert("ad", 10)
    assert registry.get(EngineType.CUSTOM).contains("ad")
    assert registry.get(EngineType.NATIVE).contains("ad")


def test_default_registry_native_engine_uses_system_dictionary():
    registry = default_registry(dictionary_size=1000)
    native = registry.get(EngineType.NATIVE)
    assert native.is_available
    assert native.contains("the")
    assert not registry.get(EngineType.CUSTOM).contains("the")
