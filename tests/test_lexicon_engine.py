import pytest

from gestures.layouts import GROUPING_8_KEYS
from prediction.engine import UnsupportedWordError, WordCandidate
from prediction.lexicon_engine import LexiconEngine


@pytest.fixture
def engine():
    engine = LexiconEngine(GROUPING_8_KEYS)
    for word, freq in [("ad", 10), ("bee", 50), ("cafe", 20), ("dog", 99)]:
        engine.insert(word, freq)
    return engine


def test_empty_input_returns_nothing(engine):
    assert engine.suggest([]) == []


def test_completions_include_longer_words(engine):
    assert engine.suggest([0, 1]) == [
        WordCandidate("bee", 50),
        WordCandidate("ad", 10),
    ]
    assert engine.suggest([0, 0]) == [WordCandidate("cafe", 20)]
    assert engine.suggest([0, 1, 1, 1]) == []


def test_results_limited_to_ten():
    engine = LexiconEngine(GROUPING_8_KEYS)
    for i, suffix in enumerate("abcdefghijkl"):
        engine.insert("a" + suffix, i)
    results = engine.suggest([0])
    assert len(results) == LexiconEngine.MAX_RESULTS
    assert results[0] == WordCandidate("al", 11)


def test_cache_hits_and_invalidation(engine):
    engine.suggest([0, 1])
    engine.suggest([0, 1])
    assert engine.metrics.cache_hits == 1

    engine.insert("add", 70)
    assert engine.suggest([0, 1])[0] == WordCandidate("add", 70)
    assert engine.metrics.cache_hits == 1


def test_cache_eviction():
    def sequence(i):
        return [i // 512 % 8, i // 64 % 8, i // 8 % 8, i % 8]

    engine = LexiconEngine(GROUPING_8_KEYS)
    engine.insert("ad", 1)
    for i in range(LexiconEngine.CACHE_LIMIT):
        engine.suggest(sequence(i))
    assert engine.metrics.cache_hits == 0

    # Full cache: the next miss drops the oldest entries
    engine.suggest([7, 7, 7, 7, 7])
    engine.suggest(sequence(LexiconEngine.CACHE_EVICTION - 1))
    assert engine.metrics.cache_hits == 0
    engine.suggest(sequence(LexiconEngine.CACHE_EVICTION))
    engine.suggest(sequence(LexiconEngine.CACHE_LIMIT - 1))
    assert engine.metrics.cache_hits == 2


def test_unsupported_word(engine):
    with pytest.raises(UnsupportedWordError) as exc:
        engine.insert("it's", 1)
    assert exc.value.char == "'"
    assert not engine.contains("it's")


def test_availability_flag():
    assert LexiconEngine().is_available
    assert not LexiconEngine(available=False).is_available


def test_load_dictionary_skips_untypeable_words():
    engine = LexiconEngine(GROUPING_8_KEYS)
    assert engine.load_dictionary([("Ad", 5), ("it's", 9), ("bee", 7)]) == 2
    assert len(engine) == 2
    assert engine.suggest([0, 1]) == [WordCandidate("bee", 7), WordCandidate("ad", 5)]


def test_seeded_from_system_dictionary():
    engine = LexiconEngine.from_system_dictionary(GROUPING_8_KEYS, size=500)
    assert engine.is_available
    assert len(engine) > 400
    assert engine.contains("the")
    assert engine.suggest(engine.keys_for_word("th"))[0].text == "the"


def test_missing_system_dictionary_leaves_engine_unavailable(monkeypatch):
    def no_word_list(language, size):
        raise LookupError(f"No wordlist available for language {language!r}")

    monkeypatch.setattr("prediction.system_dictionary.top_n_list", no_word_list)
    engine = LexiconEngine.from_system_dictionary(language="xx")
    assert not engine.is_available
    assert len(engine) == 0
