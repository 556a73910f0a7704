import json
import threading

import pytest

from gestures.layouts import GROUPING_8_KEYS
from prediction.engine import DEFAULT_WORD_FREQUENCY, WordCandidate
from prediction.trie_engine import TrieEngine
from prediction.vocabulary import bulk_insert, load_word_frequencies, parse_word_frequencies


@pytest.fixture
def engine():
    return TrieEngine(GROUPING_8_KEYS)


def test_parse_csv_lines():
    lines = ["Hello,42\n", "world,abc\n", "lonely\n", "\n", ",7\n", "again, 5 \n"]
    assert parse_word_frequencies(lines) == [
        ("hello", 42),
        ("world", DEFAULT_WORD_FREQUENCY),
        ("again", 5),
    ]


def test_parse_uses_given_default():
    assert parse_word_frequencies(["yes,?"], default_frequency=7) == [("yes", 7)]


def test_load_csv_file(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("the,100\nad,10\n", encoding="utf-8")
    assert load_word_frequencies(path) == [("the", 100), ("ad", 10)]


def test_load_json_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps({"The": 100, "bee": "many"}), encoding="utf-8")
    assert load_word_frequencies(path) == [("the", 100), ("bee", DEFAULT_WORD_FREQUENCY)]


def test_unreadable_file_yields_nothing(tmp_path):
    assert load_word_frequencies(tmp_path / "missing.csv") == []
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_word_frequencies(bad) == []


def test_bulk_insert_skips_unsupported_words(engine):
    rejected = []
    report = bulk_insert(
        engine,
        [("ad", 10), ("don't", 5), ("bee", 3)],
        on_rejected=lambda word, char: rejected.append((word, char)),
    )
    assert report.inserted == 2
    assert report.rejected == [("don't", "'")]
    assert rejected == [("don't", "'")]
    assert engine.contains("bee")
    assert not report.stopped


def test_bulk_insert_progress_and_stop(engine):
    progress = []
    entries = [("ad", 1), ("be", 2), ("cf", 3), ("dog", 4)]
    report = bulk_insert(
        engine,
        entries,
        on_progress=progress.append,
        should_stop=lambda: len(progress) >= 2,
        progress_interval=1,
    )
    assert report.stopped
    assert report.inserted == 2
    assert progress == [1, 2, 2]
    assert not engine.contains("cf")


def test_queries_during_background_insert(engine):
    entries = [("ad", i) for i in range(2000)]
    thread = threading.Thread(target=bulk_insert, args=(engine, entries))
    thread.start()
    while thread.is_alive():
        # Re-inserts replace the word, never duplicate it
        assert len(engine.suggest([0, 1])) <= 1
    thread.join()
    assert engine.suggest([0, 1]) == [WordCandidate("ad", 1999)]


def test_bulk_insert_stops_writing_once_superseded(engine):
    generation = engine.begin_load()

    def entries():
        yield ("ad", 1)
        engine.begin_load()
        yield ("be", 2)
        yield ("don't", 3)

    report = bulk_insert(engine, entries(), generation=generation)
    assert report.inserted == 1
    assert report.superseded == 2
    assert report.rejected == []
    assert engine.contains("ad")
    assert not engine.contains("be")


def test_insert_for_load(engine):
    first = engine.begin_load()
    assert engine.insert_for_load("ad", 5, first)
    second = engine.begin_load()
    assert not engine.insert_for_load("ad", 1, first)
    assert engine.insert_for_load("be", 2, second)
    assert engine.suggest([0, 1]) == [WordCandidate("ad", 5), WordCandidate("be", 2)]
