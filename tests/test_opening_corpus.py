import random

import pytest

from opening_trainer.core.opening_corpus import (
    CorpusDataError, OpeningCorpus, OpeningRecord, format_moves, load_corpus, load_default_corpus,
)

from conftest import make_record


def test_record_requires_moves():
    with pytest.raises(CorpusDataError):
        make_record("empty", [])


def test_record_moves_are_immutable_tuple():
    record = OpeningRecord(id="x", name="X", eco="A00", description="", moves=["e4", "e5"])
    assert record.moves == ("e4", "e5")
    assert record.ply_count == 2


def test_notation_numbers_full_moves():
    record = make_record("it", ["e4", "e5", "Nf3", "Nc6", "Bc4"])
    assert record.notation() == "1. e4 e5 2. Nf3 Nc6 3. Bc4"
    assert format_moves([]) == ""


def test_duplicate_ids_rejected():
    with pytest.raises(CorpusDataError):
        OpeningCorpus([make_record("a", ["e4"]), make_record("a", ["d4"], name="other")])


def test_lookup_and_cyclic_next(small_corpus):
    assert small_corpus.get("B").moves == ("e4", "e5", "Nc3")
    assert small_corpus.get("missing") is None
    assert small_corpus.next_after("A").id == "B"
    assert small_corpus.next_after("B").id == "A"


def test_random_opening_uses_given_rng(small_corpus):
    picks = {small_corpus.random_opening(random.Random(seed)).id for seed in range(20)}
    assert picks <= {"A", "B"}
    assert small_corpus.random_opening(random.Random(3)) == small_corpus.random_opening(random.Random(3))


def test_validate_reports_corrupt_lines(caplog):
    corpus = load_corpus([
        {"id": "ok", "name": "Fine", "moves": ["e4", "e5"]},
        {"id": "bad", "name": "Broken", "moves": ["e4", "e5", "Ke3"]},
    ])
    with caplog.at_level("ERROR"):
        broken = corpus.validate()
    assert [(record.id, ply) for record, ply in broken] == [("bad", 2)]
    assert "Broken" in caplog.text


def test_default_corpus_loads_and_replays_cleanly():
    corpus = load_default_corpus()
    assert len(corpus) >= 4
    assert len({record.id for record in corpus}) == len(corpus)
    assert corpus.validate() == []
