import chess

from opening_trainer.core.open_play_session import MatchStatus, OpenPlaySession, match_openings
from opening_trainer.core.opening_corpus import OpeningCorpus
from opening_trainer.core.position_engine import MoveAttempt, PositionEngine

from conftest import make_record


def play(session, moves):
    for san in moves:
        assert session.submit_move(san).success


def test_shared_prefix_is_extendable(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4", "e5"])
    result = session.result
    assert result.status == MatchStatus.IN_PROGRESS
    assert result.exact == ()
    assert [(c.opening.id, c.next_move) for c in result.extendable] == [("A", "Nf3"), ("B", "Nc3")]


def test_full_line_with_no_extension_is_matched(small_corpus):
    ended = []
    session = OpenPlaySession(small_corpus)
    session.game_ended.connect(ended.append)
    play(session, ["e4", "e5", "Nf3"])
    assert session.status == MatchStatus.MATCHED
    assert session.result.matched_opening.id == "A"
    assert session.is_finished
    assert len(ended) == 1
    assert not session.submit_move("Nc6").success
    assert not session.board_view().interactive


def test_leaving_the_book_is_terminal(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4", "d5"])
    assert session.status == MatchStatus.OFF_BOOK
    assert session.result.candidates == ()
    assert not session.submit_move("exd5").success
    assert session.move_history == ["e4", "d5"]


def test_exact_with_longer_line_stays_in_progress():
    corpus = OpeningCorpus([
        make_record("kg", ["e4", "e5", "f4"]),
        make_record("kga", ["e4", "e5", "f4", "exf4"]),
    ])
    result = match_openings(corpus, ["e4", "e5", "f4"])
    assert result.status == MatchStatus.IN_PROGRESS
    assert [op.id for op in result.exact] == ["kg"]
    assert [c.next_move for c in result.extendable] == ["exf4"]
    assert match_openings(corpus, ["e4", "e5", "f4", "exf4"]).matched_opening.id == "kga"


def test_tie_break_uses_corpus_order():
    corpus = OpeningCorpus([
        make_record("second-name", ["d4", "f5"]),
        make_record("first-name", ["d4", "f5"]),
    ])
    assert match_openings(corpus, ["d4", "f5"]).matched_opening.id == "second-name"


def test_candidates_listed_shortest_first():
    corpus = OpeningCorpus([
        make_record("long", ["e4", "c5", "Nf3"]),
        make_record("short", ["e4", "c5"]),
        make_record("mid", ["e4"]),
    ])
    result = match_openings(corpus, ["e4"])
    assert [op.id for op in result.candidates] == ["mid", "short", "long"]


def test_history_longer_than_line_does_not_match():
    corpus = OpeningCorpus([make_record("english", ["c4"])])
    assert match_openings(corpus, ["c4", "e5"]).status == MatchStatus.OFF_BOOK


def test_illegal_move_changes_nothing(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4"])
    assert not session.submit_move(MoveAttempt("e7", "e4")).success
    assert session.move_history == ["e4"]
    assert session.status == MatchStatus.IN_PROGRESS


def test_reset_returns_to_empty_in_progress(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4", "d5"])
    session.reset()
    assert session.status == MatchStatus.IN_PROGRESS
    assert session.result.candidates == ()
    assert session.game.fen == chess.STARTING_FEN
    assert session.board_view().interactive
    session.reset()
    assert session.move_history == []
    assert session.submit_move("e4").success


def test_select_side_sets_orientation(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4"])
    session.select_side(chess.BLACK)
    assert session.board_view().orientation == chess.BLACK
    assert session.move_history == []


def test_position_matches_replayed_history(small_corpus):
    session = OpenPlaySession(small_corpus)
    play(session, ["e4", "e5", "Nc3"])
    assert PositionEngine.replay(session.move_history).fens[-1] == session.game.fen
