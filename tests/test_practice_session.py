import chess
import pytest

from opening_trainer.core.opening_corpus import OpeningCorpus
from opening_trainer.core.position_engine import Feedback, MoveAttempt, PositionEngine
from opening_trainer.core.practice_session import PracticeSession, PracticeState, SideAssignment

from conftest import make_record

ITALIAN = ["e4", "e5", "Nf3", "Nc6", "Bc4", "Bc5"]


@pytest.fixture
def corpus():
    return OpeningCorpus([
        make_record("italian", ITALIAN, name="Italian Game"),
        make_record("sicilian", ["e4", "c5"], name="Sicilian Defense"),
        make_record("broken", ["e4", "Ke7"], name="Broken Line"),
    ])


@pytest.fixture
def session(corpus, scheduler):
    return PracticeSession(
        corpus, scheduler=scheduler, auto_move_delay=400, first_auto_move_delay=500, revert_delay=500,
    )


def start(session, corpus, opening_id, side):
    session.select_opening(corpus.get(opening_id))
    session.select_side(side)


def snapshot(session):
    return (
        session.state, session.game.fen, list(session.move_history), session.current_index,
        session.feedback, session.hint_visible, len(session.scheduler.pending),
    )


def test_moves_rejected_until_side_selected(session, corpus):
    assert session.state == PracticeState.SELECTING_OPENING
    assert not session.submit_move("e4").success
    session.select_opening(corpus.get("italian"))
    assert session.state == PracticeState.SELECTING_SIDE
    assert not session.submit_move("e4").success
    assert session.move_history == []


def test_exact_play_as_white_completes_once(session, corpus, scheduler):
    completed = []
    session.opening_completed.connect(completed.append)
    start(session, corpus, "italian", SideAssignment.WHITE)
    assert session.state == PracticeState.AWAITING_MOVE

    for san in ITALIAN[0::2]:
        assert not session.is_complete
        result = session.submit_move(san)
        assert result.success and result.is_correct
        assert session.feedback == Feedback.CORRECT
        assert session.state == PracticeState.AUTO_MOVE
        scheduler.advance(400)

    assert session.is_complete
    assert session.state == PracticeState.COMPLETE
    assert session.current_index == len(ITALIAN)
    assert session.progress == 100
    assert session.move_history == ITALIAN
    assert completed == [corpus.get("italian")]
    assert session.completed_count == 1
    assert not session.submit_move("O-O").success


def test_progress_tracks_index(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.WHITE)
    assert session.progress == 0
    session.submit_move("e4")
    scheduler.advance(400)
    session.submit_move("Nf3")
    assert session.current_index == 3
    assert session.progress == pytest.approx(50.0)


def test_wrong_move_is_shown_then_reverted(session, corpus, scheduler):
    judged = []
    session.move_judged.connect(lambda san, ok: judged.append((san, ok)))
    start(session, corpus, "italian", SideAssignment.WHITE)
    before_fen = session.game.fen

    result = session.submit_move(MoveAttempt("d2", "d4"))
    assert result.success and result.is_correct is False
    assert session.feedback == Feedback.INCORRECT
    assert session.move_history == ["d4"]
    assert session.current_index == 0
    assert not session.board_view().interactive
    assert not session.submit_move("e5").success
    assert judged == [("d4", False)]

    scheduler.advance(499)
    assert session.move_history == ["d4"]
    scheduler.advance(1)
    assert session.move_history == []
    assert session.game.fen == before_fen
    assert session.feedback == Feedback.NEUTRAL
    assert session.current_index == 0
    assert session.board_view().interactive
    assert session.submit_move("e4").is_correct


def test_illegal_move_changes_nothing(session, corpus):
    start(session, corpus, "italian", SideAssignment.WHITE)
    before = snapshot(session)
    assert not session.submit_move("e5").success
    assert not session.submit_move(MoveAttempt("e1", "e3")).success
    assert snapshot(session) == before


def test_computer_opens_when_playing_black(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.BLACK)
    assert session.state == PracticeState.AUTO_MOVE
    assert session.board_view().orientation == chess.BLACK
    assert not session.board_view().interactive
    scheduler.advance(499)
    assert session.move_history == []
    scheduler.advance(1)
    assert session.move_history == ["e4"]
    assert session.state == PracticeState.AWAITING_MOVE
    assert session.hint_square() == "e7"


def test_hint_only_on_controlled_turn(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.WHITE)
    assert session.hint_square() == "e2"
    assert session.board_view().hint_square is None
    assert session.request_hint() == "e2"
    assert session.board_view().hint_square == "e2"

    session.submit_move("e4")
    assert session.hint_square() is None
    assert session.board_view().hint_square is None
    scheduler.run_until_idle()
    assert session.hint_square() == "g1"


def test_both_sides_has_no_auto_moves_and_always_hints(session, corpus, scheduler):
    start(session, corpus, "sicilian", SideAssignment.BOTH_BLACK)
    assert session.board_view().orientation == chess.BLACK
    assert session.submit_move("e4").is_correct
    assert scheduler.pending == []
    assert session.state == PracticeState.AWAITING_MOVE
    assert session.hint_square() == "c7"
    assert session.submit_move("c5").is_correct
    assert session.is_complete
    assert session.hint_square() is None


def test_reset_is_idempotent(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.BLACK)
    scheduler.advance(500)
    session.submit_move("e5")
    session.reset()
    once = snapshot(session)
    session.reset()
    assert snapshot(session) == once
    assert session.move_history == []
    assert session.current_index == 0


def test_stale_callback_after_new_selection_is_noop(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.BLACK)
    stale = scheduler.pending[0].callback
    session.select_opening(corpus.get("sicilian"))
    assert scheduler.pending == []
    stale()
    assert session.move_history == []
    assert session.state == PracticeState.SELECTING_SIDE


def test_stale_revert_after_reset_is_noop(session, corpus, scheduler):
    start(session, corpus, "sicilian", SideAssignment.BOTH_WHITE)
    session.submit_move("e4")
    session.submit_move("e5")  # 錯誤，排程撤回
    stale = scheduler.pending[0].callback
    session.reset()
    session.submit_move("e4")
    stale()
    assert session.move_history == ["e4"]


def test_next_opening_keeps_side(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.BLACK)
    session.next_opening()
    assert session.opening.id == "sicilian"
    assert session.side == SideAssignment.BLACK
    assert session.state == PracticeState.AUTO_MOVE


def test_corrupt_auto_move_stops_without_fabricating(session, corpus, scheduler):
    errors = []
    session.corpus_error.connect(lambda record, ply: errors.append((record.id, ply)))
    start(session, corpus, "broken", SideAssignment.WHITE)
    session.submit_move("e4")
    scheduler.advance(400)
    assert errors == [("broken", 1)]
    assert session.move_history == ["e4"]
    assert session.current_index == 1
    assert not session.is_complete
    assert scheduler.pending == []


def test_history_replays_to_reported_position(session, corpus, scheduler):
    start(session, corpus, "italian", SideAssignment.WHITE)
    session.submit_move("e4")
    scheduler.advance(400)
    session.submit_move("Nf3")
    scheduler.advance(400)
    replay = PositionEngine.replay(session.move_history)
    assert replay.error_index is None
    assert replay.fens[-1] == session.game.fen
