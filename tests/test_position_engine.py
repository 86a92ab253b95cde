import chess

from opening_trainer.core.position_engine import GameState, MoveAttempt, PositionEngine


def test_apply_san_returns_new_board_and_san():
    board = PositionEngine.initial()
    outcome = PositionEngine.apply_move(board, "e4")
    assert outcome.ok
    assert outcome.san == "e4"
    assert outcome.board.piece_at(chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)
    # 原棋盤不變
    assert board.fen() == chess.STARTING_FEN


def test_apply_move_attempt_from_squares():
    board = PositionEngine.initial()
    outcome = PositionEngine.apply_move(board, MoveAttempt("g1", "f3"))
    assert outcome.ok
    assert outcome.san == "Nf3"


def test_illegal_and_garbage_moves_are_rejected():
    board = PositionEngine.initial()
    for spec in ["e5", "Ke2", "xyz", "", MoveAttempt("e2", "e5"), MoveAttempt("z9", "e4")]:
        outcome = PositionEngine.apply_move(board, spec)
        assert not outcome.ok
        assert outcome.board is None
    assert board.fen() == chess.STARTING_FEN


def test_pawn_reaching_last_rank_promotes_to_queen_by_default():
    board = chess.Board("8/P6k/8/8/8/8/8/K7 w - - 0 1")
    outcome = PositionEngine.apply_move(board, MoveAttempt("a7", "a8"))
    assert outcome.ok
    assert outcome.san.startswith("a8=Q")

    under = PositionEngine.apply_move(board, MoveAttempt("a7", "a8", promotion="n"))
    assert under.ok
    assert under.san.startswith("a8=N")


def test_legal_moves_expose_san_and_squares():
    moves = PositionEngine.legal_moves(PositionEngine.initial())
    assert len(moves) == 20
    knight = next(m for m in moves if m.san == "Nf3")
    assert (knight.from_square, knight.to_square) == ("g1", "f3")


def test_replay_stops_at_first_inapplicable_move():
    replay = PositionEngine.replay(["e4", "e5", "Qxf7", "Nc6"])
    assert replay.error_index == 2
    assert replay.san == ["e4", "e5"]
    assert len(replay.fens) == 3
    assert replay.fens[0] == chess.STARTING_FEN


def test_game_state_matches_replay_of_history():
    state = GameState()
    for san in ["d4", "Nf6", "c4", "e6", "Nc3", "Bb4"]:
        state.push(PositionEngine.apply_move(state.board, san))
    replay = PositionEngine.replay(state.move_history)
    assert replay.error_index is None
    assert replay.fens[-1] == state.fen
