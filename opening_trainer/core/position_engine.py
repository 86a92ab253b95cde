# opening_trainer/core/position_engine.py
import chess
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveAttempt:
    """棋盤介面送回的走法嘗試：起點、終點、可選的升變棋子（q/r/b/n）。"""
    from_square: str
    to_square: str
    promotion: Optional[str] = None


MoveSpec = Union[str, MoveAttempt, chess.Move]


class MoveOutcome(NamedTuple):
    ok: bool
    board: Optional[chess.Board] = None
    san: Optional[str] = None


class LegalMove(NamedTuple):
    san: str
    from_square: str
    to_square: str


class MoveSubmission(NamedTuple):
    """各模式 submit_move() 的回傳值；success 即棋盤介面的「接受」旗標。"""
    success: bool
    san: Optional[str] = None
    is_correct: Optional[bool] = None


class Feedback(Enum):
    """走法結果旗標，供棋盤做短暫的視覺回饋。"""
    NEUTRAL = "neutral"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class BoardView(NamedTuple):
    """棋盤介面每次重繪所需的全部資訊。"""
    fen: str
    interactive: bool
    hint_square: Optional[str] = None
    feedback: Feedback = Feedback.NEUTRAL
    orientation: chess.Color = chess.WHITE


class Replay(NamedTuple):
    boards: List[chess.Board]
    san: List[str]
    error_index: Optional[int]  # 第一個無法套用的走法；None 表示全部成功

    @property
    def fens(self) -> List[str]:
        return [board.fen() for board in self.boards]


class PositionEngine:
    """
    python-chess 的薄包裝。所有方法都不修改傳入的棋盤，
    而是回傳新的副本，讓各模式的局面永遠能由走法歷史重播得到。
    """

    @staticmethod
    def initial() -> chess.Board:
        return chess.Board()

    @staticmethod
    def to_fen(board: chess.Board) -> str:
        return board.fen()

    @staticmethod
    def _to_move(board: chess.Board, move_spec: MoveSpec) -> chess.Move:
        if isinstance(move_spec, chess.Move):
            return move_spec
        if isinstance(move_spec, MoveAttempt):
            from_sq = chess.parse_square(move_spec.from_square)
            to_sq = chess.parse_square(move_spec.to_square)
            promotion = None
            if move_spec.promotion:
                promotion = chess.Piece.from_symbol(move_spec.promotion.lower()).piece_type
            elif board.piece_type_at(from_sq) == chess.PAWN and chess.square_rank(to_sq) in (0, 7):
                # 與棋盤元件一致：未指定時預設升后
                promotion = chess.QUEEN
            return chess.Move(from_sq, to_sq, promotion=promotion)
        return board.parse_san(move_spec)

    @staticmethod
    def apply_move(board: chess.Board, move_spec: MoveSpec) -> MoveOutcome:
        """套用一步棋；不合法時回傳 MoveOutcome(ok=False)，原棋盤不變。"""
        try:
            move = PositionEngine._to_move(board, move_spec)
        except ValueError as e:
            # IllegalMoveError / InvalidMoveError / AmbiguousMoveError 皆為 ValueError
            logger.debug(f"無法解析走法 {move_spec!r}: {e}")
            return MoveOutcome(False)
        if move not in board.legal_moves:
            logger.debug(f"不合法走法: {move_spec!r}")
            return MoveOutcome(False)
        san = board.san(move)
        new_board = board.copy()
        new_board.push(move)
        return MoveOutcome(True, new_board, san)

    @staticmethod
    def legal_moves(board: chess.Board) -> List[LegalMove]:
        return [
            LegalMove(board.san(move), chess.square_name(move.from_square), chess.square_name(move.to_square))
            for move in board.legal_moves
        ]

    @staticmethod
    def replay(moves: Sequence[str], board: Optional[chess.Board] = None) -> Replay:
        """從初始局面依序重播 SAN 走法，遇到無法套用的走法即停止。"""
        current = board.copy() if board is not None else PositionEngine.initial()
        boards = [current]
        played: List[str] = []
        for ply, san in enumerate(moves):
            outcome = PositionEngine.apply_move(current, san)
            if not outcome.ok:
                return Replay(boards, played, ply)
            current = outcome.board
            boards.append(current)
            played.append(outcome.san)
        return Replay(boards, played, None)


class GameState:
    """單一模式擁有的可變局面：棋盤 + 目前為止的 SAN 走法歷史。"""

    def __init__(self) -> None:
        self.board: chess.Board = PositionEngine.initial()
        self.move_history: List[str] = []

    @property
    def fen(self) -> str:
        return self.board.fen()

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def push(self, outcome: MoveOutcome) -> None:
        self.board = outcome.board
        self.move_history.append(outcome.san)

    def pop(self, previous_board: chess.Board) -> None:
        self.move_history.pop()
        self.board = previous_board

    def reset(self) -> None:
        self.board = PositionEngine.initial()
        self.move_history = []
