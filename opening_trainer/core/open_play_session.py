import chess
import logging
from dataclasses import dataclass
from enum import Enum
from PyQt5.QtCore import QObject, pyqtSignal
from typing import Optional, Sequence, Tuple

from .opening_corpus import OpeningCorpus, OpeningRecord
from .position_engine import BoardView, GameState, MoveSpec, MoveSubmission, PositionEngine

logger = logging.getLogger(__name__)


class MatchStatus(Enum):
    IN_PROGRESS = "in-progress"
    MATCHED = "matched"
    OFF_BOOK = "off-book"


@dataclass(frozen=True)
class Continuation:
    opening: OpeningRecord
    next_move: str


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    exact: Tuple[OpeningRecord, ...] = ()
    extendable: Tuple[Continuation, ...] = ()

    @property
    def matched_opening(self) -> Optional[OpeningRecord]:
        if self.status == MatchStatus.MATCHED:
            return self.exact[0]
        return None

    @property
    def candidates(self) -> Tuple[OpeningRecord, ...]:
        return self.exact + tuple(c.opening for c in self.extendable)


def _is_prefix(history: Sequence[str], moves: Sequence[str]) -> bool:
    if len(history) > len(moves):
        return False
    return all(a == b for a, b in zip(history, moves))


def match_openings(corpus: Sequence[OpeningRecord], history: Sequence[str]) -> MatchResult:
    """
    以目前的走法歷史對整個開局資料庫做前綴比對。
    每一步都從頭重算，候選集合永遠是 history 的純函數。
    """
    if not history:
        return MatchResult(MatchStatus.IN_PROGRESS)

    matches = [op for op in corpus if _is_prefix(history, op.moves)]
    if not matches:
        return MatchResult(MatchStatus.OFF_BOOK)

    # 短的路線排前面；sorted 為穩定排序，同長度保留資料庫順序
    matches = sorted(matches, key=lambda op: len(op.moves))
    ply = len(history)
    exact = tuple(op for op in matches if len(op.moves) == ply)
    extendable = tuple(Continuation(op, op.moves[ply]) for op in matches if len(op.moves) > ply)

    if exact and not extendable:
        return MatchResult(MatchStatus.MATCHED, exact, ())
    return MatchResult(MatchStatus.IN_PROGRESS, exact, extendable)


class OpenPlaySession(QObject):
    """
    自由對局：玩家雙方都自己走，每一步後與整個開局資料庫比對，
    直到完全吻合某個開局（matched）或離開開局庫（off-book）為止。
    """

    board_changed = pyqtSignal(object)      # BoardView
    match_updated = pyqtSignal(object)      # MatchResult
    game_ended = pyqtSignal(object)         # MatchResult（matched / off-book）

    def __init__(self, corpus: OpeningCorpus, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.corpus = corpus
        self.orientation: chess.Color = chess.WHITE
        self.game = GameState()
        self._finished = False

    @property
    def move_history(self):
        return self.game.move_history

    @property
    def result(self) -> MatchResult:
        return match_openings(self.corpus, self.game.move_history)

    @property
    def status(self) -> MatchStatus:
        return self.result.status

    @property
    def is_finished(self) -> bool:
        return self._finished

    def select_side(self, color: chess.Color) -> None:
        self.orientation = color
        self.reset()

    def submit_move(self, move_spec: MoveSpec) -> MoveSubmission:
        if self.is_finished:
            return MoveSubmission(False)
        outcome = PositionEngine.apply_move(self.game.board, move_spec)
        if not outcome.ok:
            return MoveSubmission(False)

        self.game.push(outcome)
        result = match_openings(self.corpus, self.game.move_history)
        logger.debug(f"自由對局 {outcome.san}: {result.status.value}，候選 {len(result.candidates)} 個")
        if result.status != MatchStatus.IN_PROGRESS:
            self._finished = True
            if result.status == MatchStatus.MATCHED:
                logger.info(f"自由對局吻合開局: {result.matched_opening.name}")
            else:
                logger.info(f"自由對局在第 {len(self.game.move_history)} 個半步離開開局庫。")
        self.match_updated.emit(result)
        if self._finished:
            self.game_ended.emit(result)
        self.board_changed.emit(self.board_view())
        return MoveSubmission(True, outcome.san)

    def reset(self) -> None:
        self.game.reset()
        self._finished = False
        self.match_updated.emit(self.result)
        self.board_changed.emit(self.board_view())

    def board_view(self) -> BoardView:
        return BoardView(
            fen=self.game.fen,
            interactive=not self.is_finished,
            orientation=self.orientation,
        )
