import chess
import logging
import random
from enum import Enum
from PyQt5.QtCore import QObject, pyqtSignal
from typing import Callable, Optional, Tuple

from ..config import AUTO_MOVE_DELAY_MS, FIRST_AUTO_MOVE_DELAY_MS, REVERT_DELAY_MS
from .opening_corpus import OpeningCorpus, OpeningRecord
from .position_engine import (
    BoardView, Feedback, GameState, MoveSpec, MoveSubmission, PositionEngine,
)
from .scheduler import ScheduledTask, TaskScheduler

logger = logging.getLogger(__name__)


class SideAssignment(Enum):
    WHITE = "w"
    BLACK = "b"
    BOTH_WHITE = "both-w"   # 雙方都由玩家走，白方視角
    BOTH_BLACK = "both-b"   # 雙方都由玩家走，黑方視角

    @property
    def plays_both(self) -> bool:
        return self in (SideAssignment.BOTH_WHITE, SideAssignment.BOTH_BLACK)

    @property
    def orientation(self) -> chess.Color:
        return chess.BLACK if self in (SideAssignment.BLACK, SideAssignment.BOTH_BLACK) else chess.WHITE

    def controls(self, color: chess.Color) -> bool:
        return self.plays_both or color == self.orientation


class PracticeState(Enum):
    SELECTING_OPENING = "selecting-opening"
    SELECTING_SIDE = "selecting-side"
    AWAITING_MOVE = "awaiting-move"
    AUTO_MOVE = "auto-move"
    COMPLETE = "complete"


class PracticeSession(QObject):
    """單一開局的逐步練習（「走出開局」模式）。

    ### 流程
    1. `select_opening()` ➜ `select_side()` 後進入輪流走棋迴圈。
    2. 玩家走對 ➜ 推進；走錯 ➜ 先顯示錯誤走法，`revert_delay` 毫秒後自動撤回，
       玩家從同一步重試。
    3. 輪到電腦那一方時，延遲後自動走出開局中的下一步（雙方模式不會自動走棋）。
    4. 全部走完 ➜ `complete`，只能重設或換開局。

    所有延遲都透過 `TaskScheduler`；每次重設 / 換開局都會讓先前排程的回呼失效。
    """

    # ---------- Qt Signals ---------- #
    board_changed = pyqtSignal(object)        # BoardView
    info_updated = pyqtSignal(str)            # 文字提示
    move_judged = pyqtSignal(str, bool)       # (san, is_correct)
    opening_completed = pyqtSignal(object)    # OpeningRecord
    progress_changed = pyqtSignal(int, int)   # (step_idx, step_total)
    corpus_error = pyqtSignal(object, int)    # (OpeningRecord, ply)

    # ---------- ctor ---------- #
    def __init__(
        self,
        corpus: OpeningCorpus,
        scheduler: Optional[TaskScheduler] = None,
        auto_move_delay: int = AUTO_MOVE_DELAY_MS,
        first_auto_move_delay: int = FIRST_AUTO_MOVE_DELAY_MS,
        revert_delay: int = REVERT_DELAY_MS,
        rng: Optional[random.Random] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.corpus = corpus
        self.scheduler = scheduler if scheduler is not None else TaskScheduler(self)
        self.auto_move_delay = auto_move_delay
        self.first_auto_move_delay = first_auto_move_delay
        self.revert_delay = revert_delay
        self._rng = rng or random.Random()

        # 狀態
        self.opening: Optional[OpeningRecord] = None
        self.side: Optional[SideAssignment] = None
        self.state = PracticeState.SELECTING_OPENING
        self.game = GameState()
        self.current_index: int = 0
        self.feedback = Feedback.NEUTRAL
        self.hint_visible = False
        self.completed_count = 0

        self._session = 0
        self._pending_revert: Optional[ScheduledTask] = None

    # ---------------------------------------------------------------------
    # 衍生狀態
    # ---------------------------------------------------------------------
    @property
    def expected_moves(self) -> Tuple[str, ...]:
        return self.opening.moves if self.opening else ()

    @property
    def expected_next_move(self) -> Optional[str]:
        if self.current_index < len(self.expected_moves):
            return self.expected_moves[self.current_index]
        return None

    @property
    def move_history(self):
        return self.game.move_history

    @property
    def is_complete(self) -> bool:
        n = len(self.expected_moves)
        return n > 0 and self.current_index >= n

    @property
    def progress(self) -> float:
        n = len(self.expected_moves)
        if n == 0:
            return 0.0
        return min(100.0, 100.0 * self.current_index / n)

    @property
    def is_player_turn(self) -> bool:
        return self.side is not None and self.side.controls(self.game.turn)

    @property
    def is_interactive(self) -> bool:
        return (
            self.state == PracticeState.AWAITING_MOVE
            and self._pending_revert is None
            and self.is_player_turn
        )

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def select_opening(self, opening: OpeningRecord) -> None:
        """換開局：丟棄所有狀態，回到選邊階段。"""
        self._invalidate()
        self.opening = opening
        self.side = None
        self.state = PracticeState.SELECTING_SIDE
        self._clear_board()
        logger.info(f"選擇開局: {opening.name} ({opening.eco})")
        self.info_updated.emit("請選擇執棋方。")
        self._emit_state()

    def select_side(self, side: SideAssignment) -> None:
        if self.opening is None:
            logger.warning("尚未選擇開局，忽略選邊。")
            return
        self.side = side
        logger.info(f"'{self.opening.name}' 以 {side.value} 開始練習。")
        self.reset()

    def reset(self) -> None:
        """回到初始局面並重新開始本條路線；連續呼叫兩次與一次等價。"""
        self._invalidate()
        self._clear_board()
        if self.opening is None or self.side is None:
            self._emit_state()
            return
        self.state = PracticeState.AWAITING_MOVE
        self._process_next_position()

    def next_opening(self) -> None:
        """依資料庫順序換下一個開局，保留目前的執棋方。"""
        if self.opening is None:
            return
        side = self.side
        self.select_opening(self.corpus.next_after(self.opening.id))
        if side is not None:
            self.select_side(side)

    def random_opening(self) -> None:
        self.select_opening(self.corpus.random_opening(self._rng))

    def shutdown(self) -> None:
        self._invalidate()

    def submit_move(self, move_spec: MoveSpec) -> MoveSubmission:
        if not self.is_interactive:
            logger.debug(f"目前不接受走法 (state={self.state.value})")
            return MoveSubmission(False)

        outcome = PositionEngine.apply_move(self.game.board, move_spec)
        if not outcome.ok:
            return MoveSubmission(False)

        expected = self.expected_next_move
        previous_board = self.game.board
        self.game.push(outcome)

        if outcome.san == expected:
            # 正確 — 推進
            logger.debug(f"第 {self.current_index + 1} 步正確: {outcome.san}")
            self.current_index += 1
            self.feedback = Feedback.CORRECT
            self.hint_visible = False
            self.move_judged.emit(outcome.san, True)
            self._process_next_position()
            return MoveSubmission(True, outcome.san, True)

        # 錯誤 — 先顯示，延遲後撤回
        logger.debug(f"第 {self.current_index + 1} 步錯誤: {outcome.san}（應為 {expected}）")
        self.feedback = Feedback.INCORRECT
        self.move_judged.emit(outcome.san, False)
        self.info_updated.emit(f"錯誤！{outcome.san} 不是這條路線的走法。")
        self._pending_revert = self._schedule(self.revert_delay, lambda: self._revert_move(previous_board))
        self._emit_state()
        return MoveSubmission(True, outcome.san, False)

    def hint_square(self) -> Optional[str]:
        """回傳下一步應移動棋子的起點格；不是玩家回合或已走完時為 None。"""
        expected = self.expected_next_move
        if expected is None or not self.is_player_turn or self._pending_revert is not None:
            return None
        for move in PositionEngine.legal_moves(self.game.board):
            if move.san == expected:
                return move.from_square
        return None

    def request_hint(self) -> Optional[str]:
        self.hint_visible = True
        square = self.hint_square()
        self._emit_state()
        return square

    def board_view(self) -> BoardView:
        return BoardView(
            fen=self.game.fen,
            interactive=self.is_interactive,
            hint_square=self.hint_square() if self.hint_visible else None,
            feedback=self.feedback,
            orientation=self.side.orientation if self.side else chess.WHITE,
        )

    # ---------------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------------
    def _process_next_position(self) -> None:
        # 線結束？
        if self.is_complete:
            self.state = PracticeState.COMPLETE
            self.completed_count += 1
            logger.info(f"完成開局 '{self.opening.name}'（累計 {self.completed_count} 個）")
            self.info_updated.emit(f"恭喜！你已完整走出 {self.opening.name}。")
            self.opening_completed.emit(self.opening)
            self._emit_state()
            return

        # 電腦回合？
        if not self.side.controls(self.game.turn):
            self.state = PracticeState.AUTO_MOVE
            delay = self.first_auto_move_delay if self.current_index == 0 else self.auto_move_delay
            self.info_updated.emit("電腦走棋中…")
            self._schedule(delay, self._execute_computer_move)
            self._emit_state()
            return

        # 玩家回合
        self.state = PracticeState.AWAITING_MOVE
        self.info_updated.emit("輪到你了。")
        self._emit_state()

    def _execute_computer_move(self) -> None:
        """執行電腦走棋（延遲後調用）"""
        if self.state != PracticeState.AUTO_MOVE:
            return
        expected = self.expected_next_move
        outcome = PositionEngine.apply_move(self.game.board, expected)
        if not outcome.ok:
            # 資料損毀：停在最後一個正確局面，不自行補棋
            logger.error(
                f"開局資料損毀: '{self.opening.name}' 第 {self.current_index + 1} 個半步 '{expected}' 無法套用。"
            )
            self.info_updated.emit("開局資料有誤，無法繼續。")
            self.corpus_error.emit(self.opening, self.current_index)
            self._emit_state()
            return

        logger.debug(f"電腦走棋: {outcome.san}")
        self.game.push(outcome)
        self.current_index += 1
        self.feedback = Feedback.CORRECT
        self._process_next_position()

    def _revert_move(self, previous_board: chess.Board) -> None:
        self._pending_revert = None
        self.game.pop(previous_board)
        self.feedback = Feedback.NEUTRAL
        self.info_updated.emit("請再試一次。")
        self._emit_state()

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        session = self._session

        def run():
            if session != self._session:
                logger.debug("略過已過期的排程任務。")
                return
            callback()

        return self.scheduler.single_shot(delay_ms, run)

    def _invalidate(self) -> None:
        self._session += 1
        self.scheduler.cancel_all()
        self._pending_revert = None

    def _clear_board(self) -> None:
        self.game.reset()
        self.current_index = 0
        self.feedback = Feedback.NEUTRAL
        self.hint_visible = False

    def _emit_state(self) -> None:
        self.board_changed.emit(self.board_view())
        self.progress_changed.emit(self.current_index, len(self.expected_moves))
