import chess
import logging
import random
from dataclasses import dataclass, field
from PyQt5.QtCore import QObject, pyqtSignal
from typing import Callable, List, Optional, Tuple

from ..config import QUIZ_OPTION_COUNT, QUIZ_START_DELAY_MS, QUIZ_STEP_INTERVAL_MS
from .opening_corpus import OpeningCorpus, OpeningRecord
from .position_engine import BoardView, PositionEngine
from .scheduler import ScheduledTask, TaskScheduler

logger = logging.getLogger(__name__)


@dataclass
class QuizStats:
    """整個測驗期間累計的成績；只有 reset() 或重新啟動程式才會歸零。"""
    correct: int = 0
    total: int = 0
    streak: int = 0

    @property
    def accuracy(self) -> int:
        if self.total == 0:
            return 0
        return round(100 * self.correct / self.total)

    def record(self, is_correct: bool) -> None:
        self.total += 1
        if is_correct:
            self.correct += 1
            self.streak += 1
        else:
            self.streak = 0

    def reset(self) -> None:
        self.correct = 0
        self.total = 0
        self.streak = 0


@dataclass
class QuizQuestion:
    answer: OpeningRecord
    options: Tuple[OpeningRecord, ...]
    positions: Tuple[str, ...]            # FEN：初始局面 + 每一步之後
    corrupt_at: Optional[int] = None      # 第一個無法套用的半步
    selected: Optional[OpeningRecord] = field(default=None)

    @property
    def answered(self) -> bool:
        return self.selected is not None

    @property
    def is_correct(self) -> Optional[bool]:
        if self.selected is None:
            return None
        return self.selected.id == self.answer.id


def pick_options(
    corpus: OpeningCorpus,
    answer: OpeningRecord,
    rng: random.Random,
    count: int = QUIZ_OPTION_COUNT,
) -> Tuple[OpeningRecord, ...]:
    """正確答案 + (count - 1) 個不重複的干擾選項，洗牌後回傳。"""
    others = [op for op in corpus if op.id != answer.id]
    options = [answer] + rng.sample(others, min(count - 1, len(others)))
    rng.shuffle(options)
    return tuple(options)


class QuizSession(QObject):
    """
    「猜開局」測驗：播放某個開局的走法動畫，玩家從四個選項中選出名稱。

    動畫播放中不接受作答；播放結束（或重播前）即可作答，
    每題只計分一次。
    """

    board_changed = pyqtSignal(object)       # BoardView
    question_started = pyqtSignal(object)    # QuizQuestion
    playback_finished = pyqtSignal()
    answer_checked = pyqtSignal(bool, object)  # (is_correct, 正確開局)
    stats_changed = pyqtSignal(object)       # QuizStats
    corpus_error = pyqtSignal(object, int)   # (OpeningRecord, ply)

    def __init__(
        self,
        corpus: OpeningCorpus,
        stats: Optional[QuizStats] = None,
        scheduler: Optional[TaskScheduler] = None,
        start_delay: int = QUIZ_START_DELAY_MS,
        step_interval: int = QUIZ_STEP_INTERVAL_MS,
        rng: Optional[random.Random] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if len(corpus) < QUIZ_OPTION_COUNT:
            raise ValueError(f"測驗至少需要 {QUIZ_OPTION_COUNT} 個開局，目前只有 {len(corpus)} 個。")
        self.corpus = corpus
        self.stats = stats if stats is not None else QuizStats()
        self.scheduler = scheduler if scheduler is not None else TaskScheduler(self)
        self.start_delay = start_delay
        self.step_interval = step_interval
        self._rng = rng or random.Random()

        self.orientation: chess.Color = chess.WHITE
        self.question: Optional[QuizQuestion] = None
        self.position_index = 0
        self.is_animating = False

        self._session = 0
        self._ticker: Optional[ScheduledTask] = None

    # ---------------------------------------------------------------------
    # 衍生狀態
    # ---------------------------------------------------------------------
    @property
    def fen(self) -> str:
        if self.question is None:
            return chess.STARTING_FEN
        return self.question.positions[self.position_index]

    @property
    def displayed_moves(self) -> List[str]:
        if self.question is None:
            return []
        return list(self.question.answer.moves[:self.position_index])

    @property
    def playback_complete(self) -> bool:
        return (
            self.question is not None
            and not self.is_animating
            and self.position_index == len(self.question.positions) - 1
        )

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def select_orientation(self, color: chess.Color) -> None:
        self.orientation = color
        self.generate_question()

    def generate_question(self) -> QuizQuestion:
        self._invalidate()
        answer = self._rng.choice(self.corpus)
        options = pick_options(self.corpus, answer, self._rng)

        replay = PositionEngine.replay(answer.moves)
        if replay.error_index is not None:
            logger.error(
                f"開局資料損毀: '{answer.name}' 第 {replay.error_index + 1} 個半步 "
                f"'{answer.moves[replay.error_index]}' 無法套用，動畫將停在前一個局面。"
            )
            self.corpus_error.emit(answer, replay.error_index)

        self.question = QuizQuestion(
            answer=answer,
            options=options,
            positions=tuple(replay.fens),
            corrupt_at=replay.error_index,
        )
        logger.info(f"新題目: {answer.name}（{len(options)} 個選項）")
        self.question_started.emit(self.question)
        self._start_playback()
        return self.question

    def replay(self) -> bool:
        """重播動畫；僅在未作答且不在播放中時允許。"""
        if self.question is None or self.is_animating or self.question.answered:
            return False
        self._invalidate()
        self._start_playback()
        return True

    def select_answer(self, option: OpeningRecord) -> bool:
        question = self.question
        if question is None or question.answered or self.is_animating:
            return False
        if all(op.id != option.id for op in question.options):
            logger.warning(f"選項 '{option.name}' 不在本題選項中，忽略。")
            return False

        question.selected = option
        is_correct = question.is_correct
        self.stats.record(is_correct)
        logger.info(
            f"作答 {'正確' if is_correct else '錯誤'}: 選 {option.name}，答案 {question.answer.name}"
            f"（{self.stats.correct}/{self.stats.total}，連續 {self.stats.streak}）"
        )
        self.answer_checked.emit(is_correct, question.answer)
        self.stats_changed.emit(self.stats)
        return True

    def reset_stats(self) -> None:
        self.stats.reset()
        self.stats_changed.emit(self.stats)

    def shutdown(self) -> None:
        self._invalidate()

    def board_view(self) -> BoardView:
        return BoardView(fen=self.fen, interactive=False, orientation=self.orientation)

    # ---------------------------------------------------------------------
    # Internal – 動畫
    # ---------------------------------------------------------------------
    def _start_playback(self) -> None:
        self.position_index = 0
        self.is_animating = True
        self.board_changed.emit(self.board_view())
        self._schedule(self.start_delay, self._begin_ticking)

    def _begin_ticking(self) -> None:
        self._ticker = self._schedule(self.step_interval, self._advance, repeating=True)

    def _advance(self) -> None:
        nxt = self.position_index + 1
        if nxt >= len(self.question.positions):
            self._stop_playback()
            return
        self.position_index = nxt
        self.board_changed.emit(self.board_view())
        if nxt == len(self.question.positions) - 1:
            self._stop_playback()

    def _stop_playback(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self.is_animating = False
        self.playback_finished.emit()
        self.board_changed.emit(self.board_view())

    def _schedule(self, delay_ms: int, callback: Callable[[], None], *, repeating: bool = False) -> ScheduledTask:
        session = self._session

        def run():
            if session != self._session:
                return
            callback()

        if repeating:
            return self.scheduler.repeating(delay_ms, run)
        return self.scheduler.single_shot(delay_ms, run)

    def _invalidate(self) -> None:
        self._session += 1
        self.scheduler.cancel_all()
        self._ticker = None
        self.is_animating = False
