# opening_trainer/gui/main_window.py
import logging
from PyQt5 import QtCore, QtGui, QtWidgets

from ..config import WINDOW_SIZE, WINDOW_TITLE
from ..core.open_play_session import OpenPlaySession
from ..core.opening_corpus import OpeningCorpus
from ..core.practice_session import PracticeSession
from ..core.quiz_session import QuizSession, QuizStats
from .components.chess_board import ChessBoardWidget
from .tabs.open_play_tab import OpenPlayTab
from .tabs.practice_tab import PracticeTab
from .tabs.quiz_tab import QuizTab

logger = logging.getLogger(__name__)


# --- 棋盤容器 ---
class ChessBoardContainer(QtWidgets.QWidget):
    def __init__(self, board_widget: QtWidgets.QWidget, parent=None):
        super().__init__(parent)
        self.board_widget = board_widget
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        v_layout = QtWidgets.QVBoxLayout()
        v_layout.addStretch(1)
        v_layout.addWidget(self.board_widget, 0, QtCore.Qt.AlignCenter)
        v_layout.addStretch(1)
        layout.addLayout(v_layout)

    def resizeEvent(self, event: QtGui.QResizeEvent):
        super().resizeEvent(event)
        # 强制棋盘为正方形
        new_size = min(self.width(), self.height())
        self.board_widget.setFixedSize(new_size, new_size)


class TrainerMainWindow(QtWidgets.QMainWindow):
    """
    左側棋盤、右側三個分頁（練習 / 自由對局 / 測驗）。
    目前分頁決定棋盤顯示哪個模式的局面，以及走法交給哪個模式處理。
    """

    def __init__(self, corpus: OpeningCorpus):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*WINDOW_SIZE)

        self.corpus = corpus

        # --- Session Management ---
        self.quiz_stats = QuizStats()
        self.practice_session = PracticeSession(corpus, parent=self)
        self.open_play_session = OpenPlaySession(corpus, parent=self)
        self.quiz_session = QuizSession(corpus, stats=self.quiz_stats, parent=self)

        self._setup_central_widget()
        self._connect_signals()

        self.practice_tab.update_opening_list(list(corpus))
        self.open_play_session.reset()
        self.quiz_tab.update_stats(self.quiz_stats)
        self.on_tab_changed(self.tab_widget.currentIndex())

    def _setup_central_widget(self):
        main_widget = QtWidgets.QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QtWidgets.QHBoxLayout(main_widget)
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(10)

        # --- Left Panel (Chessboard) ---
        self.chessboard = ChessBoardWidget()
        board_container = ChessBoardContainer(self.chessboard)
        main_layout.addWidget(board_container, 5)  # 給予棋盤更大的拉伸因子

        # --- Right Panel (Tabs) ---
        self.tab_widget = QtWidgets.QTabWidget()
        self.practice_tab = PracticeTab()
        self.open_play_tab = OpenPlayTab()
        self.quiz_tab = QuizTab()

        self.tab_widget.addTab(self.practice_tab, "開局練習")
        self.tab_widget.addTab(self.open_play_tab, "自由對局")
        self.tab_widget.addTab(self.quiz_tab, "猜開局")

        main_layout.addWidget(self.tab_widget, 4)

    def _connect_signals(self):
        self.chessboard.moveAttempted.connect(self.on_move_attempted)
        self.tab_widget.currentChanged.connect(self.on_tab_changed)

        # 開局練習
        ps = self.practice_session
        self.practice_tab.start_requested.connect(self.start_practice)
        self.practice_tab.hint_requested.connect(ps.request_hint)
        self.practice_tab.reset_requested.connect(ps.reset)
        self.practice_tab.next_requested.connect(ps.next_opening)
        self.practice_tab.random_requested.connect(self.random_practice)
        ps.board_changed.connect(self.on_practice_board_changed)
        ps.info_updated.connect(self.practice_tab.info_label.setText)
        ps.progress_changed.connect(self.practice_tab.update_progress)
        ps.opening_completed.connect(
            lambda _op: self.practice_tab.progress_panel.update_completed(ps.completed_count)
        )
        ps.corpus_error.connect(self.on_corpus_error)

        # 自由對局
        op = self.open_play_session
        self.open_play_tab.new_game_requested.connect(op.select_side)
        op.board_changed.connect(self.on_open_play_board_changed)
        op.match_updated.connect(self.open_play_tab.show_result)

        # 測驗
        qs = self.quiz_session
        self.quiz_tab.start_requested.connect(qs.select_orientation)
        self.quiz_tab.next_requested.connect(qs.generate_question)
        self.quiz_tab.replay_requested.connect(qs.replay)
        self.quiz_tab.answer_selected.connect(self.on_quiz_answer)
        self.quiz_tab.reset_stats_requested.connect(qs.reset_stats)
        qs.question_started.connect(self.quiz_tab.show_question)
        qs.board_changed.connect(self.on_quiz_board_changed)
        qs.answer_checked.connect(self.quiz_tab.show_answer)
        qs.stats_changed.connect(self.quiz_tab.update_stats)
        qs.corpus_error.connect(self.on_corpus_error)

    # --- 開局練習 ---
    def start_practice(self, opening_id: str, side):
        opening = self.corpus.get(opening_id)
        if not opening:
            return
        self.practice_session.select_opening(opening)
        self.practice_session.select_side(side)

    def random_practice(self):
        self.practice_session.random_opening()
        self.practice_session.select_side(self.practice_tab.current_side())

    def on_practice_board_changed(self, view):
        ps = self.practice_session
        if ps.opening is not None:
            self.practice_tab.show_opening(ps.opening)
        self.practice_tab.update_moves(ps.move_history)
        if self.tab_widget.currentWidget() is self.practice_tab:
            self.chessboard.set_view(view)

    # --- 自由對局 ---
    def on_open_play_board_changed(self, view):
        self.open_play_tab.update_moves(self.open_play_session.move_history)
        if self.tab_widget.currentWidget() is self.open_play_tab:
            self.chessboard.set_view(view)

    # --- 測驗 ---
    def on_quiz_board_changed(self, view):
        qs = self.quiz_session
        question = qs.question
        self.quiz_tab.update_moves(qs.displayed_moves)
        self.quiz_tab.set_animating(qs.is_animating, question is not None and question.answered)
        if self.tab_widget.currentWidget() is self.quiz_tab:
            self.chessboard.set_view(view)

    def on_quiz_answer(self, option):
        if self.quiz_session.select_answer(option):
            self.quiz_tab.set_animating(False, True)

    # --- 共用 ---
    def on_tab_changed(self, index):
        """切換分頁時，棋盤改顯示該模式的局面。"""
        current_tab = self.tab_widget.widget(index)
        if current_tab is self.practice_tab:
            self.chessboard.set_view(self.practice_session.board_view())
        elif current_tab is self.open_play_tab:
            self.chessboard.set_view(self.open_play_session.board_view())
        elif current_tab is self.quiz_tab:
            self.chessboard.set_view(self.quiz_session.board_view())

    def on_move_attempted(self, attempt):
        current_tab = self.tab_widget.currentWidget()
        if current_tab is self.practice_tab:
            result = self.practice_session.submit_move(attempt)
        elif current_tab is self.open_play_tab:
            result = self.open_play_session.submit_move(attempt)
        else:
            return
        if not result.success:
            logger.debug(f"走法被拒絕: {attempt}")

    def on_corpus_error(self, opening, ply):
        QtWidgets.QMessageBox.warning(
            self, "開局資料錯誤",
            f"'{opening.name}' 的第 {ply + 1} 個半步無法套用，請檢查開局資料。",
        )

    def closeEvent(self, event: QtGui.QCloseEvent):
        # 關閉前取消所有排程，避免回呼在視窗銷毀後執行
        self.practice_session.shutdown()
        self.quiz_session.shutdown()
        super().closeEvent(event)
