# opening_trainer/gui/tabs/quiz_tab.py
import chess
from PyQt5 import QtWidgets, QtCore

from opening_trainer.config import QUIZ_OPTION_COUNT
from opening_trainer.core.opening_corpus import format_moves

TOP_MARGIN = 20
SIDE_MARGIN = 12


class QuizTab(QtWidgets.QWidget):
    start_requested = QtCore.pyqtSignal(object)   # chess.Color（棋盤視角）
    next_requested = QtCore.pyqtSignal()
    replay_requested = QtCore.pyqtSignal()
    answer_selected = QtCore.pyqtSignal(object)   # OpeningRecord
    reset_stats_requested = QtCore.pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._options = []

        self.layout = QtWidgets.QVBoxLayout(self)
        self.layout.setContentsMargins(15, 15, 15, 15)
        self.layout.setSpacing(12)

        # ---------- 成績 ----------
        stats_group = QtWidgets.QGroupBox("成績")
        stats_layout = QtWidgets.QHBoxLayout(stats_group)
        stats_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        self.stats_label = QtWidgets.QLabel("答對 0 / 0 · 正確率 0% · 連續 0")
        self.reset_stats_button = QtWidgets.QPushButton("歸零")
        stats_layout.addWidget(self.stats_label, 1)
        stats_layout.addWidget(self.reset_stats_button)
        self.layout.addWidget(stats_group)

        # ---------- 題目控制 ----------
        control_group = QtWidgets.QGroupBox("猜開局")
        control_layout = QtWidgets.QGridLayout(control_group)
        control_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        self.side_combo = QtWidgets.QComboBox()
        self.side_combo.addItem("白方視角", chess.WHITE)
        self.side_combo.addItem("黑方視角", chess.BLACK)
        self.start_button = QtWidgets.QPushButton("開始測驗")
        self.replay_button = QtWidgets.QPushButton("重播")
        self.next_button = QtWidgets.QPushButton("下一題 →")
        self.replay_button.setEnabled(False)
        self.next_button.setEnabled(False)
        control_layout.addWidget(self.side_combo, 0, 0)
        control_layout.addWidget(self.start_button, 0, 1)
        control_layout.addWidget(self.replay_button, 1, 0)
        control_layout.addWidget(self.next_button, 1, 1)
        self.layout.addWidget(control_group)

        # ---------- 選項 ----------
        options_group = QtWidgets.QGroupBox("這是哪一個開局？")
        options_layout = QtWidgets.QVBoxLayout(options_group)
        options_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        self.option_buttons = []
        for i in range(QUIZ_OPTION_COUNT):
            button = QtWidgets.QPushButton("")
            button.setEnabled(False)
            button.clicked.connect(lambda _checked, idx=i: self._on_option(idx))
            options_layout.addWidget(button)
            self.option_buttons.append(button)
        self.moves_label = QtWidgets.QLabel("")
        self.moves_label.setWordWrap(True)
        self.result_label = QtWidgets.QLabel("")
        self.result_label.setWordWrap(True)
        self.result_label.setAlignment(QtCore.Qt.AlignCenter)
        options_layout.addWidget(self.moves_label)
        options_layout.addWidget(self.result_label)
        self.layout.addWidget(options_group)

        self.layout.addStretch()

        self.start_button.clicked.connect(lambda: self.start_requested.emit(self.side_combo.currentData()))
        self.next_button.clicked.connect(lambda: self.next_requested.emit())
        self.replay_button.clicked.connect(lambda: self.replay_requested.emit())
        self.reset_stats_button.clicked.connect(lambda: self.reset_stats_requested.emit())

    def _on_option(self, idx):
        if idx < len(self._options):
            self.answer_selected.emit(self._options[idx])

    def show_question(self, question):
        self._options = list(question.options)
        for button, opening in zip(self.option_buttons, self._options):
            button.setText(f"{opening.name}（{opening.eco}）")
            button.setStyleSheet("")
        self.result_label.setText("")
        self.moves_label.setText("")
        self.next_button.setEnabled(True)

    def set_animating(self, animating, answered):
        for button in self.option_buttons:
            button.setEnabled(not animating and not answered)
        self.replay_button.setEnabled(not animating and not answered)

    def update_moves(self, moves):
        self.moves_label.setText(format_moves(moves))

    def show_answer(self, is_correct, answer):
        for button, opening in zip(self.option_buttons, self._options):
            if opening.id == answer.id:
                button.setStyleSheet("background:#14532d; color:#fff;")
        verdict = "答對了！" if is_correct else "答錯了。"
        self.result_label.setText(f"{verdict} 正確答案：{answer.name}\n{answer.notation()}")

    def update_stats(self, stats):
        self.stats_label.setText(
            f"答對 {stats.correct} / {stats.total} · 正確率 {stats.accuracy}% · 連續 {stats.streak}"
        )
