# opening_trainer/gui/tabs/open_play_tab.py
import chess
from PyQt5 import QtWidgets, QtCore

from opening_trainer.core.open_play_session import MatchStatus
from opening_trainer.core.opening_corpus import format_moves

TOP_MARGIN = 20
SIDE_MARGIN = 12


class OpenPlayTab(QtWidgets.QWidget):
    new_game_requested = QtCore.pyqtSignal(object)   # chess.Color（棋盤視角）

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QtWidgets.QVBoxLayout(self)
        self.layout.setContentsMargins(15, 15, 15, 15)
        self.layout.setSpacing(12)

        # ---------- 對局控制 ----------
        control_group = QtWidgets.QGroupBox("自由對局")
        control_layout = QtWidgets.QVBoxLayout(control_group)
        control_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        self.side_combo = QtWidgets.QComboBox()
        self.side_combo.addItem("白方視角", chess.WHITE)
        self.side_combo.addItem("黑方視角", chess.BLACK)
        self.new_game_button = QtWidgets.QPushButton("新對局")
        control_layout.addWidget(self.side_combo)
        control_layout.addWidget(self.new_game_button)
        self.layout.addWidget(control_group)

        # ---------- 比對結果 ----------
        result_group = QtWidgets.QGroupBox("開局比對")
        result_layout = QtWidgets.QVBoxLayout(result_group)
        result_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        self.status_label = QtWidgets.QLabel("自由走棋，看看你的走法符合哪些開局。")
        self.status_label.setWordWrap(True)
        self.status_label.setAlignment(QtCore.Qt.AlignCenter)
        self.status_label.setMinimumHeight(50)
        self.moves_label = QtWidgets.QLabel("")
        self.moves_label.setWordWrap(True)
        self.candidate_list = QtWidgets.QListWidget()
        result_layout.addWidget(self.status_label)
        result_layout.addWidget(self.moves_label)
        result_layout.addWidget(self.candidate_list)
        self.layout.addWidget(result_group, 1)

        self.new_game_button.clicked.connect(
            lambda: self.new_game_requested.emit(self.side_combo.currentData())
        )

    def update_moves(self, moves):
        self.moves_label.setText(format_moves(moves))

    def show_result(self, result):
        self.candidate_list.clear()
        if result.status == MatchStatus.MATCHED:
            opening = result.matched_opening
            self.status_label.setText(f"完全吻合：{opening.name}（{opening.eco}）")
            self.candidate_list.addItem(opening.notation())
            return
        if result.status == MatchStatus.OFF_BOOK:
            self.status_label.setText("已離開開局庫，沒有任何開局符合這些走法。")
            return

        if not result.exact and not result.extendable:
            self.status_label.setText("自由走棋，看看你的走法符合哪些開局。")
            return
        self.status_label.setText(f"仍在開局庫中：{len(result.candidates)} 個候選開局")
        for opening in result.exact:
            self.candidate_list.addItem(f"✓ {opening.name}（{opening.eco}）")
        for continuation in result.extendable:
            op = continuation.opening
            self.candidate_list.addItem(f"{op.name}（{op.eco}） 下一步: {continuation.next_move}")
