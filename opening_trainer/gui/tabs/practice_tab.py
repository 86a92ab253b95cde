# opening_trainer/gui/tabs/practice_tab.py
from PyQt5 import QtWidgets, QtCore

from opening_trainer.core.opening_corpus import format_moves
from opening_trainer.core.practice_session import SideAssignment
from opening_trainer.gui.components.progress_panel import ProgressPanel

TOP_MARGIN = 20          # 內容區域距離 GroupBox 標題的高度
SIDE_MARGIN = 12         # 左右內邊距

SIDE_CHOICES = [
    ("執白（電腦走黑）", SideAssignment.WHITE),
    ("執黑（電腦走白）", SideAssignment.BLACK),
    ("雙方（白方視角）", SideAssignment.BOTH_WHITE),
    ("雙方（黑方視角）", SideAssignment.BOTH_BLACK),
]


class PracticeTab(QtWidgets.QWidget):
    # Signals
    start_requested = QtCore.pyqtSignal(str, object)   # (opening_id, SideAssignment)
    hint_requested = QtCore.pyqtSignal()
    reset_requested = QtCore.pyqtSignal()
    next_requested = QtCore.pyqtSignal()
    random_requested = QtCore.pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)

        # ---------- 整體版面 ----------
        self.layout = QtWidgets.QVBoxLayout(self)
        self.layout.setContentsMargins(15, 15, 15, 15)
        self.layout.setSpacing(12)

        # ---------- 開局選擇 ----------
        opening_group = QtWidgets.QGroupBox("開局選擇")
        opening_layout = QtWidgets.QVBoxLayout(opening_group)
        opening_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 6)
        self.opening_combo = QtWidgets.QComboBox()
        self.side_combo = QtWidgets.QComboBox()
        for label, side in SIDE_CHOICES:
            self.side_combo.addItem(label, side)
        self.description_label = QtWidgets.QLabel("")
        self.description_label.setWordWrap(True)
        opening_layout.addWidget(self.opening_combo)
        opening_layout.addWidget(self.side_combo)
        opening_layout.addWidget(self.description_label)
        self.layout.addWidget(opening_group)

        # ---------- 進度面板 ----------
        self.progress_panel = ProgressPanel()
        self.layout.addWidget(self.progress_panel)

        # ---------- 練習控制 ----------
        control_group = QtWidgets.QGroupBox("練習控制")
        control_layout = QtWidgets.QGridLayout(control_group)
        control_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)
        control_layout.setSpacing(8)

        self.start_button = QtWidgets.QPushButton("開始練習")
        self.hint_button = QtWidgets.QPushButton("提示")
        self.reset_button = QtWidgets.QPushButton("重新開始")
        self.next_button = QtWidgets.QPushButton("下一個開局 →")
        self.random_button = QtWidgets.QPushButton("隨機開局")
        for button in (self.hint_button, self.reset_button, self.next_button):
            button.setEnabled(False)

        control_layout.addWidget(self.start_button, 0, 0)
        control_layout.addWidget(self.random_button, 0, 1)
        control_layout.addWidget(self.hint_button, 1, 0)
        control_layout.addWidget(self.reset_button, 1, 1)
        control_layout.addWidget(self.next_button, 2, 0, 1, 2)
        self.layout.addWidget(control_group)

        # ---------- 資訊區 ----------
        info_group = QtWidgets.QGroupBox("練習狀態")
        info_layout = QtWidgets.QVBoxLayout(info_group)
        info_layout.setContentsMargins(SIDE_MARGIN, TOP_MARGIN, SIDE_MARGIN, 12)

        self.info_label = QtWidgets.QLabel("請選擇一個開局並開始練習。")
        self.info_label.setObjectName("infoLabel")
        self.info_label.setAlignment(QtCore.Qt.AlignCenter)
        self.info_label.setWordWrap(True)
        self.info_label.setMinimumHeight(60)
        self.moves_label = QtWidgets.QLabel("")
        self.moves_label.setWordWrap(True)
        info_layout.addWidget(self.info_label)
        info_layout.addWidget(self.moves_label)
        self.layout.addWidget(info_group)

        self.layout.addStretch()

        # ---------- Signals ----------
        self.start_button.clicked.connect(self._on_start)
        self.hint_button.clicked.connect(lambda: self.hint_requested.emit())
        self.reset_button.clicked.connect(lambda: self.reset_requested.emit())
        self.next_button.clicked.connect(lambda: self.next_requested.emit())
        self.random_button.clicked.connect(lambda: self.random_requested.emit())

    # ----- Slots & helpers ----- #
    def _on_start(self):
        opening_id = self.opening_combo.currentData()
        if opening_id:
            self.start_requested.emit(opening_id, self.side_combo.currentData())
            for button in (self.hint_button, self.reset_button, self.next_button):
                button.setEnabled(True)

    def update_opening_list(self, openings):
        self.opening_combo.clear()
        for opening in openings:
            self.opening_combo.addItem(f"{opening.name}（{opening.eco}）", opening.id)
        self.start_button.setEnabled(bool(openings))
        self.random_button.setEnabled(bool(openings))

    def show_opening(self, opening):
        idx = self.opening_combo.findData(opening.id)
        if idx >= 0:
            self.opening_combo.setCurrentIndex(idx)
        self.description_label.setText(f"{opening.description}\n{opening.ply_count} 個半步")

    def current_side(self):
        return self.side_combo.currentData()

    def update_moves(self, moves):
        self.moves_label.setText(format_moves(moves))

    @QtCore.pyqtSlot(int, int)
    def update_progress(self, step_idx, step_total):
        self.progress_panel.update_progress(step_idx, step_total)
