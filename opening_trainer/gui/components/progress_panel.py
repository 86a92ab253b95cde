from PyQt5.QtWidgets import QWidget, QLabel, QHBoxLayout, QProgressBar, QSizePolicy


class ProgressPanel(QWidget):
    """
    常駐顯示目前開局的 [步數進度] 與已完成的開局數。
    """
    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        self.step_label = QLabel("步數: - / -")
        self.completed_label = QLabel("已完成: 0")
        self.bar = QProgressBar()
        self.bar.setRange(0, 100)
        self.bar.setTextVisible(False)
        self.bar.setFixedHeight(10)

        for lbl in (self.step_label, self.completed_label):
            lbl.setStyleSheet("color:#DDD; font-size:13px;")
            lbl.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Fixed)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 2, 0, 2)
        lay.setSpacing(6)
        lay.addWidget(self.step_label)
        lay.addWidget(self.bar, 1)
        lay.addWidget(self.completed_label)

        # 確保高度固定，避免被其他元件覆蓋
        self.setFixedHeight(24)

    # ---------- 公開 slot ---------- #
    def update_progress(self, step_idx, step_total):
        self.step_label.setText(f"步數: {step_idx} / {step_total}")
        self.bar.setValue(int(min(100, 100 * step_idx / step_total)) if step_total else 0)

    def update_completed(self, count):
        self.completed_label.setText(f"已完成: {count}")
