# opening_trainer/core/scheduler.py
import logging
from typing import Callable, List, Optional

from PyQt5.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class ScheduledTask:
    """QTimer 任務的控制代碼；cancel() 之後回呼永遠不會再執行。"""

    def __init__(self, timer: QTimer, callback: Callable[[], None]):
        self._timer = timer
        self._callback = callback
        self.cancelled = False
        self.finished = False
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.finished

    def _fire(self) -> None:
        if not self.active:
            return
        if self._timer.isSingleShot():
            self.finished = True
            self._timer.deleteLater()
        self._callback()

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        self._timer.stop()
        self._timer.deleteLater()


class TaskScheduler(QObject):
    """
    以 QTimer 實作的延遲 / 週期任務。
    所有模式的等待（電腦走棋、撤回錯誤走法、測驗動畫）都經過這裡，
    以便在重設或切換開局時一次取消。
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._tasks: List[ScheduledTask] = []

    def single_shot(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        return self._start(delay_ms, callback, single_shot=True)

    def repeating(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        return self._start(interval_ms, callback, single_shot=False)

    def _start(self, delay_ms: int, callback: Callable[[], None], *, single_shot: bool) -> ScheduledTask:
        self._tasks = [t for t in self._tasks if t.active]
        timer = QTimer(self)
        timer.setSingleShot(single_shot)
        task = ScheduledTask(timer, callback)
        timer.start(max(0, int(delay_ms)))
        self._tasks.append(task)
        return task

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []

    @property
    def pending(self) -> List[ScheduledTask]:
        return [t for t in self._tasks if t.active]
