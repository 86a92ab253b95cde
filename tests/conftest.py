import itertools

import pytest
from PyQt5 import QtCore

from opening_trainer.core.opening_corpus import OpeningCorpus, OpeningRecord


class ManualTask:
    _seq = itertools.count()

    def __init__(self, due, callback, interval=None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.seq = next(self._seq)
        self.cancelled = False
        self.finished = False

    @property
    def active(self):
        return not self.cancelled and not self.finished

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """與 TaskScheduler 同介面，但以手動推進的虛擬時鐘執行任務。"""

    def __init__(self):
        self.now = 0
        self.tasks = []

    def single_shot(self, delay_ms, callback):
        task = ManualTask(self.now + delay_ms, callback)
        self.tasks.append(task)
        return task

    def repeating(self, interval_ms, callback):
        task = ManualTask(self.now + interval_ms, callback, interval=interval_ms)
        self.tasks.append(task)
        return task

    def cancel_all(self):
        for task in self.tasks:
            task.cancel()
        self.tasks = []

    @property
    def pending(self):
        return [t for t in self.tasks if t.active]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [t for t in self.tasks if t.active and t.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self.now = task.due
            if task.interval:
                task.due += task.interval
            else:
                task.finished = True
            task.callback()
        self.now = target

    def run_until_idle(self, limit_ms=60_000):
        while self.pending and self.now < limit_ms:
            self.advance(min(t.due for t in self.pending) - self.now)


def make_record(opening_id, moves, name=None, eco="A00"):
    return OpeningRecord(
        id=opening_id,
        name=name or opening_id,
        eco=eco,
        description="",
        moves=tuple(moves),
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def small_corpus():
    return OpeningCorpus([
        make_record("A", ["e4", "e5", "Nf3"]),
        make_record("B", ["e4", "e5", "Nc3"]),
    ])


@pytest.fixture
def quiz_corpus():
    return OpeningCorpus([
        make_record("italian", ["e4", "e5", "Nf3", "Nc6", "Bc4"], name="Italian Game"),
        make_record("sicilian", ["e4", "c5"], name="Sicilian Defense"),
        make_record("french", ["e4", "e6", "d4", "d5"], name="French Defense"),
        make_record("qg", ["d4", "d5", "c4"], name="Queen's Gambit"),
        make_record("english", ["c4"], name="English Opening"),
        make_record("dutch", ["d4", "f5"], name="Dutch Defense"),
    ])


@pytest.fixture(scope="session")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app
