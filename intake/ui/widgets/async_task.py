from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal


class TaskSignals(QObject):
    success = Signal(object)
    error = Signal(Exception)
    finished = Signal()


class AsyncTask(QRunnable):
    def __init__(self, fn: Callable[[], Any], pool: QThreadPool | None = None) -> None:
        super().__init__()
        self.fn = fn
        self.pool = pool or QThreadPool.globalInstance()
        self.signals = TaskSignals()
        self._cancelled = False
        self.setAutoDelete(False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """Cancel the task. Returns True when it was removed before starting.

        A task already running finishes its work but emits nothing.
        """
        self._cancelled = True
        return self.pool.tryTake(self)

    def run(self) -> None:
        if self._cancelled:
            return
        try:
            result = self.fn()
        except Exception as exc:  # noqa: BLE001
            if not self._cancelled:
                self.signals.error.emit(exc)
        else:
            if not self._cancelled:
                self.signals.success.emit(result)
        finally:
            if not self._cancelled:
                self.signals.finished.emit()


def run_async(
    parent: QObject,
    fn: Callable[[], Any],
    on_success: Callable[[Any], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
    on_finished: Callable[[], None] | None = None,
    pool: QThreadPool | None = None,
) -> AsyncTask:
    task = AsyncTask(fn, pool=pool)
    if on_success:
        task.signals.success.connect(on_success)
    if on_error:
        task.signals.error.connect(on_error)
    if on_finished:
        task.signals.finished.connect(on_finished)
    task.pool.start(task)
    return task
