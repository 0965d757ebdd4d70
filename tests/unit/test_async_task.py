from __future__ import annotations

import threading

from PySide6.QtCore import QObject, QThreadPool

from intake.ui.widgets.async_task import AsyncTask, run_async


def _wait(qapp, pool: QThreadPool) -> None:
    pool.waitForDone(5000)
    qapp.processEvents()


def test_run_async_delivers_result(qapp) -> None:
    pool = QThreadPool()
    results: list[object] = []
    finished: list[bool] = []

    task = run_async(
        QObject(),
        lambda: 21 * 2,
        on_success=results.append,
        on_finished=lambda: finished.append(True),
        pool=pool,
    )
    _wait(qapp, pool)

    assert results == [42]
    assert finished == [True]
    assert task.cancelled is False


def test_run_async_delivers_error(qapp) -> None:
    pool = QThreadPool()
    errors: list[Exception] = []

    def _boom() -> None:
        raise RuntimeError("falhou")

    task = run_async(QObject(), _boom, on_error=errors.append, pool=pool)
    _wait(qapp, pool)

    assert task.cancelled is False
    assert len(errors) == 1
    assert str(errors[0]) == "falhou"


def test_cancel_before_start_removes_task(qapp) -> None:
    pool = QThreadPool()
    pool.setMaxThreadCount(1)
    release = threading.Event()
    blocker = run_async(QObject(), lambda: release.wait(5), pool=pool)

    calls: list[str] = []
    queued = run_async(QObject(), lambda: calls.append("ran"), on_success=lambda _: calls.append("success"), pool=pool)

    assert queued.cancel() is True
    release.set()
    _wait(qapp, pool)

    assert calls == []
    assert queued.cancelled is True
    assert blocker.cancelled is False


def test_cancel_running_task_suppresses_signals(qapp) -> None:
    pool = QThreadPool()
    started = threading.Event()
    release = threading.Event()
    delivered: list[str] = []

    def _work() -> str:
        started.set()
        release.wait(5)
        return "done"

    task: AsyncTask = run_async(
        QObject(),
        _work,
        on_success=lambda _: delivered.append("success"),
        on_finished=lambda: delivered.append("finished"),
        pool=pool,
    )
    assert started.wait(5)
    assert task.cancel() is False
    release.set()
    _wait(qapp, pool)

    assert delivered == []
