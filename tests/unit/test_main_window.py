from __future__ import annotations

from types import SimpleNamespace

from PySide6.QtWidgets import QMessageBox

from intake.application.errors import PreconditionError
from intake.application.state.form_state_store import FormStateStore
from intake.ui import main_window as main_window_module
from intake.ui.main_window import IntakeWindow


class _Service:
    def __init__(self) -> None:
        self.submitted: list[object] = []

    def check_preconditions(self, snapshot) -> None:
        if not str(snapshot["full_name"]).strip():
            raise PreconditionError("Por favor, preencha o nome completo.")

    def submit(self, snapshot):
        self.submitted.append(snapshot)
        return SimpleNamespace(form_id="abc")


def test_submit_without_name_warns_and_runs_nothing(monkeypatch, qapp) -> None:
    warnings: list[str] = []
    monkeypatch.setattr(QMessageBox, "warning", lambda _parent, _title, text: warnings.append(text))
    started: list[object] = []
    monkeypatch.setattr(main_window_module, "run_async", lambda *args, **kwargs: started.append(args))

    service = _Service()
    window = IntakeWindow(container=SimpleNamespace(intake_service=service))
    window.submit_button.click()

    assert warnings == ["Por favor, preencha o nome completo."]
    assert started == []
    assert window.submit_button.isEnabled() is True


def test_submit_runs_in_background_with_snapshot(monkeypatch, qapp) -> None:
    infos: list[str] = []
    monkeypatch.setattr(QMessageBox, "information", lambda _parent, _title, text: infos.append(text))

    def _run_inline(_parent, fn, on_success=None, on_error=None, on_finished=None):
        result = fn()
        on_success(result)
        on_finished()
        return SimpleNamespace(cancel=lambda: False)

    monkeypatch.setattr(main_window_module, "run_async", _run_inline)

    service = _Service()
    store = FormStateStore()
    store.update("full_name", "Maria Silva")
    window = IntakeWindow(container=SimpleNamespace(intake_service=service), store=store)
    window.submit_button.click()

    assert len(service.submitted) == 1
    assert service.submitted[0]["full_name"] == "Maria Silva"
    assert infos == ["Ficha médica enviada por email com sucesso."]
    assert window.submit_button.isEnabled() is False
