from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from intake.application.errors import PreconditionError
from intake.application.services.intake_service import pdf_filename
from intake.application.state.form_state_store import FormStateStore
from intake.config import EXPORT_DIR
from intake.container import Container
from intake.domain.models.intake_form import IntakeSnapshot
from intake.ui.intake_form.intake_form_view import IntakeFormView
from intake.ui.widgets.async_task import AsyncTask, run_async

WINDOW_TITLE = "Ficha de Pré-Avaliação Médica - Formulário Contínuo"
PDF_FAILED = "Não foi possível gerar o PDF."
SUBMIT_FAILED = "Não foi possível enviar o formulário."

logger = logging.getLogger(__name__)


class IntakeWindow(QMainWindow):
    def __init__(self, container: Container, store: FormStateStore | None = None) -> None:
        super().__init__()
        self.container = container
        self.store = store or FormStateStore()
        self._tasks: list[AsyncTask] = []
        self.setWindowTitle(WINDOW_TITLE)
        self._build_ui()

    def _build_ui(self) -> None:
        central = QWidget()
        root = QVBoxLayout(central)

        header = QLabel(WINDOW_TITLE)
        header.setStyleSheet("font-size: 18px; font-weight: 600;")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(header)

        self.form_view = IntakeFormView(self.store)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.form_view)
        root.addWidget(scroll, 1)

        actions = QHBoxLayout()
        actions.addStretch()
        self.download_button = QPushButton("Baixar PDF")
        self.download_button.clicked.connect(self._on_download_pdf)
        self.submit_button = QPushButton("Enviar por Email")
        self.submit_button.clicked.connect(self._on_submit)
        actions.addWidget(self.download_button)
        actions.addWidget(self.submit_button)
        root.addLayout(actions)

        self.setCentralWidget(central)

    def _ready(self, snapshot: IntakeSnapshot) -> bool:
        try:
            self.container.intake_service.check_preconditions(snapshot)
        except PreconditionError as exc:
            QMessageBox.warning(self, "Erro", str(exc))
            return False
        return True

    def _on_download_pdf(self) -> None:
        snapshot = self.store.snapshot()
        if not self._ready(snapshot):
            return
        suggested = EXPORT_DIR / pdf_filename(str(snapshot["full_name"]))
        file_path, _ = QFileDialog.getSaveFileName(self, "Salvar PDF", str(suggested), "PDF (*.pdf)")
        if not file_path:
            return
        service = self.container.intake_service

        def _run() -> dict:
            return service.export_pdf(snapshot, file_path)

        def _on_success(result: dict) -> None:
            QMessageBox.information(self, "PDF Gerado!", f"O arquivo foi salvo com sucesso.\n{result['path']}")

        def _on_error(exc: Exception) -> None:
            self._show_failure(exc, PDF_FAILED)

        self._start(_run, _on_success, _on_error, self.download_button)

    def _on_submit(self) -> None:
        snapshot = self.store.snapshot()
        if not self._ready(snapshot):
            return
        service = self.container.intake_service

        def _run():
            return service.submit(snapshot)

        def _on_success(_result) -> None:
            self.submit_button.setEnabled(False)
            QMessageBox.information(self, "Sucesso!", "Ficha médica enviada por email com sucesso.")

        def _on_error(exc: Exception) -> None:
            self._show_failure(exc, SUBMIT_FAILED)
            self.submit_button.setEnabled(True)

        self._start(_run, _on_success, _on_error, self.submit_button, keep_disabled=True)

    def _start(self, fn, on_success, on_error, button: QPushButton, *, keep_disabled: bool = False) -> None:
        button.setEnabled(False)
        task: AsyncTask | None = None

        def _on_finished() -> None:
            if task in self._tasks:
                self._tasks.remove(task)
            if not keep_disabled:
                button.setEnabled(True)

        task = run_async(self, fn, on_success=on_success, on_error=on_error, on_finished=_on_finished)
        self._tasks.append(task)

    def _show_failure(self, exc: Exception, generic_message: str) -> None:
        if isinstance(exc, PreconditionError):
            QMessageBox.warning(self, "Erro", str(exc))
            return
        logger.error("Background task failed", exc_info=exc)
        QMessageBox.critical(self, "Erro", generic_message)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
        super().closeEvent(event)
