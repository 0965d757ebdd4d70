from __future__ import annotations

import re
from datetime import datetime

from intake.application.state.form_state_store import FormStateStore
from intake.infrastructure.reporting.intake_pdf_report import export_intake_pdf, render_intake_pdf


def _filled_store() -> FormStateStore:
    store = FormStateStore()
    store.update("full_name", "José da Conceição")
    store.update_birth_date("1970-05-20")
    store.update("declaration", True)
    store.update("asthma", "Sim")
    store.update("asthma_notes", "Observação longa " * 40)
    for index in range(11):
        store.update_array_element("medications", index, f"Medicação número {index + 1}")
    return store


def test_render_intake_pdf_returns_pdf_bytes() -> None:
    content = render_intake_pdf(_filled_store().snapshot(), generated_at=datetime(2024, 6, 15, 10, 30))
    assert content.startswith(b"%PDF")
    assert len(content) > 1000


def test_long_form_spans_several_pages() -> None:
    content = render_intake_pdf(_filled_store().snapshot())
    match = re.search(rb"/Count (\d+) /Kids", content)
    assert match is not None
    assert int(match.group(1)) >= 2


def test_export_intake_pdf_writes_file(tmp_path) -> None:
    target = tmp_path / "nested" / "ficha.pdf"
    written = export_intake_pdf(_filled_store().snapshot(), target)
    assert written == target
    assert target.read_bytes().startswith(b"%PDF")
