from __future__ import annotations

from intake.application.state.form_state_store import FormStateStore
from intake.domain import field_registry
from intake.infrastructure.reporting.intake_html_report import render_form_html, render_notification_html
from intake.infrastructure.reporting.report_sections import (
    build_report_sections,
    format_field_value,
    sleepiness_label,
)


def _lines_by_label(sections) -> dict[str, str]:
    return {line.label: line.value for section in sections for line in section.lines}


def test_sleepiness_label_threshold() -> None:
    assert sleepiness_label(10) == "Sonolência normal"
    assert sleepiness_label(11) == "Sonolência excessiva"


def test_format_field_value_by_kind() -> None:
    assert format_field_value(field_registry.get_field("full_name"), "") == "Não informado"
    assert format_field_value(field_registry.get_field("birth_date"), "1990-04-02") == "02/04/1990"
    assert format_field_value(field_registry.get_field("declaration"), True) == "Sim"
    assert format_field_value(field_registry.get_field("pack_years"), 12) == "12 anos-maço"
    assert format_field_value(field_registry.get_field("epworth_total"), 14) == "14 pontos (Sonolência excessiva)"
    assert format_field_value(field_registry.get_field("epworth_tv"), 0) == "0"
    assert format_field_value(field_registry.get_field("alcohol_types"), ("Vinho", "Cerveja")) == "Vinho, Cerveja"


def test_sections_follow_registry_order_and_skip_hidden_fields() -> None:
    store = FormStateStore()
    store.update("full_name", "Maria Silva")
    store.update("asthma", "Não")
    store.update("asthma_notes", "texto antigo")
    sections = build_report_sections(store.snapshot())

    titles = [section.title for section in sections]
    expected = [section.title for section in field_registry.iter_sections()]
    assert titles == expected
    labels = _lines_by_label(sections)
    assert labels["Nome Completo"] == "Maria Silva"
    assert "Observações - Asma / Bronquite" not in labels


def test_revealed_sub_field_is_indented() -> None:
    store = FormStateStore()
    store.update("asthma", "Sim")
    store.update("asthma_notes", "Uso de bombinha")
    sections = build_report_sections(store.snapshot())
    respiratory = next(section for section in sections if section.title == "Histórico Respiratório")
    notes = next(line for line in respiratory.lines if line.label.startswith("Observações - Asma"))
    assert notes.value == "Uso de bombinha"
    assert notes.indent is True


def test_slots_list_only_filled_positions() -> None:
    store = FormStateStore()
    store.update_array_element("medications", 2, "Metformina")
    sections = build_report_sections(store.snapshot())
    labels = _lines_by_label(sections)
    assert labels["Medicação 3"] == "Metformina"
    assert "Medicação 1" not in labels
    assert labels["Cirurgia"] == "Nenhum item informado"


def test_html_dump_escapes_user_text() -> None:
    store = FormStateStore()
    store.update("full_name", "<script>alert(1)</script>")
    html = render_form_html(store.snapshot())
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "HISTÓRICO RESPIRATÓRIO" in html


def test_notification_html_holds_patient_summary() -> None:
    store = FormStateStore()
    store.update("full_name", "Maria Silva")
    store.update("referral_source", "Outro médico")
    store.update("referred_by", "Dr. Souza")
    html = render_notification_html(store.snapshot())
    assert "<h2>Novo Formulário Médico Recebido</h2>" in html
    assert "Maria Silva" in html
    assert "Outro médico" in html
    assert "Dr. Souza" in html
    assert "Dados Completos do Formulário" in html
