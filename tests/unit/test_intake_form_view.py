from __future__ import annotations

from PySide6.QtCore import QDate
from PySide6.QtWidgets import QDateEdit, QLabel, QLineEdit, QRadioButton, QSpinBox

from intake.application.state.form_state_store import FormStateStore
from intake.domain.calculations.derived_values import age_from_date
from intake.domain.models.intake_form import EPWORTH_FIELDS
from intake.ui.intake_form.intake_form_view import IntakeFormView


def _radio(view: IntakeFormView, field_name: str, option: str) -> QRadioButton:
    return next(button for button in view.editor(field_name).findChildren(QRadioButton) if button.text() == option)


def _row_visible(view: IntakeFormView, field_name: str) -> bool:
    return view._layouts[field_name].isRowVisible(view.editor(field_name))


def test_conditional_notes_follow_controller(qapp) -> None:
    store = FormStateStore()
    view = IntakeFormView(store)
    assert _row_visible(view, "asthma_notes") is False

    _radio(view, "asthma", "Sim").click()
    assert store.record.asthma == "Sim"
    assert _row_visible(view, "asthma_notes") is True

    _radio(view, "asthma", "Não").click()
    assert _row_visible(view, "asthma_notes") is False


def test_epworth_items_update_total_label(qapp) -> None:
    store = FormStateStore()
    view = IntakeFormView(store)
    for name in EPWORTH_FIELDS[:4]:
        spin = view.editor(name)
        assert isinstance(spin, QSpinBox)
        assert spin.maximum() == 3
        spin.setValue(3)

    assert store.record.epworth_total == 12
    label = view.editor("epworth_total")
    assert isinstance(label, QLabel)
    assert label.text() == "12 pontos (Sonolência excessiva)"


def test_pack_years_recomputed_from_smoking_inputs(qapp) -> None:
    store = FormStateStore()
    view = IntakeFormView(store)
    _radio(view, "currently_smokes", "Não").click()
    _radio(view, "ever_smoked", "Sim").click()
    assert _row_visible(view, "smoking_quit_age") is True

    view.editor("smoking_start_age").setValue(15)
    view.editor("smoking_quit_age").setValue(45)
    view.editor("cigarettes_per_day").setValue(20)

    assert store.record.pack_years == 30
    assert view.editor("pack_years").text() == "30 anos-maço"


def test_birth_date_fills_age(qapp) -> None:
    store = FormStateStore()
    view = IntakeFormView(store)
    editor = view.editor("birth_date")
    assert isinstance(editor, QDateEdit)
    editor.setDate(QDate(1980, 1, 1))

    assert store.record.birth_date == "1980-01-01"
    assert store.record.age == age_from_date("1980-01-01")


def test_slot_edit_updates_only_its_position(qapp) -> None:
    store = FormStateStore()
    view = IntakeFormView(store)
    edits = view.editor("medications").findChildren(QLineEdit)
    edits[4].setText("Omeprazol")
    assert store.record.medications[4] == "Omeprazol"
    assert store.record.medications.count("") == len(edits) - 1


def test_load_from_store_does_not_write_back(qapp) -> None:
    store = FormStateStore()
    store.update("full_name", "Ana Souza")
    store.update("snoring", "Sim")
    view = IntakeFormView(store)

    assert view.editor("full_name").text() == "Ana Souza"
    assert _radio(view, "snoring", "Sim").isChecked() is True
    assert _row_visible(view, "snoring_frequency") is True
    assert store.record.birth_date == ""
