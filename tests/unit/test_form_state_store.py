from __future__ import annotations

from datetime import date

import pytest

from intake.application.state.form_state_store import FormStateStore
from intake.domain.calculations.derived_values import age_from_date
from intake.domain.models.intake_form import EPWORTH_FIELDS, MEDICATION_SLOTS


def test_update_sets_only_the_named_field() -> None:
    store = FormStateStore()
    before = store.snapshot()
    store.update("full_name", "Maria Silva")
    after = store.snapshot()
    changed = [name for name in after if after[name] != before[name]]
    assert changed == ["full_name"]


def test_update_rejects_unknown_field() -> None:
    store = FormStateStore()
    with pytest.raises(KeyError):
        store.update("nome_completo", "Maria")


def test_update_array_element_changes_only_target_index() -> None:
    store = FormStateStore()
    original = store.record.medications
    store.update_array_element("medications", 3, "Losartana 50mg")

    assert store.record.medications[3] == "Losartana 50mg"
    assert [item for index, item in enumerate(store.record.medications) if index != 3] == [""] * (
        MEDICATION_SLOTS - 1
    )
    assert original == [""] * MEDICATION_SLOTS
    assert original is not store.record.medications


def test_update_array_element_bounds() -> None:
    store = FormStateStore()
    with pytest.raises(IndexError):
        store.update_array_element("medications", MEDICATION_SLOTS, "x")
    with pytest.raises(IndexError):
        store.update_array_element("surgeries", -1, "x")
    with pytest.raises(KeyError):
        store.update_array_element("full_name", 0, "x")


def test_toggle_tag_keeps_order_without_duplicates() -> None:
    store = FormStateStore()
    store.toggle_tag("alcohol_types", "Vinho", True)
    store.toggle_tag("alcohol_types", "Cerveja", True)
    store.toggle_tag("alcohol_types", "Vinho", True)
    assert store.record.alcohol_types == ["Vinho", "Cerveja"]
    store.toggle_tag("alcohol_types", "Vinho", False)
    assert store.record.alcohol_types == ["Cerveja"]


def test_update_birth_date_fills_age_only_when_valid() -> None:
    store = FormStateStore()
    age = store.update_birth_date("1980-01-01")
    assert age == age_from_date("1980-01-01", today=date.today())
    assert store.record.age == age

    assert store.update_birth_date("") is None
    assert store.record.birth_date == ""
    assert store.record.age == age


def test_compute_sleepiness_total_persists_sum() -> None:
    store = FormStateStore()
    for name in EPWORTH_FIELDS:
        store.update(name, 3)
    assert store.compute_sleepiness_total() == 24
    assert store.record.epworth_total == 24


def test_compute_pack_years_for_current_smoker_uses_current_age() -> None:
    store = FormStateStore()
    store.update("age", 45)
    store.update("currently_smokes", "Sim")
    store.update("smoking_start_age", 15)
    store.update("smoking_quit_age", 30)
    store.update("cigarettes_per_day", 20)
    assert store.compute_pack_years() == 30
    assert store.record.pack_years == 30


def test_compute_pack_years_for_former_smoker_uses_quit_age() -> None:
    store = FormStateStore()
    store.update("age", 60)
    store.update("currently_smokes", "Não")
    store.update("ever_smoked", "Sim")
    store.update("smoking_start_age", 18)
    store.update("smoking_quit_age", 38)
    store.update("cigarettes_per_day", 10)
    assert store.compute_pack_years() == 10


def test_compute_pack_years_stores_zero_when_undefined() -> None:
    store = FormStateStore()
    store.update("currently_smokes", "Não")
    store.update("smoking_start_age", 40)
    store.update("smoking_quit_age", 30)
    store.update("cigarettes_per_day", 10)
    assert store.compute_pack_years() is None
    assert store.record.pack_years == 0


def test_computed_values_only_change_when_recomputed() -> None:
    store = FormStateStore()
    store.update("epworth_tv", 2)
    store.compute_sleepiness_total()
    first = store.snapshot()

    store.update("epworth_reading", 3)
    store.update("full_name", "João")
    second = store.snapshot()
    assert second["epworth_total"] == first["epworth_total"] == 2

    store.compute_sleepiness_total()
    assert store.snapshot()["epworth_total"] == 5


def test_snapshot_is_immutable_and_detached() -> None:
    store = FormStateStore()
    store.update_array_element("surgeries", 0, "Apendicectomia")
    snapshot = store.snapshot()

    store.update_array_element("surgeries", 0, "Colecistectomia")
    assert snapshot["surgeries"][0] == "Apendicectomia"
    with pytest.raises(TypeError):
        snapshot.data["full_name"] = "x"  # type: ignore[index]
    payload = snapshot.to_payload()
    assert isinstance(payload["surgeries"], list)


def test_hidden_sub_field_values_are_preserved() -> None:
    store = FormStateStore()
    store.update("asthma", "Sim")
    store.update("asthma_notes", "Crises na infância")
    store.update("asthma", "Não")
    assert store.is_visible("asthma_notes") is False
    assert store.get("asthma_notes") == "Crises na infância"


def test_reset_restores_defaults() -> None:
    store = FormStateStore()
    store.update("full_name", "Maria")
    store.update("declaration", True)
    store.reset()
    assert store.record.full_name == ""
    assert store.record.declaration is False
