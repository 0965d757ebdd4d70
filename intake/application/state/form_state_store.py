from __future__ import annotations

import logging
from typing import Any

from intake.domain import field_registry
from intake.domain.calculations.derived_values import age_from_date, pack_years, sleepiness_total
from intake.domain.constants import YesNo
from intake.domain.field_registry import SLOT_CAPACITY, FieldKind
from intake.domain.models.intake_form import EPWORTH_FIELDS, IntakeFormRecord, IntakeSnapshot

logger = logging.getLogger(__name__)

PACK_YEARS_INPUTS = frozenset({"currently_smokes", "smoking_start_age", "smoking_quit_age", "cigarettes_per_day", "age"})


class FormStateStore:
    """Owns the record of one form session and is its only mutation surface."""

    def __init__(self, record: IntakeFormRecord | None = None) -> None:
        self.record = record or field_registry.default_record()

    def get(self, field_name: str) -> Any:
        field_registry.get_field(field_name)
        return getattr(self.record, field_name)

    def update(self, field_name: str, value: Any) -> None:
        field_registry.get_field(field_name)
        setattr(self.record, field_name, value)

    def update_array_element(self, field_name: str, index: int, value: str) -> None:
        capacity = SLOT_CAPACITY.get(field_name)
        if capacity is None:
            raise KeyError(f"Campo sem posições fixas: {field_name}")
        if not 0 <= index < capacity:
            raise IndexError(f"{field_name}: posição {index} fora de 0..{capacity - 1}")
        items = list(getattr(self.record, field_name))
        items[index] = value
        setattr(self.record, field_name, items)

    def toggle_tag(self, field_name: str, tag: str, checked: bool) -> None:
        if field_registry.get_field(field_name).kind != FieldKind.TAGS:
            raise KeyError(f"Campo não é uma lista de marcações: {field_name}")
        current = list(getattr(self.record, field_name))
        if checked and tag not in current:
            current.append(tag)
        elif not checked:
            current = [item for item in current if item != tag]
        setattr(self.record, field_name, current)

    def update_birth_date(self, birth_date_iso: str) -> int | None:
        self.record.birth_date = birth_date_iso
        age = self.compute_age()
        if age is not None:
            self.record.age = age
        return age

    def compute_age(self) -> int | None:
        return age_from_date(self.record.birth_date)

    def compute_sleepiness_total(self) -> int:
        total = sleepiness_total(getattr(self.record, name) for name in EPWORTH_FIELDS)
        self.record.epworth_total = total
        return total

    def compute_pack_years(self) -> int | None:
        record = self.record
        end_age = record.age if record.currently_smokes == YesNo.YES else record.smoking_quit_age
        result = pack_years(record.smoking_start_age, end_age, record.cigarettes_per_day)
        record.pack_years = result if result is not None else 0
        return result

    def is_visible(self, field_name: str) -> bool:
        return field_registry.is_visible(self.record, field_name)

    def snapshot(self) -> IntakeSnapshot:
        return IntakeSnapshot.from_record(self.record)

    def reset(self) -> None:
        logger.info("Form state reset to defaults")
        self.record = field_registry.default_record()
