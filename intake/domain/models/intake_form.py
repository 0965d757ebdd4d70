from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from types import MappingProxyType
from typing import Any

MEDICATION_SLOTS = 11
SURGERY_SLOTS = 6
OTHER_VACCINE_SLOTS = 3

EPWORTH_FIELDS = (
    "epworth_reading",
    "epworth_tv",
    "epworth_public",
    "epworth_passenger",
    "epworth_resting",
    "epworth_talking",
    "epworth_after_lunch",
    "epworth_traffic",
)


def _today_iso() -> str:
    return date.today().isoformat()


def _slots(count: int):
    return field(default_factory=lambda: [""] * count)


@dataclass(slots=True)
class IntakeFormRecord:
    # Dados pessoais
    full_name: str = ""
    birth_date: str = ""
    fill_date: str = field(default_factory=_today_iso)
    age: int = 0
    referral_source: str = ""
    referred_by: str = ""

    # Histórico respiratório
    asthma: str = ""
    asthma_notes: str = ""
    rhinitis: str = ""
    rhinitis_notes: str = ""
    sinusitis: str = ""
    sinusitis_notes: str = ""
    emphysema: str = ""
    emphysema_notes: str = ""
    pneumonia: str = ""
    pneumonia_notes: str = ""
    tuberculosis: str = ""
    tuberculosis_notes: str = ""
    other_respiratory: str = ""
    other_respiratory_notes: str = ""

    # Distúrbios do sono
    snoring: str = ""
    snoring_frequency: str = ""
    snoring_intensity: int = 0
    snoring_notes: str = ""
    insomnia: str = ""
    insomnia_notes: str = ""
    daytime_sleepiness: str = ""
    daytime_sleepiness_notes: str = ""
    other_sleep_problems: str = ""
    other_sleep_problems_notes: str = ""

    # Escala de Epworth
    epworth_reading: int = 0
    epworth_tv: int = 0
    epworth_public: int = 0
    epworth_passenger: int = 0
    epworth_resting: int = 0
    epworth_talking: int = 0
    epworth_after_lunch: int = 0
    epworth_traffic: int = 0
    epworth_total: int = 0

    # Cardiovascular
    high_blood_pressure: str = ""
    high_blood_pressure_notes: str = ""
    high_cholesterol: str = ""
    high_cholesterol_notes: str = ""
    arrhythmia: str = ""
    arrhythmia_notes: str = ""
    other_cardiac: str = ""
    other_cardiac_notes: str = ""

    # Endócrino
    diabetes: str = ""
    diabetes_notes: str = ""
    thyroid: str = ""
    thyroid_notes: str = ""

    # Outros sistemas
    neurological: str = ""
    neurological_notes: str = ""
    reflux: str = ""
    reflux_notes: str = ""
    intestinal: str = ""
    intestinal_notes: str = ""
    liver: str = ""
    liver_notes: str = ""
    urinary: str = ""
    urinary_notes: str = ""
    joints: str = ""
    joints_notes: str = ""
    psychiatric: str = ""
    psychiatric_notes: str = ""
    thrombosis: str = ""
    thrombosis_notes: str = ""
    tumors: str = ""
    tumors_notes: str = ""
    accidents: str = ""
    accidents_notes: str = ""
    other_problems: str = ""
    other_problems_notes: str = ""

    # Transfusão
    transfusion: str = ""
    transfusion_details: str = ""

    # Alergias
    drug_allergies: str = ""
    drug_allergies_list: str = ""
    respiratory_allergies: str = ""
    respiratory_allergies_list: str = ""
    food_allergies: str = ""
    food_allergies_list: str = ""

    medications: list[str] = _slots(MEDICATION_SLOTS)
    surgeries: list[str] = _slots(SURGERY_SLOTS)

    # História familiar
    father: str = ""
    father_diseases: str = ""
    father_death_cause: str = ""
    mother: str = ""
    mother_diseases: str = ""
    mother_death_cause: str = ""
    paternal_grandparents: str = ""
    paternal_grandparents_diseases: str = ""
    paternal_grandparents_death_cause: str = ""
    maternal_grandparents: str = ""
    maternal_grandparents_diseases: str = ""
    maternal_grandparents_death_cause: str = ""
    siblings: str = ""
    siblings_diseases: str = ""
    children: str = ""
    children_diseases: str = ""
    other_relatives: str = ""
    other_relatives_details: str = ""

    # Tabagismo
    currently_smokes: str = ""
    smoke_type: str = ""
    ever_smoked: str = ""
    smoking_start_age: int = 0
    smoking_quit_age: int = 0
    cigarettes_per_day: int = 0
    quit_recently: str = ""
    pack_years: int = 0
    passive_smoking: str = ""
    passive_smoking_details: str = ""

    # Álcool
    drinks_alcohol: str = ""
    ever_drank_alcohol: str = ""
    alcohol_types: list[str] = field(default_factory=list)
    alcohol_consumption: str = ""
    alcohol_notes: str = ""

    # Atividade física
    physical_activity: str = ""
    previous_physical_activity: str = ""
    weekly_frequency: str = ""
    activity_type: str = ""
    weekly_total_time: str = ""

    diet_type: str = ""

    # Vacinações
    influenza: str = ""
    influenza_year: int = 0
    covid: str = ""
    covid_year: int = 0
    covid_doses: str = ""
    pneumococcal: str = ""
    pneumococcal_year: int = 0
    other_vaccines: list[str] = _slots(OTHER_VACCINE_SLOTS)

    # Rastreamentos
    colonoscopy: str = ""
    colonoscopy_year: int = 0

    declaration: bool = False


def record_field_names() -> tuple[str, ...]:
    return tuple(item.name for item in fields(IntakeFormRecord))


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


@dataclass(frozen=True, slots=True)
class IntakeSnapshot(Mapping[str, Any]):
    """Read-only copy of a record taken at export or submission time."""

    data: Mapping[str, Any]
    taken_at: datetime

    @classmethod
    def from_record(cls, record: IntakeFormRecord, *, taken_at: datetime | None = None) -> IntakeSnapshot:
        frozen = {name: _freeze(getattr(record, name)) for name in record_field_names()}
        return cls(data=MappingProxyType(frozen), taken_at=taken_at or datetime.now())

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def to_payload(self) -> dict[str, Any]:
        return {name: list(value) if isinstance(value, tuple) else value for name, value in self.data.items()}
