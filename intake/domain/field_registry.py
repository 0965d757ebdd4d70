"""Static schema of the intake questionnaire.

Every field of :class:`IntakeFormRecord` is declared here once, in the order
the form shows it, together with its section, label, kind, default value and
the reveal conditions of conditional sub-fields.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from intake.domain.constants import (
    EPWORTH_SCORE_MAX,
    EPWORTH_SCORE_MIN,
    FATHER_STATUS,
    GRANDPARENTS_STATUS,
    MOTHER_STATUS,
    AlcoholConsumption,
    AlcoholType,
    CovidDoses,
    DietType,
    ReferralSource,
    SmokeType,
    SnoringFrequency,
    WeeklyFrequency,
    WeeklyTotalTime,
    YesNo,
)
from intake.domain.models.intake_form import (
    EPWORTH_FIELDS,
    MEDICATION_SLOTS,
    OTHER_VACCINE_SLOTS,
    SURGERY_SLOTS,
    IntakeFormRecord,
)


class FieldKind(StrEnum):
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    DATE = "date"
    CHOICE = "choice"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    SLOTS = "slots"
    TAGS = "tags"
    COMPUTED = "computed"


@dataclass(frozen=True, slots=True)
class RevealCondition:
    controller: str
    trigger: str


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    label: str
    section: str
    kind: FieldKind
    options: tuple[str, ...] = ()
    min_value: int | None = None
    max_value: int | None = None
    slots: int = 0
    reveal_when: tuple[RevealCondition, ...] = ()

    @property
    def is_conditional(self) -> bool:
        return bool(self.reveal_when)

    def default(self) -> Any:
        if self.kind in (FieldKind.INTEGER, FieldKind.COMPUTED):
            return 0
        if self.kind == FieldKind.BOOLEAN:
            return False
        if self.kind == FieldKind.SLOTS:
            return [""] * self.slots
        if self.kind == FieldKind.TAGS:
            return []
        return ""


@dataclass(frozen=True, slots=True)
class SectionSpec:
    key: str
    title: str
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)


YES = YesNo.YES.value
NO = YesNo.NO.value
_YES_NO = tuple(YesNo.values())


def _when(*pairs: tuple[str, str]) -> tuple[RevealCondition, ...]:
    return tuple(RevealCondition(controller, trigger) for controller, trigger in pairs)


def _yes_no_with_details(section: str, name: str, label: str, details: str, details_label: str) -> list[FieldSpec]:
    return [
        FieldSpec(name, label, section, FieldKind.CHOICE, options=_YES_NO),
        FieldSpec(details, details_label, section, FieldKind.LONG_TEXT, reveal_when=_when((name, YES))),
    ]


def _conditions(section: str, items: list[tuple[str, str]]) -> list[FieldSpec]:
    out: list[FieldSpec] = []
    for name, label in items:
        out.extend(_yes_no_with_details(section, name, label, f"{name}_notes", f"Observações - {label}"))
    return out


def _relative(section: str, name: str, label: str, statuses: tuple[str, ...], who: str) -> list[FieldSpec]:
    deceased = statuses[1]
    death_label = "Motivo dos falecimentos" if deceased.endswith("s") else "Motivo do falecimento"
    return [
        FieldSpec(name, label, section, FieldKind.CHOICE, options=statuses),
        FieldSpec(f"{name}_diseases", f"Doenças {who}", section, FieldKind.LONG_TEXT),
        FieldSpec(
            f"{name}_death_cause",
            f"{death_label} ({label.lower()})",
            section,
            FieldKind.LONG_TEXT,
            reveal_when=_when((name, deceased)),
        ),
    ]


def _year(section: str, name: str, label: str, controller: str) -> FieldSpec:
    return FieldSpec(
        name, label, section, FieldKind.INTEGER, min_value=0, max_value=2100, reveal_when=_when((controller, YES))
    )


def _build_sections() -> tuple[SectionSpec, ...]:
    sections: list[SectionSpec] = []

    def add(key: str, title: str, specs: list[FieldSpec]) -> None:
        sections.append(SectionSpec(key=key, title=title, fields=tuple(specs)))

    add(
        "identification",
        "Dados Pessoais",
        [
            FieldSpec("full_name", "Nome Completo", "identification", FieldKind.SHORT_TEXT),
            FieldSpec("birth_date", "Data de Nascimento", "identification", FieldKind.DATE),
            FieldSpec("fill_date", "Data de preenchimento", "identification", FieldKind.DATE),
            FieldSpec("age", "Idade", "identification", FieldKind.COMPUTED),
            FieldSpec(
                "referral_source",
                "Quem fez a indicação",
                "identification",
                FieldKind.CHOICE,
                options=tuple(ReferralSource.values()),
            ),
            FieldSpec("referred_by", "Quem indicou", "identification", FieldKind.SHORT_TEXT),
        ],
    )
    add(
        "respiratory",
        "Histórico Respiratório",
        _conditions(
            "respiratory",
            [
                ("asthma", "Asma / Bronquite"),
                ("rhinitis", "Rinite"),
                ("sinusitis", "Sinusites"),
                ("emphysema", "Enfisema / DPOC"),
                ("pneumonia", "Pneumonias prévias"),
                ("tuberculosis", "Tuberculose"),
                ("other_respiratory", "Outras doenças respiratórias"),
            ],
        ),
    )

    snoring_on = _when(("snoring", YES))
    add(
        "sleep",
        "Distúrbios do Sono",
        [
            FieldSpec("snoring", "Roncos", "sleep", FieldKind.CHOICE, options=_YES_NO),
            FieldSpec(
                "snoring_frequency",
                "Frequência dos roncos",
                "sleep",
                FieldKind.CHOICE,
                options=tuple(SnoringFrequency.values()),
                reveal_when=snoring_on,
            ),
            FieldSpec(
                "snoring_intensity",
                "Intensidade dos roncos (0-10)",
                "sleep",
                FieldKind.INTEGER,
                min_value=0,
                max_value=10,
                reveal_when=snoring_on,
            ),
            FieldSpec("snoring_notes", "Observações - Roncos", "sleep", FieldKind.LONG_TEXT, reveal_when=snoring_on),
            *_conditions(
                "sleep",
                [
                    ("insomnia", "Insônia (dificuldade para dormir)"),
                    ("daytime_sleepiness", "Sonolência excessiva durante o dia"),
                    ("other_sleep_problems", "Outros problemas do sono"),
                ],
            ),
        ],
    )

    epworth_labels = (
        "Sentado lendo",
        "Assistindo TV",
        "Sentado inativo em local público",
        "Como passageiro de carro por 1 hora",
        "Descansando à tarde",
        "Sentado conversando com alguém",
        "Sentado após almoço sem álcool",
        "No carro parado no trânsito",
    )
    add(
        "epworth",
        "Escala de Sonolência de Epworth",
        [
            *[
                FieldSpec(
                    name, label, "epworth", FieldKind.INTEGER, min_value=EPWORTH_SCORE_MIN, max_value=EPWORTH_SCORE_MAX
                )
                for name, label in zip(EPWORTH_FIELDS, epworth_labels, strict=True)
            ],
            FieldSpec("epworth_total", "Total da Escala de Epworth", "epworth", FieldKind.COMPUTED),
        ],
    )
    add(
        "cardiovascular",
        "Sistema Cardiovascular",
        _conditions(
            "cardiovascular",
            [
                ("high_blood_pressure", "Pressão alta"),
                ("high_cholesterol", "Colesterol alto"),
                ("arrhythmia", "Arritmias cardíacas"),
                ("other_cardiac", "Outros problemas cardíacos"),
            ],
        ),
    )
    add(
        "endocrine",
        "Sistema Endócrino",
        _conditions("endocrine", [("diabetes", "Diabetes"), ("thyroid", "Problemas de tireoide")]),
    )
    add(
        "other_systems",
        "Outros Sistemas",
        _conditions(
            "other_systems",
            [
                ("neurological", "Problemas neurológicos"),
                ("reflux", "Refluxo gastroesofágico"),
                ("intestinal", "Problemas intestinais"),
                ("liver", "Problemas no fígado"),
                ("urinary", "Problemas urinários"),
                ("joints", "Problemas nas articulações"),
                ("psychiatric", "Problemas psiquiátricos"),
                ("thrombosis", "Tromboses"),
                ("tumors", "Tumores"),
                ("accidents", "Acidentes graves"),
                ("other_problems", "Outros problemas de saúde"),
            ],
        ),
    )
    add(
        "transfusion",
        "Transfusão Sanguínea",
        _yes_no_with_details(
            "transfusion",
            "transfusion",
            "Já recebeu transfusão de sangue?",
            "transfusion_details",
            "Detalhes da transfusão",
        ),
    )
    add(
        "allergies",
        "Alergias",
        [
            *_yes_no_with_details(
                "allergies", "drug_allergies", "Alergias a medicamentos", "drug_allergies_list", "Quais medicamentos"
            ),
            *_yes_no_with_details(
                "allergies",
                "respiratory_allergies",
                "Alergias respiratórias",
                "respiratory_allergies_list",
                "Quais alérgenos respiratórios",
            ),
            *_yes_no_with_details(
                "allergies", "food_allergies", "Alergias alimentares", "food_allergies_list", "Quais alimentos"
            ),
        ],
    )
    add(
        "medications",
        "Medicações em Uso",
        [FieldSpec("medications", "Medicação", "medications", FieldKind.SLOTS, slots=MEDICATION_SLOTS)],
    )
    add(
        "surgeries",
        "Cirurgias Anteriores",
        [FieldSpec("surgeries", "Cirurgia", "surgeries", FieldKind.SLOTS, slots=SURGERY_SLOTS)],
    )
    add(
        "family_history",
        "História Familiar",
        [
            *_relative("family_history", "father", "Pai", FATHER_STATUS, "do pai"),
            *_relative("family_history", "mother", "Mãe", MOTHER_STATUS, "da mãe"),
            *_relative(
                "family_history", "paternal_grandparents", "Avós paternos", GRANDPARENTS_STATUS, "dos avós paternos"
            ),
            *_relative(
                "family_history", "maternal_grandparents", "Avós maternos", GRANDPARENTS_STATUS, "dos avós maternos"
            ),
            FieldSpec("siblings", "Quantos irmãos?", "family_history", FieldKind.SHORT_TEXT),
            FieldSpec("siblings_diseases", "Doenças dos irmãos", "family_history", FieldKind.LONG_TEXT),
            FieldSpec("children", "Quantos filhos?", "family_history", FieldKind.SHORT_TEXT),
            FieldSpec("children_diseases", "Doenças dos filhos", "family_history", FieldKind.LONG_TEXT),
            *_yes_no_with_details(
                "family_history",
                "other_relatives",
                "Outros parentes com doenças relevantes",
                "other_relatives_details",
                "Detalhes sobre outros parentes",
            ),
        ],
    )

    smoker = ("currently_smokes", YES)
    former_smoker = ("ever_smoked", YES)
    add(
        "smoking",
        "Hábitos Pessoais - Tabagismo",
        [
            FieldSpec("currently_smokes", "Fuma atualmente?", "smoking", FieldKind.CHOICE, options=_YES_NO),
            FieldSpec(
                "smoke_type",
                "Tipo de fumo",
                "smoking",
                FieldKind.CHOICE,
                options=tuple(SmokeType.values()),
                reveal_when=_when(smoker),
            ),
            FieldSpec(
                "ever_smoked",
                "Já fumou anteriormente?",
                "smoking",
                FieldKind.CHOICE,
                options=_YES_NO,
                reveal_when=_when(("currently_smokes", NO)),
            ),
            FieldSpec(
                "smoking_start_age",
                "Idade que começou a fumar",
                "smoking",
                FieldKind.INTEGER,
                min_value=0,
                max_value=120,
                reveal_when=_when(smoker, former_smoker),
            ),
            FieldSpec(
                "smoking_quit_age",
                "Idade que parou",
                "smoking",
                FieldKind.INTEGER,
                min_value=0,
                max_value=120,
                reveal_when=_when(former_smoker),
            ),
            FieldSpec(
                "cigarettes_per_day",
                "Cigarros por dia",
                "smoking",
                FieldKind.INTEGER,
                min_value=0,
                max_value=200,
                reveal_when=_when(smoker, former_smoker),
            ),
            FieldSpec(
                "quit_recently",
                "Cessou recentemente (últimos 5 anos)?",
                "smoking",
                FieldKind.CHOICE,
                options=_YES_NO,
                reveal_when=_when(former_smoker),
            ),
            FieldSpec(
                "pack_years",
                "Carga Tabágica (anos-maço)",
                "smoking",
                FieldKind.COMPUTED,
                reveal_when=_when(smoker, former_smoker),
            ),
            *_yes_no_with_details(
                "smoking",
                "passive_smoking",
                "Tabagismo passivo (convive com fumantes)",
                "passive_smoking_details",
                "Detalhes do tabagismo passivo",
            ),
        ],
    )

    drinker = _when(("drinks_alcohol", YES), ("ever_drank_alcohol", YES))
    add(
        "alcohol",
        "Consumo de Álcool",
        [
            FieldSpec("drinks_alcohol", "Consome álcool atualmente?", "alcohol", FieldKind.CHOICE, options=_YES_NO),
            FieldSpec(
                "ever_drank_alcohol",
                "Já consumiu álcool anteriormente?",
                "alcohol",
                FieldKind.CHOICE,
                options=_YES_NO,
                reveal_when=_when(("drinks_alcohol", NO)),
            ),
            FieldSpec(
                "alcohol_types",
                "Tipos de bebida que consome/consumia",
                "alcohol",
                FieldKind.TAGS,
                options=tuple(AlcoholType.values()),
                reveal_when=drinker,
            ),
            FieldSpec(
                "alcohol_consumption",
                "Classificação do consumo",
                "alcohol",
                FieldKind.CHOICE,
                options=tuple(AlcoholConsumption.values()),
                reveal_when=drinker,
            ),
            FieldSpec(
                "alcohol_notes", "Observações sobre o consumo", "alcohol", FieldKind.LONG_TEXT, reveal_when=drinker
            ),
        ],
    )

    active = _when(("physical_activity", YES), ("previous_physical_activity", YES))
    add(
        "physical_activity",
        "Atividade Física",
        [
            FieldSpec(
                "physical_activity",
                "Pratica atividade física atualmente?",
                "physical_activity",
                FieldKind.CHOICE,
                options=_YES_NO,
            ),
            FieldSpec(
                "previous_physical_activity",
                "Já praticou atividade física anteriormente?",
                "physical_activity",
                FieldKind.CHOICE,
                options=_YES_NO,
                reveal_when=_when(("physical_activity", NO)),
            ),
            FieldSpec(
                "weekly_frequency",
                "Frequência semanal",
                "physical_activity",
                FieldKind.CHOICE,
                options=tuple(WeeklyFrequency.values()),
                reveal_when=active,
            ),
            FieldSpec(
                "activity_type", "Tipo de atividade", "physical_activity", FieldKind.SHORT_TEXT, reveal_when=active
            ),
            FieldSpec(
                "weekly_total_time",
                "Tempo total semanal",
                "physical_activity",
                FieldKind.CHOICE,
                options=tuple(WeeklyTotalTime.values()),
                reveal_when=active,
            ),
        ],
    )
    add(
        "diet",
        "Alimentação",
        [FieldSpec("diet_type", "Tipo de alimentação", "diet", FieldKind.CHOICE, options=tuple(DietType.values()))],
    )
    add(
        "vaccinations",
        "Vacinações",
        [
            FieldSpec("influenza", "Vacina da Influenza (Gripe)", "vaccinations", FieldKind.CHOICE, options=_YES_NO),
            _year("vaccinations", "influenza_year", "Ano da última vacina (influenza)", "influenza"),
            FieldSpec("covid", "Vacina COVID-19", "vaccinations", FieldKind.CHOICE, options=_YES_NO),
            _year("vaccinations", "covid_year", "Ano da última dose (COVID-19)", "covid"),
            FieldSpec(
                "covid_doses",
                "Quantas doses?",
                "vaccinations",
                FieldKind.CHOICE,
                options=tuple(CovidDoses.values()),
                reveal_when=_when(("covid", YES)),
            ),
            FieldSpec("pneumococcal", "Vacina Pneumocócica", "vaccinations", FieldKind.CHOICE, options=_YES_NO),
            _year("vaccinations", "pneumococcal_year", "Ano da vacina (pneumocócica)", "pneumococcal"),
            FieldSpec(
                "other_vaccines", "Outras vacinas relevantes", "vaccinations", FieldKind.SLOTS, slots=OTHER_VACCINE_SLOTS
            ),
        ],
    )
    add(
        "screening",
        "Exames de Rastreamento",
        [
            FieldSpec("colonoscopy", "Colonoscopia", "screening", FieldKind.CHOICE, options=_YES_NO),
            _year("screening", "colonoscopy_year", "Ano do último exame (colonoscopia)", "colonoscopy"),
        ],
    )
    add(
        "declaration",
        "Declaração de Veracidade",
        [
            FieldSpec(
                "declaration",
                "Declaro que todas as informações fornecidas são verdadeiras e completas",
                "declaration",
                FieldKind.BOOLEAN,
            )
        ],
    )
    return tuple(sections)


SECTIONS: tuple[SectionSpec, ...] = _build_sections()
FIELDS: dict[str, FieldSpec] = {spec.name: spec for section in SECTIONS for spec in section.fields}
SLOT_CAPACITY: dict[str, int] = {name: spec.slots for name, spec in FIELDS.items() if spec.kind == FieldKind.SLOTS}


def iter_sections() -> Iterator[SectionSpec]:
    return iter(SECTIONS)


def iter_fields() -> Iterator[FieldSpec]:
    return iter(FIELDS.values())


def get_field(name: str) -> FieldSpec:
    try:
        return FIELDS[name]
    except KeyError:
        raise KeyError(f"Campo desconhecido: {name}") from None


def default_record() -> IntakeFormRecord:
    return IntakeFormRecord()


def dependents(field_name: str) -> list[str]:
    return [
        spec.name
        for spec in FIELDS.values()
        if any(condition.controller == field_name for condition in spec.reveal_when)
    ]


def is_visible(values: Mapping[str, Any] | IntakeFormRecord, field_name: str) -> bool:
    spec = get_field(field_name)
    if not spec.reveal_when:
        return True
    for condition in spec.reveal_when:
        if _read(values, condition.controller) == condition.trigger and is_visible(values, condition.controller):
            return True
    return False


def visible_fields(values: Mapping[str, Any] | IntakeFormRecord) -> list[FieldSpec]:
    return [spec for spec in FIELDS.values() if is_visible(values, spec.name)]


def _read(values: Mapping[str, Any] | IntakeFormRecord, name: str) -> Any:
    if isinstance(values, IntakeFormRecord):
        return getattr(values, name)
    return values.get(name)
