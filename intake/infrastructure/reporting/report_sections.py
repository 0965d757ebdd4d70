from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from intake.domain import field_registry
from intake.domain.constants import EPWORTH_EXCESSIVE_THRESHOLD
from intake.domain.field_registry import FieldKind, FieldSpec

NOT_INFORMED = "Não informado"


@dataclass(frozen=True, slots=True)
class ReportLine:
    label: str
    value: str
    indent: bool = False


@dataclass(frozen=True, slots=True)
class ReportSection:
    title: str
    lines: tuple[ReportLine, ...]


def sleepiness_label(total: int) -> str:
    return "Sonolência excessiva" if total > EPWORTH_EXCESSIVE_THRESHOLD else "Sonolência normal"


def format_date(value: Any) -> str:
    text = str(value or "").strip()
    if not text:
        return NOT_INFORMED
    try:
        return date.fromisoformat(text[:10]).strftime("%d/%m/%Y")
    except ValueError:
        return text


def format_field_value(spec: FieldSpec, value: Any) -> str:
    kind = spec.kind
    if kind == FieldKind.BOOLEAN:
        return "Sim" if value else "Não"
    if kind == FieldKind.DATE:
        return format_date(value)
    if kind == FieldKind.TAGS:
        items = [str(item) for item in value or () if str(item).strip()]
        return ", ".join(items) if items else NOT_INFORMED
    if kind == FieldKind.COMPUTED:
        return _format_computed(spec.name, value)
    if kind == FieldKind.INTEGER:
        return str(value) if value or spec.section == "epworth" else NOT_INFORMED
    text = str(value or "").strip()
    return text or NOT_INFORMED


def _format_computed(name: str, value: Any) -> str:
    number = int(value or 0)
    if name == "age":
        return f"{number} anos" if number else NOT_INFORMED
    if name == "epworth_total":
        return f"{number} pontos ({sleepiness_label(number)})"
    if name == "pack_years":
        return f"{number} anos-maço" if number else NOT_INFORMED
    return str(number)


def build_report_sections(values: Mapping[str, Any]) -> list[ReportSection]:
    """Visible fields grouped by section, in registry order.

    Slot fields list only their filled positions; an empty slot field collapses
    to a single "Nenhum item informado" line.
    """
    sections: list[ReportSection] = []
    for section in field_registry.iter_sections():
        lines: list[ReportLine] = []
        for spec in section.fields:
            if not field_registry.is_visible(values, spec.name):
                continue
            value = values.get(spec.name)
            if spec.kind == FieldKind.SLOTS:
                lines.extend(_slot_lines(spec, value))
                continue
            lines.append(ReportLine(spec.label, format_field_value(spec, value), indent=spec.is_conditional))
        if lines:
            sections.append(ReportSection(section.title, tuple(lines)))
    return sections


def _slot_lines(spec: FieldSpec, value: Any) -> list[ReportLine]:
    filled = [(index, str(item).strip()) for index, item in enumerate(value or ()) if str(item).strip()]
    if not filled:
        return [ReportLine(spec.label, "Nenhum item informado")]
    return [ReportLine(f"{spec.label} {index + 1}", text) for index, text in filled]
