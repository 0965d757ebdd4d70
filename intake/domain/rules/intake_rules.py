from __future__ import annotations

from collections.abc import Mapping
from typing import Any

FULL_NAME_REQUIRED = "Por favor, preencha o nome completo."
DECLARATION_REQUIRED = "Por favor, aceite a declaração de veracidade das informações."


def validate_submission_preconditions(values: Mapping[str, Any]) -> None:
    full_name = str(values.get("full_name") or "").strip()
    if not full_name:
        raise ValueError(FULL_NAME_REQUIRED)
    if values.get("declaration") is not True:
        raise ValueError(DECLARATION_REQUIRED)


def normalize_birth_date(value: Any) -> str | None:
    text = str(value or "").strip()
    return text[:10] or None
