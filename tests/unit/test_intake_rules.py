from __future__ import annotations

import pytest

from intake.domain.rules.intake_rules import (
    DECLARATION_REQUIRED,
    FULL_NAME_REQUIRED,
    normalize_birth_date,
    validate_submission_preconditions,
)


def test_preconditions_require_full_name() -> None:
    with pytest.raises(ValueError, match=FULL_NAME_REQUIRED):
        validate_submission_preconditions({"full_name": "   ", "declaration": True})


def test_preconditions_require_declaration() -> None:
    with pytest.raises(ValueError, match=DECLARATION_REQUIRED):
        validate_submission_preconditions({"full_name": "Maria Silva", "declaration": False})


def test_preconditions_pass_with_name_and_declaration() -> None:
    validate_submission_preconditions({"full_name": "Maria Silva", "declaration": True})


def test_normalize_birth_date() -> None:
    assert normalize_birth_date("") is None
    assert normalize_birth_date(None) is None
    assert normalize_birth_date("1990-04-02T00:00:00") == "1990-04-02"
