from __future__ import annotations

from datetime import date

import pytest

from intake.domain.calculations.derived_values import age_from_date, pack_years, sleepiness_total

TODAY = date(2024, 6, 15)


@pytest.mark.parametrize(
    ("birth_date", "expected"),
    [
        ("2000-06-16", 23),
        ("2000-06-14", 24),
        ("2000-06-15", 24),
        ("2024-06-15", 0),
    ],
)
def test_age_from_date_counts_full_years(birth_date: str, expected: int) -> None:
    assert age_from_date(birth_date, today=TODAY) == expected


@pytest.mark.parametrize("birth_date", ["", None, "15/06/2000", "2000-13-01", "2030-01-01"])
def test_age_from_date_returns_none_for_unusable_input(birth_date: str | None) -> None:
    assert age_from_date(birth_date, today=TODAY) is None


def test_age_from_date_handles_leap_day_birthday() -> None:
    assert age_from_date("2000-02-29", today=date(2023, 2, 28)) == 22
    assert age_from_date("2000-02-29", today=date(2023, 3, 1)) == 23


def test_sleepiness_total_is_exact_sum() -> None:
    assert sleepiness_total([0] * 8) == 0
    assert sleepiness_total([3] * 8) == 24
    assert sleepiness_total([1, 2, 0, 3, 1, 0, 2, 1]) == 10


def test_pack_years_examples() -> None:
    assert pack_years(15, 45, 20) == 30
    assert pack_years(18, 38, 10) == 10
    assert pack_years(30, 50, 10) == 10


def test_pack_years_rounds_half_up() -> None:
    # 5 years x 0.5 pack = 2.5
    assert pack_years(20, 25, 10) == 3
    # 3 years x 0.25 pack = 0.75
    assert pack_years(20, 23, 5) == 1


@pytest.mark.parametrize(
    ("start", "end", "per_day"),
    [(0, 40, 20), (15, 0, 20), (15, 40, 0), (None, 40, 20), (40, 30, 20)],
)
def test_pack_years_without_usable_inputs_is_none(start, end, per_day) -> None:
    assert pack_years(start, end, per_day) is None
