from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date

from intake.domain.constants import CIGARETTES_PER_PACK


def age_from_date(birth_date_iso: str | None, today: date | None = None) -> int | None:
    """Full years between ``birth_date_iso`` and ``today``.

    Returns ``None`` for an empty, malformed or future birth date so callers can
    tell "unknown" apart from a newborn.
    """
    text = str(birth_date_iso or "").strip()
    if not text:
        return None
    try:
        birth = date.fromisoformat(text[:10])
    except ValueError:
        return None
    today = today or date.today()
    if birth > today:
        return None
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def sleepiness_total(scores: Iterable[int]) -> int:
    # Items are expected in 0..3; the sum is taken as-is.
    return sum(int(score) for score in scores)


def pack_years(start_age: int | None, end_age: int | None, cigarettes_per_day: int | None) -> int | None:
    """Smoking exposure: years smoked x packs per day, rounded.

    ``None`` when any input is missing/zero or the interval is negative.
    """
    if not start_age or not end_age or not cigarettes_per_day:
        return None
    years = end_age - start_age
    if years < 0:
        return None
    return _round_half_up(years * (cigarettes_per_day / CIGARETTES_PER_PACK))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
