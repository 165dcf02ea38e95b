import math
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from services.time.moon import (
    KNOWN_NEW_MOON,
    PHASE_BUCKETS,
    PHASE_NAMES,
    SYNODIC_MONTH,
    classify_age,
    compute_phase,
    illumination_percent,
    moon_age,
)


def test_reference_new_moon_has_zero_age() -> None:
    result = compute_phase(KNOWN_NEW_MOON)
    assert result.age == pytest.approx(0.0, abs=1e-9)
    assert result.phase == "New Moon"
    assert result.icon == "\U0001F311"
    assert result.illumination == 0


def test_mid_cycle_is_full_moon() -> None:
    result = compute_phase(KNOWN_NEW_MOON + timedelta(days=14.77))
    assert result.phase == "Full Moon"
    assert result.icon == "\U0001F315"
    assert result.illumination == 100


@pytest.mark.parametrize(
    "value",
    [
        date(1900, 1, 1),
        date(1999, 12, 25),
        date(2000, 1, 6),
        date(2024, 2, 29),
        datetime(2087, 7, 4, 23, 59, tzinfo=timezone.utc),
        datetime(1969, 7, 20, 20, 17),
    ],
)
def test_age_stays_within_cycle(value) -> None:
    age = moon_age(value)
    assert 0.0 <= age < SYNODIC_MONTH


def test_pre_epoch_date_wraps_to_positive_age() -> None:
    # 1999-12-25T00:00Z is 12d18h14m before the reference new moon.
    expected = SYNODIC_MONTH - (12 + (18 * 60 + 14) / 1440)
    assert moon_age(date(1999, 12, 25)) == pytest.approx(expected, abs=1e-9)
    assert compute_phase(date(1999, 12, 25)).phase == "Waning Gibbous"


def test_age_is_periodic_over_a_synodic_month() -> None:
    start = datetime(2024, 3, 25, 12, 0, tzinfo=timezone.utc)
    later = start + timedelta(days=SYNODIC_MONTH)
    assert math.isclose(moon_age(start), moon_age(later), abs_tol=1e-6)
    assert compute_phase(start).phase == compute_phase(later).phase


def test_naive_datetimes_are_read_as_utc() -> None:
    naive = datetime(2023, 8, 30, 6, 30)
    aware = naive.replace(tzinfo=timezone.utc)
    shifted = datetime(2023, 8, 30, 8, 30, tzinfo=timezone(timedelta(hours=2)))
    assert moon_age(naive) == moon_age(aware) == moon_age(shifted)


def test_plain_date_is_utc_midnight() -> None:
    assert moon_age(date(2010, 5, 1)) == moon_age(datetime(2010, 5, 1, tzinfo=timezone.utc))


def test_epoch_calendar_day_reads_as_new_moon() -> None:
    result = compute_phase(date(2000, 1, 6))
    assert result.phase == "New Moon"
    assert result.icon == "\U0001F311"
    assert result.illumination <= 1
    assert result.fact == "The New Moon marks the beginning of a new lunar cycle."


def test_two_weeks_after_epoch_day_is_near_full() -> None:
    result = compute_phase(date(2000, 1, 20))
    assert result.phase in ("Full Moon", "Waning Gibbous")
    assert result.illumination > 90


def test_bucket_boundaries_are_lower_inclusive() -> None:
    assert classify_age(0.0).name == "New Moon"
    assert classify_age(1.8399).name == "New Moon"
    assert classify_age(1.84).name == "Waxing Crescent"
    assert classify_age(9.22).name == "Waxing Gibbous"
    assert classify_age(16.6099).name == "Full Moon"
    assert classify_age(23.99).name == "Waning Crescent"
    assert classify_age(27.6799).name == "Waning Crescent"
    assert classify_age(27.68).name == "New Moon"
    assert classify_age(SYNODIC_MONTH - 1e-9).name == "New Moon"


def test_buckets_cover_cycle_without_gaps() -> None:
    uppers = [bucket.upper for bucket in PHASE_BUCKETS]
    assert uppers == sorted(uppers)
    assert len(set(uppers)) == len(uppers)
    assert uppers[-1] == SYNODIC_MONTH
    assert len(PHASE_NAMES) == 8

    seen = set()
    steps = int(SYNODIC_MONTH * 100)
    for i in range(steps):
        bucket = classify_age(i / 100)
        assert bucket.name in PHASE_NAMES
        seen.add(bucket.name)
    assert seen == set(PHASE_NAMES)


def test_icon_is_tied_to_phase_name() -> None:
    icons = {}
    for bucket in PHASE_BUCKETS:
        icons.setdefault(bucket.name, set()).add(bucket.icon)
    assert all(len(glyphs) == 1 for glyphs in icons.values())
    assert len({next(iter(glyphs)) for glyphs in icons.values()}) == 8


@pytest.mark.parametrize("age", [0.5, 3.0, 7.5, 11.2, 14.0])
def test_illumination_is_symmetric_around_full_moon(age: float) -> None:
    assert illumination_percent(age) == illumination_percent(SYNODIC_MONTH - age)


def test_illumination_bounds() -> None:
    assert illumination_percent(0.0) == 0
    assert illumination_percent(SYNODIC_MONTH / 2) == 100
    assert illumination_percent(SYNODIC_MONTH / 4) == 50
    for i in range(0, 2954):
        assert 0 <= illumination_percent(i / 100) <= 100


def test_extended_details_can_be_disabled() -> None:
    full = compute_phase(date(2000, 1, 20))
    basic = compute_phase(date(2000, 1, 20), include_extended_details=False)
    assert basic.illumination is None
    assert basic.fact is None
    assert (basic.age, basic.phase, basic.icon) == (full.age, full.phase, full.icon)


def test_results_are_independent_values() -> None:
    first = compute_phase(date(2015, 9, 28))
    second = compute_phase(date(2015, 9, 28))
    assert first == second
    with pytest.raises(AttributeError):
        first.phase = "Full Moon"  # type: ignore[misc]


def test_instant_before_reference_stays_below_cycle_length() -> None:
    age = moon_age(KNOWN_NEW_MOON - timedelta(microseconds=1))
    assert 0.0 <= age < SYNODIC_MONTH
    assert classify_age(age).name == "New Moon"
