from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from math import cos, floor, pi
from typing import Optional, Tuple, Union

KNOWN_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)
SYNODIC_MONTH = 29.53058867
SECONDS_PER_DAY = 86400.0

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class PhaseBucket:
    upper: float
    name: str
    icon: str
    fact: str


# Lower bound of each bucket is the previous bucket's upper bound.
PHASE_BUCKETS: Tuple[PhaseBucket, ...] = (
    PhaseBucket(
        1.84,
        "New Moon",
        "\U0001F311",
        "The New Moon is invisible from Earth because it is positioned between the Sun and Earth.",
    ),
    PhaseBucket(
        5.53,
        "Waxing Crescent",
        "\U0001F312",
        'A "Waxing" moon is growing in illumination. A Waxing Crescent looks like a thin fingernail in the sky.',
    ),
    PhaseBucket(
        9.22,
        "First Quarter",
        "\U0001F313",
        "At the First Quarter, the moon is exactly 50% illuminated, but we see a perfect half circle from Earth.",
    ),
    PhaseBucket(
        12.91,
        "Waxing Gibbous",
        "\U0001F314",
        "The Waxing Gibbous phase occurs between a half moon and a full moon, with over half of the moon illuminated.",
    ),
    PhaseBucket(
        16.61,
        "Full Moon",
        "\U0001F315",
        "During a Full Moon, the entire face of the moon is illuminated by the Sun, making it appear as a perfect circle.",
    ),
    PhaseBucket(
        20.3,
        "Waning Gibbous",
        "\U0001F316",
        'A "Waning" moon is decreasing in illumination. The Waning Gibbous phase occurs just after the full moon.',
    ),
    PhaseBucket(
        23.99,
        "Last Quarter",
        "\U0001F317",
        "At the Last Quarter, the other half of the moon is illuminated, but we still see a perfect half circle.",
    ),
    PhaseBucket(
        27.68,
        "Waning Crescent",
        "\U0001F318",
        "The Waning Crescent is the last visible phase of the moon before it becomes a New Moon again.",
    ),
    PhaseBucket(
        SYNODIC_MONTH,
        "New Moon",
        "\U0001F311",
        "The New Moon marks the beginning of a new lunar cycle.",
    ),
)

PHASE_NAMES: Tuple[str, ...] = tuple(dict.fromkeys(b.name for b in PHASE_BUCKETS))


@dataclass(frozen=True)
class PhaseResult:
    age: float
    phase: str
    icon: str
    illumination: Optional[int] = None
    fact: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "age": round(self.age, 4),
            "phase": self.phase,
            "icon": self.icon,
            "illumination": self.illumination,
            "fact": self.fact,
        }


def _as_utc(value: DateLike) -> datetime:
    # Plain dates are read as UTC midnight of that calendar day.
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def moon_age(value: DateLike) -> float:
    """Days since the last new moon, always in ``[0, SYNODIC_MONTH)``."""
    days = (_as_utc(value) - KNOWN_NEW_MOON).total_seconds() / SECONDS_PER_DAY
    return (days % SYNODIC_MONTH + SYNODIC_MONTH) % SYNODIC_MONTH


def illumination_percent(age: float) -> int:
    """Raised-cosine illumination: 0 at new moon, 100 at age == SYNODIC_MONTH / 2."""
    raw = 50 * (1 - cos(2 * pi * age / SYNODIC_MONTH))
    return max(0, min(100, int(floor(raw + 0.5))))


def classify_age(age: float) -> PhaseBucket:
    for bucket in PHASE_BUCKETS:
        if age < bucket.upper:
            return bucket
    return PHASE_BUCKETS[-1]


def compute_phase(value: DateLike, include_extended_details: bool = True) -> PhaseResult:
    """Phase, glyph and (optionally) illumination and fact text for *value*.

    With ``include_extended_details=False`` the result carries only the age,
    label and icon; ``illumination`` and ``fact`` are left as ``None``.
    """
    age = moon_age(value)
    bucket = classify_age(age)
    if not include_extended_details:
        return PhaseResult(age=age, phase=bucket.name, icon=bucket.icon)
    return PhaseResult(
        age=age,
        phase=bucket.name,
        icon=bucket.icon,
        illumination=illumination_percent(age),
        fact=bucket.fact,
    )
