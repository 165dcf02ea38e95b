from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from services.time.dates import check_forecast_window, format_long_date, format_short_date
from services.time.moon import PhaseResult, compute_phase

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 7


class ForecastLookupError(KeyError):
    """The requested day is not part of the current forecast."""

    def __init__(self, day: date) -> None:
        super().__init__(day.isoformat())
        self.day = day

    def __str__(self) -> str:
        return f"{self.day.isoformat()} is not in the current forecast"


@dataclass(frozen=True)
class ForecastEntry:
    day: date
    label: str
    result: PhaseResult

    def as_dict(self) -> Dict[str, Any]:
        return {"date": self.day.isoformat(), "label": self.label, **self.result.as_dict()}


@dataclass(frozen=True)
class DayDetail:
    day: date
    date_label: str
    phase_line: str
    illumination_line: Optional[str] = None
    fact_line: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "date_label": self.date_label,
            "phase_line": self.phase_line,
            "illumination_line": self.illumination_line,
            "fact_line": self.fact_line,
        }


@dataclass(frozen=True)
class RenderPlan:
    selected: date
    heading: str
    primary: PhaseResult
    forecast: List[ForecastEntry] = field(default_factory=list)
    extended: bool = True
    # A fresh plan never shows the detail panel; ForecastRenderer tracks later selections.
    details_visible: bool = False

    def entry_for(self, day: date) -> ForecastEntry:
        for entry in self.forecast:
            if entry.day == day:
                return entry
        raise ForecastLookupError(day)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "selected": self.selected.isoformat(),
            "heading": self.heading,
            "primary": self.primary.as_dict(),
            "forecast": [entry.as_dict() for entry in self.forecast],
            "extended": self.extended,
            "details_visible": self.details_visible,
        }


def build_forecast(
    selected: date,
    include_extended_details: bool = True,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> List[ForecastEntry]:
    entries: List[ForecastEntry] = []
    for offset in range(1, forecast_days + 1):
        day = selected + timedelta(days=offset)
        entries.append(
            ForecastEntry(
                day=day,
                label=format_short_date(day),
                result=compute_phase(day, include_extended_details),
            )
        )
    return entries


def build_render_plan(
    selected: date,
    today: date,
    include_extended_details: bool = True,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> RenderPlan:
    """Primary display for *selected* plus the following *forecast_days* days."""
    check_forecast_window(selected, forecast_days)
    heading = "Today" if selected == today else format_long_date(selected)
    return RenderPlan(
        selected=selected,
        heading=heading,
        primary=compute_phase(selected, include_extended_details),
        forecast=build_forecast(selected, include_extended_details, forecast_days),
        extended=include_extended_details,
    )


def build_day_detail(entry: ForecastEntry) -> DayDetail:
    result = entry.result
    illumination_line = None
    if result.illumination is not None:
        illumination_line = f"Illumination: {result.illumination}%"
    fact_line = f"Did You Know?: {result.fact}" if result.fact else None
    return DayDetail(
        day=entry.day,
        date_label=format_long_date(entry.day),
        phase_line=f"Phase: {result.phase}",
        illumination_line=illumination_line,
        fact_line=fact_line,
    )


class ForecastRenderer:
    """Command-style front end over :func:`build_render_plan`.

    Each ``on_date_selected`` call replaces the previous plan as a whole, so
    forecast entries from an earlier selection are never reachable afterwards.
    """

    def __init__(
        self,
        today: date,
        include_extended_details: bool = True,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
    ) -> None:
        if forecast_days < 1:
            raise ValueError("forecast_days must be at least 1")
        self.today = today
        self.include_extended_details = include_extended_details
        self.forecast_days = forecast_days
        self._plan: Optional[RenderPlan] = None
        self._detail: Optional[DayDetail] = None

    @property
    def plan(self) -> Optional[RenderPlan]:
        return self._plan

    @property
    def detail(self) -> Optional[DayDetail]:
        return self._detail

    def on_date_selected(self, selected: date) -> RenderPlan:
        self._plan = None
        self._detail = None
        self._plan = build_render_plan(
            selected,
            self.today,
            include_extended_details=self.include_extended_details,
            forecast_days=self.forecast_days,
        )
        logger.debug(
            "[forecast] rendered selected=%s phase=%s days=%d",
            selected.isoformat(),
            self._plan.primary.phase,
            len(self._plan.forecast),
        )
        return self._plan

    def on_forecast_selected(self, day: date) -> DayDetail:
        if self._plan is None:
            raise ForecastLookupError(day)
        self._detail = build_day_detail(self._plan.entry_for(day))
        return self._detail

    @property
    def details_visible(self) -> bool:
        return self._detail is not None
