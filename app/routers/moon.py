from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from app.models import DayDetailOut, Envelope, ForecastDayOut, PhaseOut, RenderPlanOut
from app.settings import settings
from services.forecast import (
    ForecastEntry,
    ForecastLookupError,
    RenderPlan,
    build_day_detail,
    build_render_plan,
)
from services.time.dates import InvalidDateError, parse_date_input, today_local
from services.time.moon import PhaseResult, compute_phase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/moon", tags=["moon"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope(ok=False, error=message).model_dump(mode="json"),
    )


def _extended(flag: Optional[bool]) -> bool:
    if flag is None:
        return settings.MOON_EXTENDED_DETAILS
    return flag


def _phase_out(day: date, result: PhaseResult) -> PhaseOut:
    return PhaseOut(date=day, **result.as_dict())


def _forecast_out(entry: ForecastEntry) -> ForecastDayOut:
    return ForecastDayOut(date=entry.day, label=entry.label, **entry.result.as_dict())


def _plan_out(plan: RenderPlan) -> RenderPlanOut:
    return RenderPlanOut(
        selected=plan.selected,
        heading=plan.heading,
        primary=_phase_out(plan.selected, plan.primary),
        forecast=[_forecast_out(entry) for entry in plan.forecast],
        extended=plan.extended,
        details_visible=plan.details_visible,
    )


def resolve_plan(
    date_value: Optional[str],
    extended: Optional[bool] = None,
    today: Optional[date] = None,
) -> RenderPlan:
    """Validate the picker value and build the plan; blank input means today."""
    today = today or today_local(settings.MOON_TIMEZONE)
    selected = parse_date_input(date_value, default=today)
    return build_render_plan(
        selected,
        today,
        include_extended_details=_extended(extended),
        forecast_days=max(1, settings.MOON_FORECAST_DAYS),
    )


def _ok(data: Any) -> Dict[str, Any]:
    return Envelope(ok=True, data=data).model_dump(mode="json")


@router.get("/phase")
async def moon_phase(
    date_value: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD; defaults to today"),
    extended: Optional[bool] = Query(None),
):
    today = today_local(settings.MOON_TIMEZONE)
    try:
        selected = parse_date_input(date_value, default=today)
    except InvalidDateError as exc:
        logger.info("[moon] rejected date=%r: %s", date_value, exc.reason)
        return _error(400, str(exc))

    result = compute_phase(selected, _extended(extended))
    return _ok(_phase_out(selected, result).model_dump(mode="json"))


@router.get("/forecast")
async def moon_forecast(
    date_value: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD; defaults to today"),
    extended: Optional[bool] = Query(None),
):
    try:
        plan = resolve_plan(date_value, extended)
    except InvalidDateError as exc:
        logger.info("[moon] rejected date=%r: %s", date_value, exc.reason)
        return _error(400, str(exc))

    return _ok(_plan_out(plan).model_dump(mode="json"))


@router.get("/details")
async def moon_details(
    day_value: str = Query(..., alias="day", description="Forecast day, YYYY-MM-DD"),
    date_value: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD; defaults to today"),
    extended: Optional[bool] = Query(None),
):
    try:
        plan = resolve_plan(date_value, extended)
        day = parse_date_input(day_value)
    except InvalidDateError as exc:
        logger.info("[moon] rejected details input: %s", exc)
        return _error(400, str(exc))

    try:
        entry = plan.entry_for(day)
    except ForecastLookupError as exc:
        return _error(404, str(exc))

    detail = build_day_detail(entry)
    return _ok(DayDetailOut(**detail.as_dict()).model_dump(mode="json"))
