from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.routers.moon import resolve_plan
from app.settings import settings
from services.forecast import ForecastLookupError, build_day_detail
from services.time.dates import InvalidDateError, parse_date_input, today_local

logger = logging.getLogger(__name__)

router = APIRouter(tags=["page"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def moon_page(
    request: Request,
    date_value: Optional[str] = Query(None, alias="date"),
    day_value: Optional[str] = Query(None, alias="day"),
    extended: Optional[bool] = Query(None),
):
    today = today_local(settings.MOON_TIMEZONE)
    error = None
    try:
        plan = resolve_plan(date_value, extended, today=today)
    except InvalidDateError as exc:
        # Bad picker input re-renders today's page with the message.
        logger.info("[page] rejected date=%r: %s", date_value, exc.reason)
        error = str(exc)
        plan = resolve_plan(None, extended, today=today)

    detail = None
    if day_value and plan.extended:
        try:
            detail = build_day_detail(plan.entry_for(parse_date_input(day_value)))
        except (InvalidDateError, ForecastLookupError) as exc:
            error = str(exc)

    status_code = 400 if error else 200
    return templates.TemplateResponse(
        request,
        "moon.html",
        {"plan": plan, "detail": detail, "error": error},
        status_code=status_code,
    )
