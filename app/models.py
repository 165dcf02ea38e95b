from pydantic import BaseModel, Field
from typing import Any, Optional, List
import datetime as dt

class PhaseOut(BaseModel):
    date: dt.date
    age: float
    phase: str
    icon: str
    illumination: Optional[int] = Field(default=None, ge=0, le=100)
    fact: Optional[str] = None

class ForecastDayOut(PhaseOut):
    label: str

class RenderPlanOut(BaseModel):
    selected: dt.date
    heading: str
    primary: PhaseOut
    forecast: List[ForecastDayOut]
    extended: bool = True
    details_visible: bool = False

class DayDetailOut(BaseModel):
    date: dt.date
    date_label: str
    phase_line: str
    illumination_line: Optional[str] = None
    fact_line: Optional[str] = None

class Envelope(BaseModel):
    ok: bool
    data: Optional[Any] = None
    error: Optional[str] = None
