from .renderer import (
    DayDetail,
    ForecastEntry,
    ForecastLookupError,
    ForecastRenderer,
    RenderPlan,
    build_day_detail,
    build_forecast,
    build_render_plan,
)

__all__ = [
    "DayDetail",
    "ForecastEntry",
    "ForecastLookupError",
    "ForecastRenderer",
    "RenderPlan",
    "build_day_detail",
    "build_forecast",
    "build_render_plan",
]
