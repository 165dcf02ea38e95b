import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import health as health_router, moon, page
from .settings import settings


logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

def custom_generate_unique_id(route):
    # operation ids read like get_v1_moon_phase
    return f"{list(route.methods)[0].lower()}_{route.path.replace('/', '_').strip('_')}"

app = FastAPI(
    title="Moon Phase Backend",
    version="0.1.0",
    generate_unique_id_function=custom_generate_unique_id
)

@app.exception_handler(Exception)
async def _global_exception_handler(request: Request, exc: Exception):
    logger.exception("[app] unhandled error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"ok": False, "data": None, "error": str(exc)})

@app.on_event("startup")
async def _log_routes():
    for r in app.routes:
        methods = sorted(getattr(r, "methods", None) or [])
        path = getattr(r, "path", "")
        logger.debug("[ROUTE] %s %s", methods, path)
    logger.info(
        "[moon] extended=%s tz=%s forecast_days=%d",
        settings.MOON_EXTENDED_DETAILS,
        settings.MOON_TIMEZONE,
        settings.MOON_FORECAST_DAYS,
    )


def _cors_origins() -> list[str]:
    raw = settings.CORS_ORIGINS or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public health endpoint
app.include_router(health_router.router)

app.include_router(moon.router)
app.include_router(page.router)
