import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routers import calendar as calendar_router
from .middleware.logging import LoggingMiddleware
from .services.calendar_service import get_calendar


app = FastAPI(title="solarcal", version="0.1.0")

# Localhost origins in development, an explicit allow-list otherwise
app_env = os.getenv("APP_ENV")
is_dev = app_env is None or app_env.lower() in {"dev", "development"}

if is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=86400,
    )
else:
    allowed = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()]
    preview = os.getenv("PREVIEW_ORIGIN")  # e.g. a preview deployment of the calendar pages
    if preview:
        allowed.append(preview)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=86400,
    )

app.add_middleware(LoggingMiddleware)

app.include_router(calendar_router.router)


@app.on_event("startup")
def _warm_default_calendar() -> None:
    get_calendar()


@app.get("/__health")
def health():
    return {"ok": True}


@app.get("/")
def root():
    return {"message": "solarcal API is running. See /__health and /docs."}
