# backend/travelsafe/main.py
from __future__ import annotations

import importlib
import logging
import os

from dotenv import load_dotenv

# before any travelsafe import: stores and clients read their settings at import time
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from starlette.responses import RedirectResponse  # noqa: E402

log = logging.getLogger("uvicorn.error")

# every module exposes `router` with its own prefix (/user, /trips, /events, ...)
ROUTER_MODULES = ("user", "incident", "trip", "events", "taxonomy")


def _api_prefix(raw: str | None) -> str:
    """Normalise to a leading slash and no trailing slash; empty stays empty."""
    prefix = (raw or "").strip().strip("/")
    return f"/{prefix}" if prefix else ""


def _cors_settings(origins: str | None) -> dict:
    settings = dict(allow_methods=["*"], allow_headers=["*"], allow_credentials=True)
    explicit = [o.strip() for o in (origins or "").split(",") if o.strip()]
    if explicit:
        settings["allow_origins"] = explicit
    else:
        # local dev: any port on localhost / 127.0.0.1
        settings["allow_origin_regex"] = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"
    return settings


API_PREFIX = _api_prefix(os.getenv("API_PREFIX"))

app = FastAPI(
    title="TravelSafe API",
    version="1.0.0",
    description="Backend for TravelSafe (auth, scam incidents, trips, local events).",
)

cors = _cors_settings(os.getenv("CORS_ORIGINS"))
app.add_middleware(CORSMiddleware, **cors)
log.info("CORS configured: %s", cors)

for _name in ROUTER_MODULES:
    # a router that fails to import is logged and skipped
    try:
        _module = importlib.import_module(f"travelsafe.routes.{_name}")
        app.include_router(_module.router, prefix=API_PREFIX)
    except Exception as e:
        log.exception("Failed to include %s router: %s", _name, e)


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get(f"{API_PREFIX}/health", tags=["meta"])
def health():
    return {"status": "ok", "prefix": API_PREFIX}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "travelsafe.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
