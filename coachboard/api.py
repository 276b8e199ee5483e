# -*- coding: utf-8 -*-
"""
Coachboard API

Program change history and weekly check-in summaries for coaching clients.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .app_db import init_app_db
from .checkins.api import router as checkins_router
from .config import configure_logging, settings
from .history.api import router as history_router
from .programs.api import router as programs_router
from .weekly.api import router as weekly_router

configure_logging()

app = FastAPI(
    title="Coachboard",
    description="Program change history and weekly check-in summaries",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)

app.include_router(programs_router)
app.include_router(history_router)
app.include_router(checkins_router)
app.include_router(weekly_router)


@app.get("/api/health")
def health() -> dict:
    return {"status": "ok"}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("coachboard.api:app", host=settings.host, port=settings.port, reload=False)
