# -*- coding: utf-8 -*-
"""
Allergy tracker API

Derives per-food allergy scores from daily food, medication and symptom logs.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .scoring.api import router as scoring_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Allergy Tracker",
    description="Per-food allergy scores from daily symptom logs",
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

app.include_router(scoring_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    try:
        port = int(settings.port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("allergy_tracker.api:app", host=settings.host, port=port, reload=False)
