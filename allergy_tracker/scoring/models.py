# -*- coding: utf-8 -*-
"""Scoring — Pydantic models."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _check_iso_date(value: str) -> str:
    try:
        dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid calendar date: {value}") from exc
    return value


def _clean_food_names(value: object, *, dedupe: bool = False) -> object:
    """Strip food names and drop blanks so every list matches record foods by name."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return value
    out: List[str] = []
    for item in value:
        if item is None:
            continue
        name = str(item).strip()
        if not name or (dedupe and name in out):
            continue
        out.append(name)
    return out


class DailyRecordIn(BaseModel):
    date: str = Field(..., pattern=ISO_DATE_PATTERN, description="YYYY-MM-DD")
    foods: List[str] = Field(default_factory=list, description="Food names eaten that day")
    # Older exports use pill_taken / symptom_severity.
    medication_taken: bool = Field(
        False, validation_alias=AliasChoices("medication_taken", "pill_taken")
    )
    severity: int = Field(
        0, ge=0, le=10, validation_alias=AliasChoices("severity", "symptom_severity")
    )

    @field_validator("date")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        return _check_iso_date(value)

    @field_validator("foods", mode="before")
    @classmethod
    def _dedupe_foods(cls, value: object) -> object:
        """A day's foods are a set: drop repeated names, keep first-seen order."""
        return _clean_food_names(value, dedupe=True)


class RecordsRequest(BaseModel):
    records: List[DailyRecordIn] = Field(default_factory=list)


class FoodScoresRequest(RecordsRequest):
    foods: List[str] = Field(default_factory=list, description="Food universe, output order")

    @field_validator("foods", mode="before")
    @classmethod
    def _clean_universe(cls, value: object) -> object:
        return _clean_food_names(value)


class FoodScoreOut(BaseModel):
    food: str
    total_score: float
    count: int = Field(0, ge=0)
    average_score: float


class FoodScoresResponse(BaseModel):
    count: int
    scores: List[FoodScoreOut]


class ScoreBreakdownOut(BaseModel):
    current_severity: int
    next_day_severity: int
    total_severity: int
    itch_score: float
    pill_multiplier: float
    pill_reason: str


class DailyScoreResponse(BaseModel):
    date: str
    score: float
    breakdown: ScoreBreakdownOut
    formula: str


class ScorePreviewRequest(RecordsRequest):
    date: str = Field(..., pattern=ISO_DATE_PATTERN, description="YYYY-MM-DD of the candidate entry")
    severity: int = Field(0, ge=0, le=10)
    medication_taken: bool = False

    @field_validator("date")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        return _check_iso_date(value)


class ScoredEntryOut(BaseModel):
    date: str
    foods: List[str]
    medication_taken: bool
    severity: int
    final_score: float
    breakdown: ScoreBreakdownOut


class ScoredEntriesResponse(BaseModel):
    count: int
    entries: List[ScoredEntryOut]


class DaysSinceRequest(RecordsRequest):
    foods: List[str] = Field(default_factory=list)

    @field_validator("foods", mode="before")
    @classmethod
    def _clean_foods(cls, value: object) -> object:
        return _clean_food_names(value)


class DaysSinceOut(BaseModel):
    food: str
    last_eaten: str
    days: int


class DaysSinceResponse(BaseModel):
    today: str
    items: List[DaysSinceOut]


class SeverityDistributionRequest(RecordsRequest):
    foods: Optional[List[str]] = Field(None, description="Foods to include; all eaten foods when omitted")

    @field_validator("foods", mode="before")
    @classmethod
    def _clean_foods(cls, value: object) -> object:
        if value is None:
            return None
        return _clean_food_names(value)


class SeverityStatsOut(BaseModel):
    food: str
    count: int
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
    mean: float


class SeverityDistributionResponse(BaseModel):
    items: List[SeverityStatsOut]


class TimelinePointOut(BaseModel):
    date: str
    severity: int
    medication_taken: bool


class TimelineResponse(BaseModel):
    start: Optional[str] = None
    end: str
    points: List[TimelinePointOut]
