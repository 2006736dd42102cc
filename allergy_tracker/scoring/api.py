# -*- coding: utf-8 -*-
"""Scoring — API endpoints.

All endpoints are stateless: the caller posts the record snapshot to analyse.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Sequence

from fastapi import APIRouter, HTTPException, Query

from ..config import settings
from .aggregation import ScoredRecord, aggregate
from .calculator import DailyScore
from .insights import (
    days_since_last_eaten,
    list_scored_records,
    preview_score,
    rank_food_scores,
    severity_distribution,
    symptom_timeline,
)
from .models import (
    DailyRecordIn,
    DailyScoreResponse,
    DaysSinceOut,
    DaysSinceRequest,
    DaysSinceResponse,
    FoodScoreOut,
    FoodScoresRequest,
    FoodScoresResponse,
    RecordsRequest,
    ScoreBreakdownOut,
    ScoredEntriesResponse,
    ScoredEntryOut,
    ScorePreviewRequest,
    SeverityDistributionRequest,
    SeverityDistributionResponse,
    SeverityStatsOut,
    TimelinePointOut,
    TimelineResponse,
)
from .records import DailyRecord
from .validation import DuplicateDateError, TooManyRecordsError, parse_today, to_daily_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/allergy", tags=["Allergy"])


def _records_or_400(records: Sequence[DailyRecordIn]) -> List[DailyRecord]:
    try:
        return to_daily_records(records)
    except (DuplicateDateError, TooManyRecordsError) as exc:
        logger.warning("Rejected record set: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _today_or_400(value: str | None) -> date:
    try:
        return parse_today(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid today: {value}") from exc


def _breakdown_out(score: DailyScore) -> ScoreBreakdownOut:
    b = score.breakdown
    return ScoreBreakdownOut(
        current_severity=b.current_severity,
        next_day_severity=b.next_day_severity,
        total_severity=b.total_severity,
        itch_score=b.itch_score,
        pill_multiplier=b.pill_multiplier,
        pill_reason=b.pill_reason.value,
    )


def _entry_out(item: ScoredRecord) -> ScoredEntryOut:
    r = item.record
    return ScoredEntryOut(
        date=r.date,
        foods=sorted(r.foods, key=str.casefold),
        medication_taken=r.medication_taken,
        severity=r.severity,
        final_score=item.final_score,
        breakdown=_breakdown_out(item.score),
    )


@router.post("/food-scores", response_model=FoodScoresResponse, summary="Per-food allergy scores")
def food_scores(
    request: FoodScoresRequest,
    sort_key: str | None = Query(
        default=None,
        pattern="^(food|total_score|count|average_score)$",
        description="Rank by this field; keep input food order when omitted",
    ),
    direction: str = Query(default="desc", pattern="^(asc|desc)$"),
    min_count: int | None = Query(default=None, ge=0, description="Minimum days eaten"),
    max_count: int | None = Query(default=None, ge=0, description="Maximum days eaten"),
):
    records = _records_or_400(request.records)
    scores = aggregate(records, request.foods)
    if sort_key is not None or min_count is not None or max_count is not None:
        scores = rank_food_scores(
            scores,
            sort_key=sort_key or "total_score",
            direction=direction,
            min_count=min_count,
            max_count=max_count,
        )
    return FoodScoresResponse(
        count=len(scores),
        scores=[
            FoodScoreOut(
                food=s.food,
                total_score=s.total_score,
                count=s.count,
                average_score=s.average_score,
            )
            for s in scores
        ],
    )


@router.post("/entries", response_model=ScoredEntriesResponse, summary="Scored daily entries, newest first")
def scored_entries(
    request: RecordsRequest,
    severity_min: int | None = Query(default=None, ge=0, le=10),
    severity_max: int | None = Query(default=None, ge=0, le=10),
    score_min: float | None = Query(default=None),
    score_max: float | None = Query(default=None),
    food: str | None = Query(default=None, description="Only days this food was eaten"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
):
    records = _records_or_400(request.records)
    entries = list_scored_records(
        records,
        severity_min=severity_min,
        severity_max=severity_max,
        score_min=score_min,
        score_max=score_max,
        food=food,
    )
    sliced = entries[offset : offset + limit]
    return ScoredEntriesResponse(count=len(entries), entries=[_entry_out(e) for e in sliced])


@router.post("/score-preview", response_model=DailyScoreResponse, summary="Score a candidate entry")
def score_preview(request: ScorePreviewRequest):
    records = _records_or_400(request.records)
    result = preview_score(
        records,
        request.date,
        severity=request.severity,
        medication_taken=request.medication_taken,
    )
    return DailyScoreResponse(
        date=request.date,
        score=result.score,
        breakdown=_breakdown_out(result),
        formula=result.formula,
    )


@router.post("/days-since", response_model=DaysSinceResponse, summary="Days since each food was last eaten")
def days_since(
    request: DaysSinceRequest,
    today: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today (UTC)"),
):
    records = _records_or_400(request.records)
    ref = _today_or_400(today)
    items = days_since_last_eaten(records, request.foods, ref)
    return DaysSinceResponse(
        today=ref.isoformat(),
        items=[DaysSinceOut(food=i.food, last_eaten=i.last_eaten, days=i.days) for i in items],
    )


@router.post(
    "/severity-distribution",
    response_model=SeverityDistributionResponse,
    summary="Symptom severity distribution per food",
)
def severity_stats(
    request: SeverityDistributionRequest,
    min_count: int = Query(default=1, ge=1, description="Minimum symptomatic days per food"),
):
    records = _records_or_400(request.records)
    items = severity_distribution(records, request.foods, min_count=min_count)
    return SeverityDistributionResponse(
        items=[
            SeverityStatsOut(
                food=s.food,
                count=s.count,
                minimum=s.minimum,
                q1=s.q1,
                median=s.median,
                q3=s.q3,
                maximum=s.maximum,
                mean=s.mean,
            )
            for s in items
        ]
    )


@router.post("/timeline", response_model=TimelineResponse, summary="Symptom and medication timeline")
def timeline(
    request: RecordsRequest,
    days: int | None = Query(default=None, ge=1, description="Window length; defaults to settings"),
    all_days: bool = Query(default=False, description="Ignore the window and return every day"),
    today: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today (UTC)"),
):
    records = _records_or_400(request.records)
    ref = _today_or_400(today)
    window = None if all_days else (days or settings.timeline_days)
    points = symptom_timeline(records, today=ref, days=window)
    return TimelineResponse(
        start=(ref - timedelta(days=window - 1)).isoformat() if window is not None else None,
        end=ref.isoformat(),
        points=[
            TimelinePointOut(date=p.date, severity=p.severity, medication_taken=p.medication_taken)
            for p in points
        ],
    )
