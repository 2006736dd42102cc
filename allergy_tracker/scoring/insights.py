# -*- coding: utf-8 -*-
"""Scoring — derived views over a record set (ranking, exposure, distribution, timeline)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .adjacency import find_neighbors, parse_day, sort_records
from .aggregation import FoodScore, ScoredRecord, score_records
from .calculator import DailyScore, compute_score
from .records import DailyRecord

RANK_KEYS = ("food", "total_score", "count", "average_score")


def preview_score(
    records: Iterable[DailyRecord],
    day: str,
    *,
    severity: int,
    medication_taken: bool,
) -> DailyScore:
    """Score a candidate entry as if it were saved on `day`."""
    prev, nxt = find_neighbors(records, day)
    candidate = DailyRecord(date=day, medication_taken=medication_taken, severity=severity)
    return compute_score(candidate, prev, nxt)


def list_scored_records(
    records: Iterable[DailyRecord],
    *,
    severity_min: Optional[int] = None,
    severity_max: Optional[int] = None,
    score_min: Optional[float] = None,
    score_max: Optional[float] = None,
    food: Optional[str] = None,
) -> List[ScoredRecord]:
    """Scored records, newest first, filtered by inclusive bounds."""

    def keep(item: ScoredRecord) -> bool:
        r = item.record
        if severity_min is not None and r.severity < severity_min:
            return False
        if severity_max is not None and r.severity > severity_max:
            return False
        if score_min is not None and item.final_score < score_min:
            return False
        if score_max is not None and item.final_score > score_max:
            return False
        if food is not None and food not in r.foods:
            return False
        return True

    # Filtering happens after scoring so neighbours outside the filter still count.
    scored = [s for s in score_records(records) if keep(s)]
    scored.reverse()
    return scored


def rank_food_scores(
    scores: Sequence[FoodScore],
    *,
    sort_key: str = "total_score",
    direction: str = "desc",
    min_count: Optional[int] = None,
    max_count: Optional[int] = None,
) -> List[FoodScore]:
    if sort_key not in RANK_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key}")
    if direction not in {"asc", "desc"}:
        raise ValueError(f"Unknown sort direction: {direction}")

    filtered = [
        s
        for s in scores
        if (min_count is None or s.count >= min_count) and (max_count is None or s.count <= max_count)
    ]

    def key(score: FoodScore):
        if sort_key == "food":
            return score.food.casefold()
        return getattr(score, sort_key)

    return sorted(filtered, key=key, reverse=direction == "desc")


@dataclass(frozen=True)
class DaysSinceEaten:
    food: str
    last_eaten: str
    days: int


def days_since_last_eaten(
    records: Iterable[DailyRecord],
    foods: Iterable[str],
    today: date,
) -> List[DaysSinceEaten]:
    """Whole days since each food was last eaten, longest gap first.

    Foods that never appear in any record are left out.
    """
    last_eaten: Dict[str, DailyRecord] = {}
    for record in sort_records(records):
        for food in record.foods:
            last_eaten[food] = record

    out: List[DaysSinceEaten] = []
    for food in foods:
        record = last_eaten.get(food)
        if record is None:
            continue
        out.append(
            DaysSinceEaten(
                food=food,
                last_eaten=record.date,
                days=(today - parse_day(record.date)).days,
            )
        )
    out.sort(key=lambda d: d.days, reverse=True)
    return out


@dataclass(frozen=True)
class SeverityStats:
    food: str
    count: int
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
    mean: float


def severity_distribution(
    records: Iterable[DailyRecord],
    foods: Optional[Iterable[str]] = None,
    *,
    min_count: int = 1,
) -> List[SeverityStats]:
    """Five-number summary of the symptomatic days per food.

    Only days with severity > 0 are observations; symptom-free days would
    otherwise pile up at zero and hide the spread.
    """
    severities: Dict[str, List[int]] = {}
    for record in records:
        for food in record.foods:
            bucket = severities.setdefault(food, [])
            if record.severity > 0:
                bucket.append(record.severity)

    names = list(foods) if foods is not None else sorted(severities, key=str.casefold)
    out: List[SeverityStats] = []
    for food in names:
        values = severities.get(food) or []
        if len(values) < max(1, min_count):
            continue
        arr = np.asarray(values, dtype=float)
        lo, q1, med, q3, hi = np.percentile(arr, [0, 25, 50, 75, 100])
        out.append(
            SeverityStats(
                food=food,
                count=len(values),
                minimum=float(lo),
                q1=float(q1),
                median=float(med),
                q3=float(q3),
                maximum=float(hi),
                mean=float(arr.mean()),
            )
        )
    return out


@dataclass(frozen=True)
class TimelinePoint:
    date: str
    severity: int
    medication_taken: bool


def symptom_timeline(
    records: Iterable[DailyRecord],
    *,
    today: date,
    days: Optional[int] = None,
) -> List[TimelinePoint]:
    """Severity and medication per day, oldest first, within the last `days` days (today included)."""
    ordered = sort_records(records)
    if days is not None:
        cutoff = today - timedelta(days=days - 1)
        ordered = [r for r in ordered if parse_day(r.date) >= cutoff]
    return [
        TimelinePoint(date=r.date, severity=r.severity, medication_taken=r.medication_taken)
        for r in ordered
    ]
