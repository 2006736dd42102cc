# -*- coding: utf-8 -*-
"""
Daily score calculator

Attributes one day's symptom outcome to the foods eaten that day. A reaction
may only show up the following day, so the next adjacent day's severity is
folded in; medication taken today or yesterday decides how much of that
signal is kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .records import DailyRecord, NextDay, PreviousDay


class PillReason(str, Enum):
    """Which medication branch produced the multiplier."""
    today = "medication taken today"
    yesterday = "medication taken yesterday"
    none = "no medication today or yesterday"


PILL_MULTIPLIERS = {
    PillReason.today: 1.0,
    PillReason.yesterday: 0.5,
    PillReason.none: 0.25,
}

# Per-day severity scale is 0..10; today plus tomorrow lands on 0..2.
SEVERITY_SCALE = 10


@dataclass(frozen=True)
class ScoreBreakdown:
    current_severity: int
    next_day_severity: int
    total_severity: int
    itch_score: float
    pill_multiplier: float
    pill_reason: PillReason


@dataclass(frozen=True)
class DailyScore:
    score: float
    breakdown: ScoreBreakdown

    @property
    def formula(self) -> str:
        """Human-readable calculation, values rounded to two decimals."""
        b = self.breakdown
        return (
            f"({b.current_severity} + {b.next_day_severity}) / {SEVERITY_SCALE} = {b.itch_score:.2f}; "
            f"{b.itch_score:.2f} x {b.pill_multiplier:g} = {self.score:.2f}"
        )


def pill_multiplier(
    medication_today: bool,
    prev: Optional[PreviousDay],
) -> Tuple[float, PillReason]:
    if medication_today:
        reason = PillReason.today
    elif prev is not None and prev.medication_taken:
        reason = PillReason.yesterday
    else:
        reason = PillReason.none
    return PILL_MULTIPLIERS[reason], reason


def compute_score(
    current: DailyRecord,
    prev: Optional[Union[PreviousDay, DailyRecord]] = None,
    next_day: Optional[Union[NextDay, DailyRecord]] = None,
) -> DailyScore:
    """
    Score one day from its own observation and its adjacent neighbours.

    Args:
        current: the day being scored (severity and medication are used)
        prev: the adjacent previous day, or None when there is none
        next_day: the adjacent following day, or None when there is none

    Returns:
        DailyScore: the final score and its breakdown
    """
    if isinstance(prev, DailyRecord):
        prev = prev.as_previous()
    if isinstance(next_day, DailyRecord):
        next_day = next_day.as_next()

    next_severity = next_day.severity if next_day is not None else 0
    total_severity = current.severity + next_severity
    itch_score = total_severity / SEVERITY_SCALE
    multiplier, reason = pill_multiplier(current.medication_taken, prev)

    return DailyScore(
        score=itch_score * multiplier,
        breakdown=ScoreBreakdown(
            current_severity=current.severity,
            next_day_severity=next_severity,
            total_severity=total_severity,
            itch_score=itch_score,
            pill_multiplier=multiplier,
            pill_reason=reason,
        ),
    )
