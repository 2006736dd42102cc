# -*- coding: utf-8 -*-
"""Scoring — immutable daily observations fed to the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable


@dataclass(frozen=True)
class PreviousDay:
    """What the scored day needs to know about the day before it."""
    medication_taken: bool


@dataclass(frozen=True)
class NextDay:
    """What the scored day needs to know about the day after it."""
    severity: int


@dataclass(frozen=True)
class DailyRecord:
    """One calendar day of logged foods, medication and symptom severity.

    `date` is an ISO calendar date (YYYY-MM-DD) and is unique within a record set.
    """
    date: str
    foods: FrozenSet[str] = field(default_factory=frozenset)
    medication_taken: bool = False
    severity: int = 0

    @classmethod
    def of(
        cls,
        date: str,
        foods: Iterable[str] = (),
        *,
        medication_taken: bool = False,
        severity: int = 0,
    ) -> "DailyRecord":
        return cls(
            date=date,
            foods=frozenset(foods),
            medication_taken=medication_taken,
            severity=severity,
        )

    def as_previous(self) -> PreviousDay:
        return PreviousDay(medication_taken=self.medication_taken)

    def as_next(self) -> NextDay:
        return NextDay(severity=self.severity)
