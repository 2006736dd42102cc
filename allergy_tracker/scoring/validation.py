# -*- coding: utf-8 -*-
"""Scoring — boundary checks before records reach the engine.

The engine assumes well-formed input and never raises for bad data; pydantic
covers date format and severity range, this module covers the record-set
invariants.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from ..config import settings
from .models import DailyRecordIn
from .records import DailyRecord


class DuplicateDateError(ValueError):
    def __init__(self, dates: Sequence[str]) -> None:
        self.dates = list(dates)
        super().__init__(f"Duplicate record dates: {', '.join(self.dates)}")


class TooManyRecordsError(ValueError):
    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"Too many records: {count} > {limit}")


def check_record_set(records: Sequence[DailyRecordIn], max_records: Optional[int] = None) -> None:
    limit = max_records if max_records is not None else settings.max_records
    if len(records) > limit:
        raise TooManyRecordsError(len(records), limit)
    counts = Counter(r.date for r in records)
    duplicates = sorted(d for d, n in counts.items() if n > 1)
    if duplicates:
        raise DuplicateDateError(duplicates)


def to_daily_records(records: Sequence[DailyRecordIn], max_records: Optional[int] = None) -> List[DailyRecord]:
    check_record_set(records, max_records=max_records)
    return [
        DailyRecord.of(
            r.date,
            r.foods,
            medication_taken=r.medication_taken,
            severity=r.severity,
        )
        for r in records
    ]


def parse_today(value: Optional[str]) -> date:
    """Reference day for relative views; defaults to the current UTC date."""
    if not value:
        return datetime.now(timezone.utc).date()
    return date.fromisoformat(value)
