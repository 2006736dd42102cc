# -*- coding: utf-8 -*-
"""Scoring — calendar adjacency between dated records.

Two records are linked only when their dates are exactly one calendar day
apart. Neighbours are resolved from scratch on every call: adding a record
can change who is whose neighbour, so nothing is cached.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from .records import DailyRecord


def parse_day(value: str) -> date:
    return date.fromisoformat(value)


def is_next_day(date_a: str, date_b: str) -> bool:
    """True iff `date_b` is the calendar day following `date_a`.

    Works on calendar dates rather than instants, so month/year rollovers are
    plain date arithmetic and no time zone or DST offset is involved.
    """
    return parse_day(date_a) + timedelta(days=1) == parse_day(date_b)


def sort_records(records: Iterable[DailyRecord]) -> List[DailyRecord]:
    return sorted(records, key=lambda r: parse_day(r.date))


@dataclass(frozen=True)
class Neighborhood:
    record: DailyRecord
    prev: Optional[DailyRecord] = None
    next: Optional[DailyRecord] = None


def resolve_neighbors(records: Iterable[DailyRecord]) -> List[Neighborhood]:
    """Sort ascending and link each record to its adjacent sorted neighbours.

    Only the immediately preceding/following sorted record is a candidate; if
    it is not exactly one day away the link is absent (a gap breaks the chain).
    """
    ordered = sort_records(records)
    out: List[Neighborhood] = []
    for i, current in enumerate(ordered):
        prev = ordered[i - 1] if i > 0 else None
        nxt = ordered[i + 1] if i < len(ordered) - 1 else None
        if prev is not None and not is_next_day(prev.date, current.date):
            prev = None
        if nxt is not None and not is_next_day(current.date, nxt.date):
            nxt = None
        out.append(Neighborhood(record=current, prev=prev, next=nxt))
    return out


def find_neighbors(
    records: Iterable[DailyRecord],
    day: str,
) -> Tuple[Optional[DailyRecord], Optional[DailyRecord]]:
    """Neighbours a record would get if it were placed on `day`.

    An existing record on the same day is ignored (it is the one being edited).
    """
    target = parse_day(day)
    others = [r for r in sort_records(records) if parse_day(r.date) != target]
    index = bisect_right([parse_day(r.date) for r in others], target)

    prev = others[index - 1] if index > 0 else None
    nxt = others[index] if index < len(others) else None
    if prev is not None and not is_next_day(prev.date, day):
        prev = None
    if nxt is not None and not is_next_day(day, nxt.date):
        nxt = None
    return prev, nxt
