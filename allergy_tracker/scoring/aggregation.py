# -*- coding: utf-8 -*-
"""Scoring — per-food aggregation of daily scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Dict, Iterable, List, Mapping

from .adjacency import resolve_neighbors
from .calculator import DailyScore, compute_score
from .records import DailyRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredRecord:
    record: DailyRecord
    score: DailyScore

    @property
    def final_score(self) -> float:
        return self.score.score


@dataclass(frozen=True)
class FoodTally:
    total_score: float = 0.0
    count: int = 0

    def add_day(self, final_score: float) -> "FoodTally":
        # Zero or negative days count as exposure but never lower the total.
        gained = final_score if final_score > 0 else 0.0
        return FoodTally(total_score=self.total_score + gained, count=self.count + 1)


@dataclass(frozen=True)
class FoodScore:
    food: str
    total_score: float
    count: int
    average_score: float

    @classmethod
    def from_tally(cls, food: str, tally: FoodTally) -> "FoodScore":
        average = tally.total_score / tally.count if tally.count > 0 else 0.0
        return cls(
            food=food,
            total_score=tally.total_score,
            count=tally.count,
            average_score=average,
        )


def score_records(records: Iterable[DailyRecord]) -> List[ScoredRecord]:
    """Score every record against its adjacent neighbours, oldest first."""
    return [
        ScoredRecord(record=n.record, score=compute_score(n.record, n.prev, n.next))
        for n in resolve_neighbors(records)
    ]


def _fold_record(
    tallies: Mapping[str, FoodTally],
    scored: ScoredRecord,
) -> Mapping[str, FoodTally]:
    touched = {
        food: tallies[food].add_day(scored.final_score)
        for food in scored.record.foods
        if food in tallies
    }
    if not touched:
        return tallies
    return {**tallies, **touched}


def aggregate(records: Iterable[DailyRecord], food_universe: Iterable[str]) -> List[FoodScore]:
    """
    Per-food totals, counts and averages over a record set.

    Every food of the universe appears in the output, in input order, even if it
    was never eaten. Foods eaten but missing from the universe are ignored.
    """
    universe = list(food_universe)
    scored = score_records(records)
    initial: Dict[str, FoodTally] = {food: FoodTally() for food in universe}
    tallies = reduce(_fold_record, scored, initial)
    logger.debug("Aggregated %d records over %d foods", len(scored), len(universe))
    return [FoodScore.from_tally(food, tallies[food]) for food in universe]
