# -*- coding: utf-8 -*-
"""Scoring engine: adjacency, daily scores and per-food aggregation."""

from .adjacency import is_next_day, resolve_neighbors
from .aggregation import FoodScore, aggregate, score_records
from .calculator import DailyScore, PillReason, compute_score
from .records import DailyRecord

__all__ = [
    "DailyRecord",
    "DailyScore",
    "FoodScore",
    "PillReason",
    "aggregate",
    "compute_score",
    "is_next_day",
    "resolve_neighbors",
    "score_records",
]
