# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date

from allergy_tracker.scoring.aggregation import FoodScore
from allergy_tracker.scoring.calculator import PillReason
from allergy_tracker.scoring.insights import (
    days_since_last_eaten,
    list_scored_records,
    preview_score,
    rank_food_scores,
    severity_distribution,
    symptom_timeline,
)
from allergy_tracker.scoring.records import DailyRecord


def _records() -> list[DailyRecord]:
    return [
        DailyRecord.of("2023-06-01", ["Egg", "Milk"], severity=2, medication_taken=True),
        DailyRecord.of("2023-06-02", ["Egg"], severity=4),
        DailyRecord.of("2023-06-03", ["Bread"], severity=0),
        DailyRecord.of("2023-06-07", ["Egg", "Bread"], severity=6),
        DailyRecord.of("2023-06-08", ["Egg"], severity=8),
    ]


class TestPreviewScore(unittest.TestCase):
    def test_candidate_uses_existing_neighbours(self) -> None:
        records = [
            DailyRecord.of("2023-06-01", medication_taken=True),
            DailyRecord.of("2023-06-03", severity=5),
        ]
        result = preview_score(records, "2023-06-02", severity=3, medication_taken=False)
        self.assertEqual(result.breakdown.total_severity, 8)
        self.assertEqual(result.breakdown.pill_reason, PillReason.yesterday)
        self.assertAlmostEqual(result.score, 0.4)

    def test_editing_replaces_the_stored_day(self) -> None:
        records = [DailyRecord.of("2023-06-02", severity=10, medication_taken=True)]
        result = preview_score(records, "2023-06-02", severity=2, medication_taken=False)
        self.assertEqual(result.breakdown.current_severity, 2)
        self.assertAlmostEqual(result.score, 0.05)


class TestListScoredRecords(unittest.TestCase):
    def test_newest_first(self) -> None:
        dates = [s.record.date for s in list_scored_records(_records())]
        self.assertEqual(dates, ["2023-06-08", "2023-06-07", "2023-06-03", "2023-06-02", "2023-06-01"])

    def test_filters_keep_scores_from_full_set(self) -> None:
        scored = list_scored_records(_records(), food="Milk")
        self.assertEqual(len(scored), 1)
        # 06-01 still sees 06-02 as its next day.
        self.assertEqual(scored[0].score.breakdown.total_severity, 6)
        self.assertAlmostEqual(scored[0].final_score, 0.6)

    def test_severity_and_score_bounds(self) -> None:
        scored = list_scored_records(_records(), severity_min=4, severity_max=6)
        self.assertEqual([s.record.date for s in scored], ["2023-06-07", "2023-06-02"])

        scored = list_scored_records(_records(), score_min=0.3)
        self.assertEqual([s.record.date for s in scored], ["2023-06-07", "2023-06-01"])

        self.assertEqual(list_scored_records(_records(), score_max=-1.0), [])


class TestRankFoodScores(unittest.TestCase):
    def setUp(self) -> None:
        self.scores = [
            FoodScore(food="milk", total_score=0.5, count=1, average_score=0.5),
            FoodScore(food="Egg", total_score=1.5, count=4, average_score=0.375),
            FoodScore(food="bread", total_score=0.2, count=2, average_score=0.1),
            FoodScore(food="Fish", total_score=0.0, count=0, average_score=0.0),
        ]

    def test_default_total_score_descending(self) -> None:
        ranked = rank_food_scores(self.scores)
        self.assertEqual([s.food for s in ranked], ["Egg", "milk", "bread", "Fish"])

    def test_food_name_ignores_case(self) -> None:
        ranked = rank_food_scores(self.scores, sort_key="food", direction="asc")
        self.assertEqual([s.food for s in ranked], ["bread", "Egg", "Fish", "milk"])

    def test_count_range(self) -> None:
        ranked = rank_food_scores(self.scores, sort_key="average_score", min_count=1, max_count=2)
        self.assertEqual([s.food for s in ranked], ["milk", "bread"])

    def test_unknown_key(self) -> None:
        with self.assertRaises(ValueError):
            rank_food_scores(self.scores, sort_key="severity")
        with self.assertRaises(ValueError):
            rank_food_scores(self.scores, direction="up")


class TestDaysSinceLastEaten(unittest.TestCase):
    def test_longest_gap_first_and_unknown_foods_skipped(self) -> None:
        items = days_since_last_eaten(_records(), ["Egg", "Milk", "Fish", "Bread"], date(2023, 6, 10))
        self.assertEqual(
            [(i.food, i.last_eaten, i.days) for i in items],
            [("Milk", "2023-06-01", 9), ("Bread", "2023-06-07", 3), ("Egg", "2023-06-08", 2)],
        )


class TestSeverityDistribution(unittest.TestCase):
    def test_five_number_summary_over_symptomatic_days(self) -> None:
        (egg,) = severity_distribution(_records(), ["Egg"])
        self.assertEqual(egg.count, 4)
        self.assertEqual(egg.minimum, 2.0)
        self.assertAlmostEqual(egg.q1, 3.5)
        self.assertAlmostEqual(egg.median, 5.0)
        self.assertAlmostEqual(egg.q3, 6.5)
        self.assertEqual(egg.maximum, 8.0)
        self.assertAlmostEqual(egg.mean, 5.0)

    def test_all_foods_sorted_and_min_count(self) -> None:
        items = severity_distribution(_records())
        self.assertEqual([s.food for s in items], ["Bread", "Egg", "Milk"])
        self.assertEqual(items[0].count, 1)

        items = severity_distribution(_records(), min_count=2)
        self.assertEqual([s.food for s in items], ["Egg"])

    def test_symptom_free_food_is_omitted(self) -> None:
        records = [DailyRecord.of("2023-06-01", ["Rice"], severity=0)]
        self.assertEqual(severity_distribution(records, ["Rice"]), [])


class TestSymptomTimeline(unittest.TestCase):
    def test_window(self) -> None:
        points = symptom_timeline(list(reversed(_records())), today=date(2023, 6, 10), days=7)
        self.assertEqual([p.date for p in points], ["2023-06-07", "2023-06-08"])
        self.assertFalse(points[0].medication_taken)

    def test_window_covers_exactly_the_requested_days(self) -> None:
        records = [DailyRecord.of(f"2023-06-{d:02d}", severity=d % 11) for d in range(1, 11)]
        points = symptom_timeline(records, today=date(2023, 6, 10), days=7)
        self.assertEqual(len(points), 7)
        self.assertEqual(points[0].date, "2023-06-04")
        self.assertEqual(points[-1].date, "2023-06-10")

        (only,) = symptom_timeline(records, today=date(2023, 6, 10), days=1)
        self.assertEqual(only.date, "2023-06-10")

    def test_all_days(self) -> None:
        points = symptom_timeline(_records(), today=date(2023, 6, 10))
        self.assertEqual(len(points), 5)
        self.assertTrue(points[0].medication_taken)
        self.assertEqual(points[-1].severity, 8)


if __name__ == "__main__":
    unittest.main()
