# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date

from coachboard.checkins.models import DailyCheckIn
from coachboard.weekly.aggregation import compute_weekly_averages, resolve_targets, week_bounds

WEEK_START = "2026-10-18"  # Sunday
WEEK_END = "2026-10-24"


class TestWeekBounds(unittest.TestCase):
    def test_week_starts_sunday(self) -> None:
        self.assertEqual(week_bounds("2026-10-21"), (date(2026, 10, 18), date(2026, 10, 24)))
        self.assertEqual(week_bounds(date(2026, 10, 18)), (date(2026, 10, 18), date(2026, 10, 24)))
        self.assertEqual(week_bounds("2026-10-24"), (date(2026, 10, 18), date(2026, 10, 24)))

    def test_week_starts_monday(self) -> None:
        self.assertEqual(week_bounds("2026-10-18", "monday"), (date(2026, 10, 12), date(2026, 10, 18)))

    def test_invalid_day(self) -> None:
        with self.assertRaises(ValueError):
            week_bounds("not-a-date")


class TestComputeWeeklyAverages(unittest.TestCase):
    def test_no_check_ins_means_all_null(self) -> None:
        averages = compute_weekly_averages([])
        for name in ("calories", "protein", "carbs", "fat", "fiber", "steps", "weight", "waist"):
            self.assertIsNone(getattr(averages, name), name)
        self.assertEqual(averages.check_in_count, 0)

    def test_single_check_in(self) -> None:
        averages = compute_weekly_averages([{"check_in_date": "2026-10-19", "calories_daily": 2000, "weight": None}])
        self.assertEqual(averages.calories, 2000)
        self.assertIsNone(averages.weight)

    def test_each_metric_has_its_own_denominator(self) -> None:
        check_ins = [
            {"check_in_date": "2026-10-18", "weight": 80.0, "calories_daily": 1800},
            {"check_in_date": "2026-10-19", "weight": 79.5, "calories_daily": 1900},
            {"check_in_date": "2026-10-20", "weight": 79.0, "calories_daily": 2000},
            {"check_in_date": "2026-10-21", "calories_daily": 2100},
            {"check_in_date": "2026-10-22", "calories_daily": 2200},
        ]
        averages = compute_weekly_averages(check_ins, WEEK_START, WEEK_END)
        self.assertEqual(averages.weight, 79.5)
        self.assertEqual(averages.calories, 2000.0)
        self.assertEqual(averages.check_in_count, 5)

    def test_zero_is_a_logged_value(self) -> None:
        averages = compute_weekly_averages(
            [{"check_in_date": "2026-10-19", "fiber_daily": 0, "steps_actual": 0}],
            WEEK_START,
            WEEK_END,
        )
        self.assertEqual(averages.fiber, 0.0)
        self.assertEqual(averages.steps, 0.0)
        self.assertIsNone(averages.protein)

    def test_out_of_week_check_ins_are_ignored(self) -> None:
        check_ins = [
            {"check_in_date": "2026-10-17", "calories_daily": 5000, "weight": 90},
            {"check_in_date": "2026-10-19", "calories_daily": 2000},
            {"check_in_date": "2026-10-25", "calories_daily": 100},
        ]
        averages = compute_weekly_averages(check_ins, WEEK_START, WEEK_END)
        self.assertEqual(averages.calories, 2000.0)
        self.assertIsNone(averages.weight)
        self.assertEqual(averages.check_in_count, 1)

    def test_check_ins_without_a_date_are_ignored(self) -> None:
        averages = compute_weekly_averages([{"calories_daily": 1500}, {"check_in_date": "", "calories_daily": 1500}])
        self.assertIsNone(averages.calories)

    def test_rounding(self) -> None:
        check_ins = [
            {"check_in_date": "2026-10-19", "protein_daily": 100, "weight": 80.111, "waist_circumference": 90},
            {"check_in_date": "2026-10-20", "protein_daily": 101, "weight": 80.0, "waist_circumference": 91},
            {"check_in_date": "2026-10-21", "protein_daily": 101, "weight": 80.0},
        ]
        averages = compute_weekly_averages(check_ins)
        self.assertEqual(averages.protein, 100.7)
        self.assertEqual(averages.weight, 80.04)
        self.assertEqual(averages.waist, 90.5)

    def test_accepts_check_in_models(self) -> None:
        check_ins = [
            DailyCheckIn(customer_id="c", check_in_date="2026-10-19", calories_daily=1800),
            DailyCheckIn(customer_id="c", check_in_date="2026-10-21", calories_daily=2000),
            DailyCheckIn(customer_id="c", check_in_date="2026-10-23", calories_daily=2200),
        ]
        averages = compute_weekly_averages(check_ins, WEEK_START, WEEK_END)
        self.assertEqual(averages.calories, 2000.0)
        self.assertIsNone(averages.weight)


class TestResolveTargets(unittest.TestCase):
    def test_no_program(self) -> None:
        targets = resolve_targets(None)
        self.assertIsNone(targets.calories)
        self.assertIsNone(targets.steps)

    def test_steps_only_without_nutrition_targets(self) -> None:
        targets = resolve_targets({"steps_goal": 9000, "nutrition_targets": None})
        self.assertIsNone(targets.calories)
        self.assertIsNone(targets.protein)
        self.assertEqual(targets.steps, 9000)

    def test_nutrition_targets(self) -> None:
        budget = {
            "steps_goal": 0,
            "nutrition_targets": {"calories": 1800, "protein": 140, "carbs": 150, "fat": 60, "fiber_min": 30},
        }
        targets = resolve_targets(budget)
        self.assertEqual(targets.calories, 1800)
        self.assertEqual(targets.protein, 140)
        self.assertEqual(targets.carbs, 150)
        self.assertEqual(targets.fat, 60)
        self.assertEqual(targets.fiber, 30)
        self.assertIsNone(targets.steps)


if __name__ == "__main__":
    unittest.main()
