# -*- coding: utf-8 -*-

from __future__ import annotations

import copy
import unittest

from coachboard.history.diff import deep_equal, diff_snapshots, diff_weekly_schedule


def _day(active: bool, *exercises: dict) -> dict:
    return {"isActive": active, "exercises": list(exercises)}


def _weekly(goals: str = "", **days: dict) -> dict:
    return {"schema": "workout_v1", "data": {"weeklyWorkout": {"generalGoals": goals, "days": days}}}


def _budget(**overrides) -> dict:
    budget = {
        "id": "b-1",
        "name": "Cut phase",
        "description": "Four weeks",
        "nutrition_targets": {"calories": 1800, "protein": 140},
        "steps_goal": 8000,
        "supplements": [{"name": "Creatine", "dosage": "5g", "timing": "morning"}],
        "is_public": False,
        "custom_attributes": _weekly(
            "Build strength",
            sunday=_day(True, {"name": "Squat", "sets": 3, "reps": 8}),
            monday=_day(False),
        ),
        "created_at": "2026-01-01T00:00:00",
        "updated_at": "2026-01-01T00:00:00",
        "created_by": "coach-1",
    }
    budget.update(overrides)
    return budget


class TestDiffSnapshots(unittest.TestCase):
    def test_identical_snapshots_have_no_changes(self) -> None:
        budget = _budget()
        self.assertEqual(diff_snapshots(budget, copy.deepcopy(budget)), [])

    def test_missing_side_returns_empty_list(self) -> None:
        self.assertEqual(diff_snapshots(None, _budget()), [])
        self.assertEqual(diff_snapshots(_budget(), None), [])
        self.assertEqual(diff_snapshots("not a record", _budget()), [])

    def test_administrative_fields_are_ignored(self) -> None:
        old = _budget()
        new = _budget(id="b-2", created_at="x", updated_at="y", created_by="coach-2")
        self.assertEqual(diff_snapshots(old, new), [])

    def test_changed_fields_follow_new_field_order(self) -> None:
        old = _budget()
        new = _budget(steps_goal=10000, name="Maintenance")
        changes = diff_snapshots(old, new)
        self.assertEqual([c.field for c in changes], ["name", "steps_goal"])
        self.assertEqual(changes[1].old_value, 8000)
        self.assertEqual(changes[1].new_value, 10000)

    def test_dict_key_order_does_not_matter(self) -> None:
        old = _budget(nutrition_targets={"calories": 1800, "protein": 140})
        new = _budget(nutrition_targets={"protein": 140, "calories": 1800})
        self.assertEqual(diff_snapshots(old, new), [])

    def test_list_order_matters(self) -> None:
        a = {"name": "A", "dosage": None, "timing": None}
        b = {"name": "B", "dosage": None, "timing": None}
        changes = diff_snapshots(_budget(supplements=[a, b]), _budget(supplements=[b, a]))
        self.assertEqual([c.field for c in changes], ["supplements"])

    def test_field_removed_from_new_is_not_reported(self) -> None:
        old = _budget()
        new = _budget()
        del new["description"]
        self.assertEqual(diff_snapshots(old, new), [])

    def test_field_added_in_new_is_reported(self) -> None:
        changes = diff_snapshots(_budget(), _budget(eating_rules="No sugar"))
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].field, "eating_rules")
        self.assertIsNone(changes[0].old_value)

    def test_boolean_is_not_equal_to_number(self) -> None:
        self.assertFalse(deep_equal(True, 1))
        self.assertTrue(deep_equal(1, 1.0))
        changes = diff_snapshots(_budget(is_public=0), _budget(is_public=False))
        self.assertEqual([c.field for c in changes], ["is_public"])

    def test_inputs_are_not_mutated(self) -> None:
        old = _budget()
        new = _budget(steps_goal=9000)
        old_copy, new_copy = copy.deepcopy(old), copy.deepcopy(new)
        changes = diff_snapshots(old, new)
        changes[0].new_value = "tampered"
        self.assertEqual(old, old_copy)
        self.assertEqual(new, new_copy)


class TestWeeklyScheduleDiff(unittest.TestCase):
    def test_single_day_change_yields_one_day_entry(self) -> None:
        old = _budget()
        new = _budget(
            custom_attributes=_weekly(
                "Build strength",
                sunday=_day(True, {"name": "Squat", "sets": 3, "reps": 8}, {"name": "Row"}),
                monday=_day(False),
            )
        )
        changes = diff_snapshots(old, new)
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].field, "workout_day_sunday")
        self.assertEqual(changes[0].old_value, "1 exercises: Squat")
        self.assertEqual(changes[0].new_value, "2 exercises: Squat, Row")

    def test_unchanged_schedule_yields_no_day_entries(self) -> None:
        weekly = _weekly("", tuesday=_day(True))["data"]["weeklyWorkout"]
        self.assertEqual(diff_weekly_schedule(weekly, copy.deepcopy(weekly)), [])

    def test_same_summary_with_different_details_is_marked_updated(self) -> None:
        old = _budget()
        new = _budget(
            custom_attributes=_weekly(
                "Build strength",
                sunday=_day(True, {"name": "Squat", "sets": 5, "reps": 5}),
                monday=_day(False),
            )
        )
        changes = diff_snapshots(old, new)
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].old_value, "1 exercises: Squat")
        self.assertEqual(changes[0].new_value, "1 exercises: Squat (sets/reps updated)")

    def test_day_summaries(self) -> None:
        old = {"days": {"wednesday": _day(True)}}
        new = {"days": {"wednesday": _day(False), "friday": _day(True, {"name": "Run"})}}
        changes = diff_weekly_schedule(old, new)
        self.assertEqual([c.field for c in changes], ["workout_day_wednesday", "workout_day_friday"])
        self.assertEqual(changes[0].old_value, "no exercises")
        self.assertEqual(changes[0].new_value, "rest day")
        self.assertEqual(changes[1].old_value, "rest day")
        self.assertEqual(changes[1].new_value, "1 exercises: Run")

    def test_general_goals_change(self) -> None:
        changes = diff_weekly_schedule({"generalGoals": ""}, {"generalGoals": "Lose 3kg"})
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].field, "workout_goals")
        self.assertEqual(changes[0].old_value, "-")
        self.assertEqual(changes[0].new_value, "Lose 3kg")

    def test_schedule_change_without_visible_difference_is_suppressed(self) -> None:
        old = _budget()
        new = _budget()
        new["custom_attributes"] = copy.deepcopy(old["custom_attributes"])
        new["custom_attributes"]["schema"] = "workout_v2"
        self.assertEqual(diff_snapshots(old, new), [])

    def test_custom_attributes_without_schedule_use_generic_comparison(self) -> None:
        old = _budget(custom_attributes={"schema": "x", "data": {"notes": "a"}})
        new = _budget(custom_attributes={"schema": "x", "data": {"notes": "b"}})
        changes = diff_snapshots(old, new)
        self.assertEqual([c.field for c in changes], ["custom_attributes"])
        self.assertEqual(changes[0].new_value, {"schema": "x", "data": {"notes": "b"}})

    def test_schedule_added_on_one_side(self) -> None:
        old = _budget(custom_attributes=None)
        changes = diff_snapshots(old, _budget())
        self.assertEqual(
            [c.field for c in changes],
            ["workout_goals", "workout_day_sunday", "workout_day_monday"],
        )
        self.assertEqual(changes[2].old_value, "rest day")
        self.assertEqual(changes[2].new_value, "rest day (sets/reps updated)")

    def test_empty_day_object_differs_from_absent_day(self) -> None:
        changes = diff_weekly_schedule({"days": {}}, {"days": {"friday": {}}})
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].field, "workout_day_friday")
        self.assertEqual(changes[0].old_value, "rest day")
        self.assertEqual(changes[0].new_value, "rest day (sets/reps updated)")

    def test_falsy_schedule_value_uses_generic_comparison(self) -> None:
        old = _budget(custom_attributes={"schema": "x", "data": {"weeklyWorkout": "", "notes": "a"}})
        new = _budget(custom_attributes={"schema": "x", "data": {"weeklyWorkout": "", "notes": "b"}})
        changes = diff_snapshots(old, new)
        self.assertEqual([c.field for c in changes], ["custom_attributes"])

    def test_malformed_days_do_not_raise(self) -> None:
        old = {"custom_attributes": {"data": {"weeklyWorkout": {"days": "broken"}}}}
        new = {"custom_attributes": {"data": {"weeklyWorkout": {"days": {"sunday": {"isActive": True, "exercises": "x"}}}}}}
        changes = diff_snapshots(old, new)
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].new_value, "no exercises")


if __name__ == "__main__":
    unittest.main()
