"""
Tests for the input builder (raw form values -> ScoringInput).
"""
import dataclasses

import pytest

from lifescore.catalog import active_habits, default_catalog
from lifescore.exceptions import UnknownVariantError
from lifescore.inputs import (
    build_habit_value,
    build_scoring_input,
    build_vice_value,
    make_input_builder,
    resolve_dropdown_value,
)
from lifescore.models import DailyLogRow, HabitPool, InputType, PenaltyMode
from lifescore.scoring import compute_scores

from conftest import GOOD_DAY, day


def by_name(entries):
    return {entry.name: entry for entry in entries}


class TestDropdownResolution:
    OPTIONS = {"Poor": 0, "Okay": 1, "Good": 2, "Great": 3}

    def test_known_label(self):
        assert resolve_dropdown_value("Good", self.OPTIONS) == 2.0

    def test_unknown_label_defaults_to_zero(self):
        assert resolve_dropdown_value("Excellent", self.OPTIONS) == 0.0

    def test_missing_label_or_map(self):
        assert resolve_dropdown_value(None, self.OPTIONS) == 0.0
        assert resolve_dropdown_value("Good", None) == 0.0

    def test_non_numeric_option_defaults_to_zero(self):
        assert resolve_dropdown_value("Odd", {"Odd": "two"}) == 0.0


class TestGoodHabits:
    def test_checkbox_earns_points_when_ticked(self, catalog):
        gym = by_name(catalog)["gym"]
        assert build_habit_value(gym, {"gym": 1}).value == 3
        assert build_habit_value(gym, {"gym": 2}).value == 3
        assert build_habit_value(gym, {"gym": 0}).value == 0
        assert build_habit_value(gym, {}).value == 0

    def test_dropdown_uses_option_value(self, catalog):
        social = by_name(catalog)["social"]
        value = build_habit_value(social, {"social": "Brief/Text"})
        assert value.value == 0.5
        assert value.points == 2

    def test_number_habit_passes_raw_value(self, catalog):
        pages = dataclasses.replace(
            by_name(catalog)["read"], input_type=InputType.NUMBER,
        )
        assert build_habit_value(pages, {"read": 0.5}).value == 0.5

    def test_negative_number_habit_counts_as_zero(self, catalog):
        pages = dataclasses.replace(
            by_name(catalog)["read"], input_type=InputType.NUMBER,
        )
        assert build_habit_value(pages, {"read": -3}).value == 0
        assert build_habit_value(pages, {"read": float("nan")}).value == 0


class TestVices:
    def test_flat_triggered_at_one(self, catalog):
        weed = by_name(catalog)["weed"]
        assert build_vice_value(weed, {"weed": 1}).triggered is True
        assert build_vice_value(weed, {"weed": 0}).triggered is False
        assert build_vice_value(weed, {"weed": 1}).penalty_value == 0.12

    def test_per_instance_carries_count(self, catalog):
        porn = by_name(catalog)["porn"]
        vice = build_vice_value(porn, {"porn": 2})
        assert vice.triggered is True
        assert vice.count == 2
        assert vice.penalty_mode is PenaltyMode.PER_INSTANCE

        idle = build_vice_value(porn, {})
        assert idle.triggered is False
        assert idle.count == 0

    def test_negative_count_counts_as_zero(self, catalog):
        porn = by_name(catalog)["porn"]
        vice = build_vice_value(porn, {"porn": -2})
        assert vice.triggered is False
        assert vice.count == 0

    def test_nan_count_counts_as_zero(self, catalog):
        porn = by_name(catalog)["porn"]
        vice = build_vice_value(porn, {"porn": float("nan")})
        assert vice.triggered is False
        assert vice.count == 0

    def test_tiered_never_carries_a_penalty(self, catalog):
        phone = by_name(catalog)["phone_use"]
        vice = build_vice_value(phone, {"phone_use": 500})
        assert vice.triggered is False
        assert vice.penalty_value == 0.0

    def test_unknown_penalty_mode_raises(self, catalog):
        broken = dataclasses.replace(by_name(catalog)["weed"], penalty_mode="hourly")
        with pytest.raises(UnknownVariantError):
            build_vice_value(broken, {"weed": 1})


class TestScoringInput:
    def test_lists_every_current_habit_in_catalog_order(self, catalog, cfg):
        inp = build_scoring_input({}, catalog, cfg, 0)
        good = active_habits(catalog, HabitPool.GOOD)
        vices = active_habits(catalog, HabitPool.VICE)
        assert [h.name for h in inp.habit_values] == [h.name for h in good]
        assert [v.name for v in inp.vice_values] == [v.name for v in vices]
        assert len(inp.habit_values) == 13
        assert len(inp.vice_values) == 9

    def test_phone_minutes_from_tiered_column(self, catalog, cfg):
        inp = build_scoring_input({"phone_use": 240}, catalog, cfg, 0)
        assert inp.phone_minutes == 240

    def test_retired_and_inactive_habits_skipped(self, cfg):
        catalog = [
            dataclasses.replace(h, retired_at="2026-03-01T00:00:00Z") if h.name == "gym"
            else dataclasses.replace(h, is_active=False) if h.name == "weed"
            else h
            for h in default_catalog()
        ]
        inp = build_scoring_input({"gym": 1, "weed": 1}, catalog, cfg, 0)
        assert "gym" not in by_name(inp.habit_values)
        assert "weed" not in by_name(inp.vice_values)

    def test_previous_streak_and_config_passed_through(self, catalog, cfg):
        inp = build_scoring_input({}, catalog, cfg, -1)
        assert inp.previous_streak == -1
        assert inp.config is cfg

    def test_builder_reads_row_values(self, catalog, cfg):
        build = make_input_builder(catalog, cfg)
        inp = build(DailyLogRow(date=day(1), values={"gym": 1}), 4)
        assert by_name(inp.habit_values)["gym"].value == 3
        assert inp.previous_streak == 4

    @pytest.mark.parametrize("bad", [-2, -0.5, float("nan"), float("inf")])
    def test_bad_numbers_score_like_an_empty_cell(self, catalog, cfg, bad):
        clean = compute_scores(build_scoring_input(GOOD_DAY, catalog, cfg, 0))
        dirty = compute_scores(build_scoring_input(
            dict(GOOD_DAY, porn=bad, phone_use=bad), catalog, cfg, 0,
        ))

        assert dirty == clean
        assert 0 <= dirty.vice_penalty <= cfg.vice_cap
        assert 0 <= dirty.base_score <= 1
