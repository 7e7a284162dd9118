"""
Input building: raw per-date form values + catalog + config -> ScoringInput.

The cross-validation vectors pin this mapping down exactly:

    good checkbox       points if raw >= 1 else 0
    good dropdown       option value for the submitted label, 0 if unknown
    good number         raw value (never negative), not a points switch
    vice flat           triggered = raw >= 1
    vice per_instance   triggered = raw > 0, count = raw
    vice tiered         triggered = False, penalty 0 (phone minutes carry it)
"""

import math
from typing import Any, Callable, Iterable, Mapping, Optional

from lifescore.catalog import active_habits
from lifescore.config import ScoringConfig
from lifescore.exceptions import UnknownVariantError
from lifescore.models import (
    DailyLogRow,
    HabitDefinition,
    HabitPool,
    HabitValue,
    InputType,
    PenaltyMode,
    ScoringInput,
    ViceValue,
)


InputBuilder = Callable[[DailyLogRow, int], ScoringInput]


def resolve_dropdown_value(label: Any, options: Optional[Mapping[str, float]]) -> float:
    """Option value for a label. Missing map, unknown label or non-numeric value -> 0."""
    if not options or not isinstance(label, str):
        return 0.0
    value = options.get(label)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _raw_number(values: Mapping[str, Any], name: str) -> float:
    """Submitted number for a habit. Missing, text, NaN, infinite or negative -> 0."""
    raw = values.get(name, 0)
    if raw is None or isinstance(raw, str):
        return 0
    if isinstance(raw, float) and not math.isfinite(raw):
        return 0
    return max(raw, 0)


def build_habit_value(habit: HabitDefinition, values: Mapping[str, Any]) -> HabitValue:
    """
    Resolve one good habit. Number habits contribute the submitted amount
    itself, so a partial amount earns partial credit.
    """
    if habit.input_type == InputType.CHECKBOX:
        value = habit.points if _raw_number(values, habit.name) >= 1 else 0
    elif habit.input_type == InputType.DROPDOWN:
        value = resolve_dropdown_value(values.get(habit.name), habit.options)
    elif habit.input_type == InputType.NUMBER:
        value = _raw_number(values, habit.name)
    else:
        raise UnknownVariantError("input type", habit.input_type)

    return HabitValue(
        name=habit.name,
        value=value,
        points=habit.points,
        category=habit.category,
    )


def build_vice_value(habit: HabitDefinition, values: Mapping[str, Any]) -> ViceValue:
    raw = _raw_number(values, habit.name)

    if habit.penalty_mode == PenaltyMode.FLAT:
        return ViceValue(
            name=habit.name,
            triggered=raw >= 1,
            penalty_value=habit.penalty,
            penalty_mode=PenaltyMode.FLAT,
        )
    if habit.penalty_mode == PenaltyMode.PER_INSTANCE:
        return ViceValue(
            name=habit.name,
            triggered=raw > 0,
            count=int(raw),
            penalty_value=habit.penalty,
            penalty_mode=PenaltyMode.PER_INSTANCE,
        )
    if habit.penalty_mode == PenaltyMode.TIERED:
        return ViceValue(
            name=habit.name,
            triggered=False,
            penalty_value=0.0,
            penalty_mode=PenaltyMode.TIERED,
        )
    raise UnknownVariantError("penalty mode", habit.penalty_mode)


def build_scoring_input(
    values: Mapping[str, Any],
    catalog: Iterable[HabitDefinition],
    cfg: ScoringConfig,
    previous_streak: int,
) -> ScoringInput:
    """
    Map one day's raw values onto every current habit, in catalog order.

    Phone minutes are read from the column of the current tiered vice
    (at most one exists); 0 when there is none or it was not submitted.
    """
    current = active_habits(catalog)
    habit_values = []
    vice_values = []
    phone_minutes = 0

    for habit in current:
        if habit.pool == HabitPool.GOOD:
            habit_values.append(build_habit_value(habit, values))
        elif habit.pool == HabitPool.VICE:
            vice_values.append(build_vice_value(habit, values))
            if habit.penalty_mode == PenaltyMode.TIERED:
                phone_minutes = _raw_number(values, habit.name)
        else:
            raise UnknownVariantError("habit pool", habit.pool)

    return ScoringInput(
        habit_values=habit_values,
        vice_values=vice_values,
        phone_minutes=phone_minutes,
        previous_streak=previous_streak,
        config=cfg,
    )


def make_input_builder(
    catalog: Iterable[HabitDefinition],
    cfg: ScoringConfig,
) -> InputBuilder:
    """Bind a catalog snapshot and config into the callback the cascade expects."""
    snapshot = list(catalog)

    def build(row: DailyLogRow, previous_streak: int) -> ScoringInput:
        return build_scoring_input(row.values, snapshot, cfg, previous_streak)

    return build
