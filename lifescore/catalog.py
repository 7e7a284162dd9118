"""
The seeded habit catalog and catalog filters.

The catalog itself is owned by the configuration layer; this module only
provides the factory defaults and the views the engines need.
"""

from typing import Iterable, List, Optional

from lifescore.models import (
    HabitCategory,
    HabitDefinition,
    HabitPool,
    InputType,
    PenaltyMode,
)


MEAL_QUALITY_OPTIONS = {"Poor": 0, "Okay": 1, "Good": 2, "Great": 3}

SOCIAL_OPTIONS = {
    "None": 0,
    "Brief/Text": 0.5,
    "Casual Hangout": 1,
    "Meaningful Connection": 2,
}


def _good(name, display_name, category, points, sort_order, options=None):
    input_type = InputType.DROPDOWN if options is not None else InputType.CHECKBOX
    return HabitDefinition(
        name=name,
        display_name=display_name,
        pool=HabitPool.GOOD,
        category=category,
        input_type=input_type,
        points=points,
        options=dict(options) if options is not None else None,
        sort_order=sort_order,
    )


def _vice(name, display_name, penalty, mode, sort_order, input_type=InputType.CHECKBOX):
    return HabitDefinition(
        name=name,
        display_name=display_name,
        pool=HabitPool.VICE,
        input_type=input_type,
        penalty=penalty,
        penalty_mode=mode,
        sort_order=sort_order,
    )


def default_catalog() -> List[HabitDefinition]:
    """13 good habits followed by 9 vices, in display order."""
    prod, health, growth = (
        HabitCategory.PRODUCTIVITY, HabitCategory.HEALTH, HabitCategory.GROWTH,
    )
    return [
        _good("schoolwork", "Schoolwork", prod, 3, 1),
        _good("personal_project", "Personal Project", prod, 3, 2),
        _good("classes", "Classes", prod, 2, 3),
        _good("job_search", "Job Search", prod, 2, 4),
        _good("gym", "Gym", health, 3, 1),
        _good("sleep_7_9h", "Sleep 7-9h", health, 2, 2),
        _good("wake_8am", "Wake by 8am", health, 1, 3),
        _good("supplements", "Supplements", health, 1, 4),
        _good("meal_quality", "Meal Quality", health, 3, 5, MEAL_QUALITY_OPTIONS),
        _good("stretching", "Stretching", health, 1, 6),
        _good("meditate", "Meditate", growth, 1, 1),
        _good("read", "Read", growth, 1, 2),
        _good("social", "Social", growth, 2, 3, SOCIAL_OPTIONS),
        _vice("porn", "Porn", 0.25, PenaltyMode.PER_INSTANCE, 1, InputType.NUMBER),
        _vice("masturbate", "Masturbate", 0.10, PenaltyMode.FLAT, 2),
        _vice("weed", "Weed", 0.12, PenaltyMode.FLAT, 3),
        _vice("skip_class", "Skip Class", 0.08, PenaltyMode.FLAT, 4),
        _vice("binged_content", "Binged Content", 0.07, PenaltyMode.FLAT, 5),
        _vice("gaming_1h", "Gaming >1h", 0.06, PenaltyMode.FLAT, 6),
        _vice("past_12am", "Past 12am", 0.05, PenaltyMode.FLAT, 7),
        _vice("late_wake", "Late Wake", 0.03, PenaltyMode.FLAT, 8),
        _vice("phone_use", "Phone (min)", 0.0, PenaltyMode.TIERED, 9, InputType.NUMBER),
    ]


def active_habits(
    catalog: Iterable[HabitDefinition],
    pool: Optional[HabitPool] = None,
) -> List[HabitDefinition]:
    """Current (active, not retired) habits in catalog order, optionally one pool only."""
    return [
        habit for habit in catalog
        if habit.is_current and (pool is None or habit.pool == pool)
    ]
