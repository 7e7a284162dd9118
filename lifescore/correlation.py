"""
Habit / score correlation over stored history.

Independent of the scoring engine: it reads stored final scores only.
One Pearson r per current habit, sorted by strength.
"""

from typing import Iterable, List, Optional

import numpy as np

from lifescore.catalog import active_habits
from lifescore.config import AnalyticsParams
from lifescore.exceptions import UnknownVariantError
from lifescore.inputs import resolve_dropdown_value
from lifescore.models import (
    INSUFFICIENT_DATA,
    ZERO_VARIANCE,
    CorrelationResult,
    DailyLogRow,
    HabitDefinition,
    InputType,
)


# ---------------------------------------------------------------------------
# Habit value extraction
# ---------------------------------------------------------------------------

def habit_value(row: DailyLogRow, habit: HabitDefinition) -> float:
    """
    Numeric value of one habit on one day.

    Checkbox and number habits return the raw value; dropdowns resolve
    their label through the option map. Missing or unresolvable -> 0.
    """
    raw = row.values.get(habit.name)

    if habit.input_type in (InputType.CHECKBOX, InputType.NUMBER):
        if raw is None or isinstance(raw, str):
            return 0.0
        return float(raw)
    if habit.input_type == InputType.DROPDOWN:
        return resolve_dropdown_value(raw, habit.options)
    raise UnknownVariantError("input type", habit.input_type)


# ---------------------------------------------------------------------------
# Pearson r
# ---------------------------------------------------------------------------

def pearson_r(x: np.ndarray, y: np.ndarray) -> float:
    """
    Pearson correlation via mean-centred dot products.

    Returns 0.0 when either series is constant (zero denominator).
    """
    x_c = x - x.mean()
    y_c = y - y.mean()
    denom = np.sqrt(np.dot(x_c, x_c) * np.dot(y_c, y_c))
    if denom == 0.0 or not np.isfinite(denom):
        return 0.0
    r = float(np.dot(x_c, y_c) / denom)
    if not np.isfinite(r):
        return 0.0
    # Rounding can push |r| a hair past 1
    return float(np.clip(r, -1.0, 1.0))


def _correlate(
    habit: HabitDefinition,
    scored: List[DailyLogRow],
    params: AnalyticsParams,
) -> CorrelationResult:
    n = len(scored)
    if n < params.min_correlation_points:
        return CorrelationResult(habit=habit.name, r=None, n=n, flag=INSUFFICIENT_DATA)

    x = np.array([habit_value(row, habit) for row in scored], dtype=np.float64)
    if np.all(x == x[0]):
        return CorrelationResult(habit=habit.name, r=0.0, n=n, flag=ZERO_VARIANCE)

    y = np.array([row.final_score for row in scored], dtype=np.float64)
    return CorrelationResult(habit=habit.name, r=pearson_r(x, y), n=n)


def _strength(result: CorrelationResult) -> float:
    return -1.0 if result.r is None else abs(result.r)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_correlations(
    rows: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
    params: Optional[AnalyticsParams] = None,
) -> List[CorrelationResult]:
    """
    Correlate every current habit with the stored final score.

    Rows with no final score are excluded from every series. Fewer than
    `min_correlation_points` pairs -> r=None, flag "insufficient_data";
    a constant habit series -> r=0, flag "zero_variance".

    Returns results sorted by |r| descending; None sorts last, ties keep
    catalog order.
    """
    if params is None:
        params = AnalyticsParams()

    scored = [row for row in rows if row.final_score is not None]
    results = [_correlate(habit, scored, params) for habit in active_habits(catalog)]

    return sorted(results, key=_strength, reverse=True)
