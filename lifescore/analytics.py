"""
Analytics views over a read-only history window.

Frame-based summaries for the analytics screen: score trend, completion
rates, vice frequency, weekday averages, longest streak. Nothing here
writes scores; every value is read from stored rows.
"""

from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from lifescore.catalog import active_habits
from lifescore.config import AnalyticsParams, ScoringConfig
from lifescore.correlation import habit_value
from lifescore.history import history_frame, is_previous_day, sort_history
from lifescore.models import DailyLogRow, HabitDefinition, HabitPool


def _none_if_nan(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


# ---------------------------------------------------------------------------
# Score trend
# ---------------------------------------------------------------------------

def score_trend(
    rows: Iterable[DailyLogRow],
    params: Optional[AnalyticsParams] = None,
) -> List[Dict[str, object]]:
    """
    Final score per scored day with a trailing moving average.

    The average is None until a full window of scored days exists.
    """
    if params is None:
        params = AnalyticsParams()
    w = params.moving_average_window

    df = history_frame(rows)
    if df.empty or "final_score" not in df.columns:
        return []

    df = df[df["final_score"].notna()].reset_index(drop=True)
    scores = df["final_score"].astype(np.float64)
    moving = scores.rolling(w, min_periods=w).mean()

    return [
        {
            "date": day.date().isoformat(),
            "final_score": float(score),
            "moving_avg_7d": _none_if_nan(avg),
        }
        for day, score, avg in zip(df["date"], scores, moving)
    ]


# ---------------------------------------------------------------------------
# Completion rates / vice frequency
# ---------------------------------------------------------------------------

def _day_counts(
    rows: List[DailyLogRow],
    habits: List[HabitDefinition],
) -> List[Dict[str, object]]:
    total = len(rows)
    if total == 0:
        return []

    result = []
    for habit in habits:
        values = np.array([habit_value(row, habit) for row in rows], dtype=np.float64)
        days = int(np.count_nonzero(values > 0))
        result.append({
            "habit": habit.name,
            "display_name": habit.display_name,
            "days": days,
            "total_days": total,
            "rate": days / total,
        })
    return result


def habit_completion_rates(
    rows: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
) -> List[Dict[str, object]]:
    """Share of logged days on which each current good habit had a positive value."""
    rows = list(rows)
    good = active_habits(catalog, HabitPool.GOOD)
    result = _day_counts(rows, good)
    for entry, habit in zip(result, good):
        entry["category"] = habit.category.value
    return result


def vice_frequency(
    rows: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
) -> List[Dict[str, object]]:
    """Days (not instances) on which each current vice was recorded."""
    return _day_counts(list(rows), active_habits(catalog, HabitPool.VICE))


# ---------------------------------------------------------------------------
# Weekday averages
# ---------------------------------------------------------------------------

def day_of_week_averages(rows: Iterable[DailyLogRow]) -> List[Dict[str, object]]:
    """Mean final score per weekday, Monday = 0. Weekdays with no scored day are omitted."""
    df = history_frame(rows)
    if df.empty or "final_score" not in df.columns:
        return []

    df = df[df["final_score"].notna()]
    if df.empty:
        return []

    grouped = (
        df.assign(day=df["date"].dt.dayofweek, final_score=df["final_score"].astype(np.float64))
        .groupby("day")["final_score"]
        .agg(["mean", "count"])
    )

    return [
        {"day": int(day), "avg_score": float(stats["mean"]), "count": int(stats["count"])}
        for day, stats in grouped.iterrows()
    ]


# ---------------------------------------------------------------------------
# Longest streak
# ---------------------------------------------------------------------------

def longest_streak(rows: Iterable[DailyLogRow], cfg: ScoringConfig) -> int:
    """
    Longest run of consecutive calendar days whose stored base score qualifies.

    Unscored days and calendar gaps end a run.
    """
    best = 0
    run = 0
    last_date = None

    for row in sort_history(rows):
        qualifies = row.base_score is not None and row.base_score >= cfg.streak.threshold
        if not qualifies:
            run = 0
        elif run and is_previous_day(last_date, row.date):
            run += 1
        else:
            run = 1
        last_date = row.date
        best = max(best, run)

    return best
