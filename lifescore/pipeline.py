"""
Pipeline orchestration: save → cascade → apply, and history → analysis → report.

The command layer of the host calls into this module. It holds no state:
every function takes the full history and returns a new one, so the host
can commit an edit and its cascade as a single unit (and must serialize
edits that overlap in date range).
"""

import dataclasses
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from lifescore.analytics import longest_streak, score_trend
from lifescore.cascade import compute_cascade
from lifescore.config import AnalyticsParams, ScoringConfig
from lifescore.correlation import compute_correlations
from lifescore.exceptions import LogNotFoundError
from lifescore.history import parse_date, sort_history
from lifescore.inputs import make_input_builder
from lifescore.models import CascadeUpdate, DailyLogRow, HabitDefinition

log = logging.getLogger("lifescore.pipeline")


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------

def apply_edit(
    edited_date: Union[str, date],
    history: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
    cfg: Optional[ScoringConfig] = None,
) -> List[CascadeUpdate]:
    """Run the cascade for an already-stored edit, with the catalog-bound input builder."""
    if cfg is None:
        cfg = ScoringConfig()

    build_input = make_input_builder(catalog, cfg)
    return compute_cascade(edited_date, history, cfg, build_input)


def _apply_one(row: DailyLogRow, update: CascadeUpdate) -> DailyLogRow:
    if update.is_full:
        return dataclasses.replace(
            row,
            positive_score=update.positive_score,
            vice_penalty=update.vice_penalty,
            base_score=update.base_score,
            streak=update.streak,
            final_score=update.final_score,
        )
    return dataclasses.replace(row, streak=update.streak, final_score=update.final_score)


def apply_updates(
    history: Iterable[DailyLogRow],
    updates: Iterable[CascadeUpdate],
) -> List[DailyLogRow]:
    """
    Return a new date-sorted history with every update applied.

    All or nothing: an update for a date missing from history raises
    LogNotFoundError before any row is produced.
    """
    ordered = sort_history(history)
    by_date = {update.date: update for update in updates}

    known = {row.date for row in ordered}
    for day in by_date:
        if day not in known:
            raise LogNotFoundError(day)

    return [
        _apply_one(row, by_date[row.date]) if row.date in by_date else row
        for row in ordered
    ]


def save_log(
    day: Union[str, date],
    values: Mapping[str, Any],
    history: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
    cfg: Optional[ScoringConfig] = None,
) -> Tuple[List[DailyLogRow], List[CascadeUpdate]]:
    """
    Insert or overwrite one day's raw values, then cascade.

    A new day starts unscored. An overwritten day keeps its stored scores
    until the cascade replaces them, so an edit that changes nothing
    produces no updates.

    Returns:
        (new_history, updates)
    """
    if cfg is None:
        cfg = ScoringConfig()

    day = parse_date(day)
    history = list(history)
    existing = next((row for row in history if row.date == day), None)

    if existing is None:
        edited = DailyLogRow(date=day, values=dict(values))
    else:
        edited = dataclasses.replace(existing, values=dict(values))

    rows = [row for row in history if row.date != day]
    rows.append(edited)

    updates = apply_edit(day, rows, catalog, cfg)
    new_history = apply_updates(rows, updates)

    log.info("Saved log for %s (%d score update(s))", day, len(updates))
    return new_history, updates


# ---------------------------------------------------------------------------
# Analysis (read-only)
# ---------------------------------------------------------------------------

def analyze_history(
    rows: Iterable[DailyLogRow],
    catalog: Iterable[HabitDefinition],
    cfg: Optional[ScoringConfig] = None,
    params: Optional[AnalyticsParams] = None,
) -> Dict:
    """
    Summarize a history window for the analytics view.

    Stateless. No score is written.
    """
    if cfg is None:
        cfg = ScoringConfig()
    if params is None:
        params = AnalyticsParams()

    ordered = sort_history(rows)
    catalog = list(catalog)
    scored = [row for row in ordered if row.final_score is not None]

    latest = None
    average = None
    if scored:
        last = scored[-1]
        latest = {
            "date": last.date.isoformat(),
            "final_score": last.final_score,
            "streak": last.streak,
        }
        total = 0.0
        for row in scored:
            total += row.final_score
        average = total / len(scored)

    return {
        "days_logged": len(ordered),
        "days_scored": len(scored),
        "latest": latest,
        "average_final_score": average,
        "longest_streak": longest_streak(ordered, cfg),
        "correlations": compute_correlations(ordered, catalog, params),
        "score_trend": score_trend(ordered, params),
    }


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def generate_report(result: Dict) -> str:
    """Format an analyze_history result as a human-readable text report."""
    latest = result["latest"]
    average = result["average_final_score"]

    lines = [
        "LIFESCORE STATUS REPORT",
        "=" * 58,
        "",
        f"  Days Logged         : {result['days_logged']}",
        f"  Days Scored         : {result['days_scored']}",
    ]

    if latest is not None:
        lines.append(
            f"  Latest Score        : {latest['final_score']:.3f} on {latest['date']}"
            f" (streak: {latest['streak']})"
        )
    else:
        lines.append("  Latest Score        : n/a")

    lines.append(
        f"  Average Score       : {average:.3f}" if average is not None
        else "  Average Score       : n/a"
    )
    lines.append(f"  Longest Streak      : {result['longest_streak']} day(s)")

    trend = result["score_trend"]
    if trend and trend[-1]["moving_avg_7d"] is not None:
        lines.append(f"  7d Moving Average   : {trend[-1]['moving_avg_7d']:.3f}")

    lines.append("")
    lines.append("  Habit Correlations (r vs final score):")
    for c in result["correlations"]:
        if c.r is None:
            value = "   n/a"
        else:
            value = f"{c.r:+.3f}"
        flag = f"  [{c.flag}]" if c.flag else ""
        lines.append(f"    {c.habit:18s} : {value}  (n={c.n}){flag}")

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
