"""
Edit cascade: re-score an edited day and walk forward until streaks reconverge.

A day's streak depends on the previous day's streak, so editing a past day
can shift the streak (and therefore the final score) of the days after it.
The walk below is a fold over a carry value:

    edited day   full re-score via build_input + compute_scores (once)
    later days   stored base_score reused; only streak and final recomputed

It halts on the first later day that is unscored, or whose recomputed
streak and final score already equal the stored ones. A calendar gap does
not halt the walk; it resets the carried streak to 0.

Pure function: the supplied rows are never modified. The caller applies
the returned updates as one unit.
"""

import logging
from datetime import date
from typing import Iterable, List, Union

from lifescore.config import ScoringConfig
from lifescore.exceptions import LogNotFoundError
from lifescore.history import is_previous_day, parse_date, sort_history
from lifescore.inputs import InputBuilder
from lifescore.models import CascadeUpdate, DailyLogRow, ScoringOutput
from lifescore.scoring import (
    NO_HISTORY,
    compute_final_score,
    compute_scores,
    compute_streak,
)

log = logging.getLogger("lifescore.cascade")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _find_index(rows: List[DailyLogRow], day: date) -> int:
    for i, row in enumerate(rows):
        if row.date == day:
            return i
    raise LogNotFoundError(day)


def previous_streak_for(rows: List[DailyLogRow], index: int) -> int:
    """
    Previous streak for the row at `index` of a date-sorted list, from stored values.

    No predecessor -> -1. Predecessor exactly one day earlier -> its stored
    streak (0 if unscored). Anything else is a gap -> 0.
    """
    if index == 0:
        return NO_HISTORY

    prior = rows[index - 1]
    if is_previous_day(prior.date, rows[index].date):
        return prior.streak if prior.streak is not None else 0
    return 0


def scores_match(row: DailyLogRow, output: ScoringOutput) -> bool:
    """Exact equality on all five scores. Convergence depends on it."""
    return (
        row.positive_score == output.positive_score
        and row.vice_penalty == output.vice_penalty
        and row.base_score == output.base_score
        and row.streak == output.streak
        and row.final_score == output.final_score
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_cascade(
    edited_date: Union[str, date],
    rows: Iterable[DailyLogRow],
    cfg: ScoringConfig,
    build_input: InputBuilder,
) -> List[CascadeUpdate]:
    """
    Compute the score updates caused by editing `edited_date`.

    Args:
        edited_date: the day whose raw values were edited
        rows: full log history including the edited day, any order
        cfg: scoring config snapshot
        build_input: (row, previous_streak) -> ScoringInput, called once

    Returns:
        Updates in date order. The first (edited day) carries all five
        scores; later ones carry streak and final_score only. Empty when the
        edit changed nothing.

    Raises:
        LogNotFoundError: edited_date is not in rows.
    """
    edited_date = parse_date(edited_date)
    ordered = sort_history(rows)
    index = _find_index(ordered, edited_date)
    edited = ordered[index]

    previous = previous_streak_for(ordered, index)
    output = compute_scores(build_input(edited, previous))

    if scores_match(edited, output):
        log.debug("Edit on %s left every score unchanged", edited_date)
        return []

    updates = [
        CascadeUpdate(
            date=edited.date,
            streak=output.streak,
            final_score=output.final_score,
            positive_score=output.positive_score,
            vice_penalty=output.vice_penalty,
            base_score=output.base_score,
        )
    ]

    carry = output.streak
    last_date = edited.date

    for row in ordered[index + 1:]:
        if not row.is_scored:
            log.debug("Cascade halted at unscored day %s", row.date)
            break

        prev_streak = carry if is_previous_day(last_date, row.date) else 0
        streak = compute_streak(row.base_score, prev_streak, cfg)
        final = compute_final_score(row.base_score, streak, cfg)

        if streak == row.streak and final == row.final_score:
            log.debug("Cascade reconverged at %s", row.date)
            break

        updates.append(CascadeUpdate(date=row.date, streak=streak, final_score=final))
        carry = streak
        last_date = row.date

    log.info(
        "Cascade from %s produced %d update(s)", edited_date, len(updates),
    )
    return updates
