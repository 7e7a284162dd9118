"""
Date and history helpers shared by the engines.

Dates are calendar dates (datetime.date). Adjacency is decided on the
calendar, never on row positions, so a missing day always reads as a gap.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

import pandas as pd


ONE_DAY = timedelta(days=1)


def parse_date(value: Union[str, date, datetime]) -> date:
    """Accept a date, a datetime or an ISO YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date: {value!r}. Expected YYYY-MM-DD")


def previous_calendar_day(day: date) -> date:
    return day - ONE_DAY


def is_previous_day(candidate: Optional[date], day: date) -> bool:
    """True iff candidate is exactly one calendar day before day."""
    return candidate is not None and candidate == previous_calendar_day(day)


def sort_history(rows: Iterable) -> List:
    """Return a new list of rows in ascending date order."""
    return sorted(rows, key=lambda row: row.date)


# ---------------------------------------------------------------------------
# DataFrame view (analytics / correlation only)
# ---------------------------------------------------------------------------

def history_frame(rows: Iterable) -> pd.DataFrame:
    """
    Flatten rows into a DataFrame sorted by date.

    One column per raw value key plus the five score columns. The date
    column is converted to pandas datetimes.
    """
    records = [row.to_dict() for row in rows]
    if not records:
        return pd.DataFrame(columns=["date"])

    df = pd.DataFrame(records)
    df["date"] = pd.to_datetime(df["date"])
    df.sort_values("date", inplace=True, kind="mergesort")
    df.reset_index(drop=True, inplace=True)
    return df
