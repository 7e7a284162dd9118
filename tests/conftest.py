"""Shared fixtures: default config, seeded catalog, and history factories."""
from datetime import date, timedelta

import pytest

from lifescore.catalog import default_catalog
from lifescore.config import ScoringConfig
from lifescore.models import DailyLogRow
from lifescore.pipeline import save_log
from lifescore.scoring import compute_final_score


PERFECT_DAY = {
    "schoolwork": 1, "personal_project": 1, "classes": 1, "job_search": 1,
    "gym": 1, "sleep_7_9h": 1, "wake_8am": 1, "supplements": 1,
    "meal_quality": "Great", "stretching": 1,
    "meditate": 1, "read": 1, "social": "Meaningful Connection",
}

# TV05: base 0.82899, qualifies
GOOD_DAY = {
    "schoolwork": 1, "personal_project": 1, "classes": 1,
    "gym": 1, "sleep_7_9h": 1, "supplements": 1,
    "meal_quality": "Good", "stretching": 1, "read": 1, "past_12am": 1,
}

# TV04: base 0.60159, below the 0.65 threshold
RELAPSE_DAY = {
    "schoolwork": 1, "personal_project": 1, "gym": 1, "sleep_7_9h": 1,
    "wake_8am": 1, "meal_quality": "Great", "meditate": 1, "read": 1, "porn": 1,
}

EMPTY_DAY = {}


@pytest.fixture
def cfg():
    return ScoringConfig()


@pytest.fixture
def catalog():
    return default_catalog()


def day(n):
    """2026-02-01 plus n-1 days."""
    return date(2026, 2, 1) + timedelta(days=n - 1)


def build_history(entries, catalog, cfg=None):
    """Score (date, values) entries one save at a time, as the app would."""
    history = []
    for when, values in entries:
        history, _ = save_log(when, values, history, catalog, cfg)
    return history


def stored_row(when, base, streak, cfg, final=None):
    """A scored row whose final score is consistent with base and streak."""
    if final is None:
        final = compute_final_score(base, streak, cfg)
    return DailyLogRow(
        date=when,
        positive_score=base,
        vice_penalty=0.0,
        base_score=base,
        streak=streak,
        final_score=final,
    )
