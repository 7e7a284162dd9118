"""
LIFESCORE v1.0: Deterministic Daily Scoring and Cascade Engine

Turns a day's habit entries into five scores, keeps the day-over-day streak
consistent when a past day is edited, and correlates habits with the
overall score.

Architecture:
    config        Scoring tunables and analytics constants (single source of truth)
    models        Enums, catalog entries, rows, engine I/O types
    catalog       Seeded habit catalog and filters
    history       Date adjacency, sorting, DataFrame view
    inputs        Raw form values → ScoringInput
    scoring       One day → positive, vice, base, streak, final
    cascade       Edited day → bounded forward re-streak walk
    correlation   Habit value vs final score, Pearson r
    analytics     Trend, completion rates, vice frequency, weekday averages
    pipeline      Orchestration: save → cascade → apply, analyze → report

Public API:
    compute_scores(inp)                         → ScoringOutput
    compute_cascade(date, rows, cfg, build)     → [CascadeUpdate]
    compute_correlations(rows, catalog)         → [CorrelationResult]
    save_log(date, values, history, catalog)    → (history, updates)
    analyze_history(rows, catalog)              → dict
"""

from lifescore.cascade import compute_cascade
from lifescore.catalog import active_habits, default_catalog
from lifescore.config import AnalyticsParams, ScoringConfig
from lifescore.correlation import compute_correlations
from lifescore.exceptions import LifeScoreError, LogNotFoundError
from lifescore.inputs import build_scoring_input, make_input_builder
from lifescore.models import DailyLogRow
from lifescore.pipeline import (
    analyze_history,
    apply_edit,
    apply_updates,
    generate_report,
    save_log,
)
from lifescore.scoring import compute_scores

__version__ = "1.0.0"

__all__ = [
    "AnalyticsParams",
    "DailyLogRow",
    "LifeScoreError",
    "LogNotFoundError",
    "ScoringConfig",
    "active_habits",
    "analyze_history",
    "apply_edit",
    "apply_updates",
    "build_scoring_input",
    "compute_cascade",
    "compute_correlations",
    "compute_scores",
    "default_catalog",
    "generate_report",
    "make_input_builder",
    "save_log",
]
