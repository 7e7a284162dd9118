"""
Daily scoring: transforms one day's resolved habit values into five scores.

Every function is pure and never raises on well-formed input. Sums are
plain left-to-right float loops over the input lists, so the same lists
always produce the same bits.
"""

import math
from typing import List

from lifescore.config import ScoringConfig
from lifescore.exceptions import UnknownVariantError
from lifescore.models import (
    HabitCategory,
    HabitValue,
    PenaltyMode,
    ScoringInput,
    ScoringOutput,
    ViceValue,
)


# Sentinel previous streak for a day with no earlier history
NO_HISTORY = -1


# ---------------------------------------------------------------------------
# Positive score
# ---------------------------------------------------------------------------

def category_multiplier(category: HabitCategory, cfg: ScoringConfig) -> float:
    m = cfg.multipliers
    if category == HabitCategory.PRODUCTIVITY:
        return m.productivity
    if category == HabitCategory.HEALTH:
        return m.health
    if category == HabitCategory.GROWTH:
        return m.growth
    raise UnknownVariantError("habit category", category)


def compute_max_weighted(habits: List[HabitValue], cfg: ScoringConfig) -> float:
    """Denominator basis: every active good habit at full points, done or not."""
    total = 0.0
    for h in habits:
        total += h.points * category_multiplier(h.category, cfg)
    return total


def compute_positive_score(
    habits: List[HabitValue],
    max_weighted: float,
    cfg: ScoringConfig,
) -> float:
    """
    Weighted completion relative to the target fraction of the maximum, capped at 1.

    An empty good-habit set (max_weighted == 0) scores 0 instead of dividing by zero.
    """
    if max_weighted == 0:
        return 0.0

    target = max_weighted * cfg.target_fraction
    if target == 0:
        return 0.0

    weighted_sum = 0.0
    for h in habits:
        weighted_sum += h.value * category_multiplier(h.category, cfg)

    return min(1.0, weighted_sum / target)


# ---------------------------------------------------------------------------
# Vice penalty
# ---------------------------------------------------------------------------

def phone_tier_penalty(phone_minutes: float, cfg: ScoringConfig) -> float:
    """Highest qualifying tier wins; below the first threshold costs nothing."""
    p = cfg.phone
    if phone_minutes >= p.t3_min:
        return p.t3_penalty
    if phone_minutes >= p.t2_min:
        return p.t2_penalty
    if phone_minutes >= p.t1_min:
        return p.t1_penalty
    return 0.0


def compute_vice_penalty(
    vices: List[ViceValue],
    phone_minutes: float,
    cfg: ScoringConfig,
) -> float:
    # Negative or NaN minutes count as no phone use
    if phone_minutes is None or math.isnan(phone_minutes) or phone_minutes < 0:
        phone_minutes = 0

    total = 0.0
    for v in vices:
        if v.penalty_mode == PenaltyMode.FLAT:
            if v.triggered:
                total += v.penalty_value
        elif v.penalty_mode == PenaltyMode.PER_INSTANCE:
            total += (v.count or 0) * v.penalty_value
        elif v.penalty_mode == PenaltyMode.TIERED:
            # derived from phone_minutes below
            pass
        else:
            raise UnknownVariantError("penalty mode", v.penalty_mode)

    total += phone_tier_penalty(phone_minutes, cfg)

    return min(cfg.vice_cap, total)


# ---------------------------------------------------------------------------
# Base, streak, final
# ---------------------------------------------------------------------------

def compute_base_score(positive_score: float, vice_penalty: float) -> float:
    return positive_score * (1 - vice_penalty)


def compute_streak(base_score: float, previous_streak: int, cfg: ScoringConfig) -> int:
    """
    Count of consecutive qualifying days before this one.

    Day 1: previous_streak = -1, so a qualifying first day gets streak 0.
    After a gap the caller passes 0, so a qualifying day gets streak 1.
    """
    if base_score >= cfg.streak.threshold:
        return previous_streak + 1
    return 0


def compute_final_score(base_score: float, streak: int, cfg: ScoringConfig) -> float:
    s = cfg.streak
    bonus = min(streak * s.bonus_per_day, s.max_bonus)
    return min(1.0, base_score * (1 + bonus))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_scores(inp: ScoringInput) -> ScoringOutput:
    """Score one day. Deterministic and total."""
    cfg = inp.config

    max_weighted = compute_max_weighted(inp.habit_values, cfg)
    positive = compute_positive_score(inp.habit_values, max_weighted, cfg)
    vice = compute_vice_penalty(inp.vice_values, inp.phone_minutes, cfg)
    base = compute_base_score(positive, vice)
    streak = compute_streak(base, inp.previous_streak, cfg)
    final = compute_final_score(base, streak, cfg)

    return ScoringOutput(
        positive_score=positive,
        vice_penalty=vice,
        base_score=base,
        streak=streak,
        final_score=final,
    )
