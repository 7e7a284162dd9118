"""
Centralized configuration for every scoring tunable and analytics constant.

Every tunable lives here. Defaults mirror the seeded app config row, so a
fresh install and the shared test vectors score identically.
"""

from dataclasses import dataclass, field
from typing import Dict


# ---------------------------------------------------------------------------
# Category multipliers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryMultipliers:
    """Weight applied to a good habit's value according to its category."""

    productivity: float = 1.5
    health: float = 1.3
    growth: float = 1.0


# ---------------------------------------------------------------------------
# Streak parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StreakParams:
    """
    Qualification threshold and bonus schedule for consecutive good days.

    final = base * (1 + min(streak * bonus_per_day, max_bonus)), capped at 1
    """

    threshold: float = 0.65
    bonus_per_day: float = 0.01
    max_bonus: float = 0.10


# ---------------------------------------------------------------------------
# Phone tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PhoneTiers:
    """
    Minute thresholds and penalties for the tiered phone-use vice.

    Tiers are mutually exclusive: the highest tier whose threshold is met
    wins. Thresholds and penalties are both strictly increasing.
    """

    t1_min: float = 61
    t2_min: float = 181
    t3_min: float = 301
    t1_penalty: float = 0.03
    t2_penalty: float = 0.07
    t3_penalty: float = 0.12


# ---------------------------------------------------------------------------
# Top-level scoring config
# ---------------------------------------------------------------------------

# Flat persisted field name -> (group attribute or None, attribute)
_FLAT_FIELDS = (
    ("multiplier_productivity", "multipliers", "productivity"),
    ("multiplier_health", "multipliers", "health"),
    ("multiplier_growth", "multipliers", "growth"),
    ("target_fraction", None, "target_fraction"),
    ("vice_cap", None, "vice_cap"),
    ("streak_threshold", "streak", "threshold"),
    ("streak_bonus_per_day", "streak", "bonus_per_day"),
    ("max_streak_bonus", "streak", "max_bonus"),
    ("phone_t1_min", "phone", "t1_min"),
    ("phone_t2_min", "phone", "t2_min"),
    ("phone_t3_min", "phone", "t3_min"),
    ("phone_t1_penalty", "phone", "t1_penalty"),
    ("phone_t2_penalty", "phone", "t2_penalty"),
    ("phone_t3_penalty", "phone", "t3_penalty"),
)


@dataclass(frozen=True)
class ScoringConfig:
    """
    Complete scoring configuration snapshot.

    Changes are prospective: a new instance only affects scoring calls made
    with it. Already stored rows change only through an edit cascade.
    Range checks belong to the configuration validator, not to this class.
    """

    multipliers: CategoryMultipliers = field(default_factory=CategoryMultipliers)
    target_fraction: float = 0.85
    vice_cap: float = 0.40
    streak: StreakParams = field(default_factory=StreakParams)
    phone: PhoneTiers = field(default_factory=PhoneTiers)

    @classmethod
    def from_flat(cls, row: Dict[str, float]) -> "ScoringConfig":
        """Build a config from the flat persisted field names. Missing keys keep defaults."""
        groups: Dict[str, Dict[str, float]] = {
            "multipliers": {}, "streak": {}, "phone": {},
        }
        top: Dict[str, float] = {}

        for flat_name, group, attr in _FLAT_FIELDS:
            if flat_name not in row:
                continue
            value = float(row[flat_name])
            if group is None:
                top[attr] = value
            else:
                groups[group][attr] = value

        return cls(
            multipliers=CategoryMultipliers(**groups["multipliers"]),
            streak=StreakParams(**groups["streak"]),
            phone=PhoneTiers(**groups["phone"]),
            **top,
        )

    def to_flat(self) -> Dict[str, float]:
        """Inverse of from_flat."""
        flat = {}
        for flat_name, group, attr in _FLAT_FIELDS:
            source = self if group is None else getattr(self, group)
            flat[flat_name] = getattr(source, attr)
        return flat


# ---------------------------------------------------------------------------
# Analytics parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalyticsParams:
    """Window sizes and minimum sample counts for the analytics views."""

    min_correlation_points: int = 7
    moving_average_window: int = 7
