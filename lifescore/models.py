"""
Domain types shared by the scoring, cascade and correlation engines.

Pools, categories, input types and penalty modes are closed enums; every
place that dispatches on one handles each member explicitly and raises
UnknownVariantError for anything else.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from lifescore.config import ScoringConfig
from lifescore.history import parse_date


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HabitPool(str, Enum):
    GOOD = "good"
    VICE = "vice"


class HabitCategory(str, Enum):
    PRODUCTIVITY = "Productivity"
    HEALTH = "Health"
    GROWTH = "Growth"


class InputType(str, Enum):
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    NUMBER = "number"


class PenaltyMode(str, Enum):
    FLAT = "flat"
    PER_INSTANCE = "per_instance"
    TIERED = "tiered"


SCORE_FIELDS = (
    "positive_score",
    "vice_penalty",
    "base_score",
    "streak",
    "final_score",
)


# ---------------------------------------------------------------------------
# Habit catalog entry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HabitDefinition:
    """
    One catalog entry. `name` doubles as the raw value key in DailyLogRow.values.

    Good habits carry points and a category; vices carry a penalty and a
    penalty mode. Dropdown habits carry a label -> value option map.
    """

    name: str
    display_name: str
    pool: HabitPool
    input_type: InputType
    category: Optional[HabitCategory] = None
    points: float = 0
    penalty: float = 0.0
    penalty_mode: PenaltyMode = PenaltyMode.FLAT
    options: Optional[Dict[str, float]] = None
    is_active: bool = True
    retired_at: Optional[str] = None
    sort_order: int = 0

    @property
    def is_current(self) -> bool:
        return self.is_active and self.retired_at is None


# ---------------------------------------------------------------------------
# Stored daily row
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DailyLogRow:
    """
    One calendar day: raw per-habit values plus the five stored scores.

    Score fields are None until the day has been scored. They are owned by
    the scoring and cascade engines; nothing else writes them.
    """

    date: date
    values: Dict[str, Any] = field(default_factory=dict)
    positive_score: Optional[float] = None
    vice_penalty: Optional[float] = None
    base_score: Optional[float] = None
    streak: Optional[int] = None
    final_score: Optional[float] = None

    @property
    def is_scored(self) -> bool:
        return self.base_score is not None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "DailyLogRow":
        """Build a row from a flat persisted record (date, habit columns, score columns)."""
        values = {
            key: value for key, value in record.items()
            if key != "date" and key not in SCORE_FIELDS
        }
        scores = {key: record.get(key) for key in SCORE_FIELDS}
        return cls(date=parse_date(record["date"]), values=values, **scores)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"date": self.date.isoformat()}
        record.update(self.values)
        for key in SCORE_FIELDS:
            record[key] = getattr(self, key)
        return record


# ---------------------------------------------------------------------------
# Scoring engine I/O
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HabitValue:
    """A good habit resolved to a number. value is 0 when not done."""

    name: str
    value: float
    points: float
    category: HabitCategory


@dataclass(frozen=True)
class ViceValue:
    name: str
    triggered: bool
    penalty_value: float
    penalty_mode: PenaltyMode
    count: Optional[int] = None


@dataclass(frozen=True)
class ScoringInput:
    """Everything the scoring engine needs for one day. No raw rows, no catalog."""

    habit_values: List[HabitValue]
    vice_values: List[ViceValue]
    phone_minutes: float
    previous_streak: int
    config: ScoringConfig


@dataclass(frozen=True)
class ScoringOutput:
    positive_score: float
    vice_penalty: float
    base_score: float
    streak: int
    final_score: float


# ---------------------------------------------------------------------------
# Cascade output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CascadeUpdate:
    """
    Scores to persist for one date.

    The edited date carries all five scores; later dates carry only
    streak and final_score (their base score is reused unchanged).
    """

    date: date
    streak: int
    final_score: float
    positive_score: Optional[float] = None
    vice_penalty: Optional[float] = None
    base_score: Optional[float] = None

    @property
    def is_full(self) -> bool:
        return self.base_score is not None


# ---------------------------------------------------------------------------
# Correlation output
# ---------------------------------------------------------------------------

INSUFFICIENT_DATA = "insufficient_data"
ZERO_VARIANCE = "zero_variance"


@dataclass(frozen=True)
class CorrelationResult:
    habit: str
    r: Optional[float]
    n: int
    flag: Optional[str] = None
