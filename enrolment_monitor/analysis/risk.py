# ==============================================
# Risk (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of anomaly flagging,
#   and the thresholds that control when a day is flagged.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the aggregator clean.
#   RiskEvent is also the contract handed to the insight client
#   (state, daily total, threshold, date).
#
# ENUMS:
# ------
# - RiskStatus(Enum): RED, GREEN
#     RED when at least one risk event exists for the state.
#
# - RiskType(Enum): DAILY, MONTHLY
#     Only DAILY events are produced.
#
# CLASSES:
# --------
# - RiskEvent (dataclass)
#     One flagged day for one state.
#
# - RiskThresholds (dataclass)
#     - percentile: float        → Fraction used for the per-state daily threshold (default 0.95)
#     - daily_floor: int         → A day must also exceed this absolute volume (default 50)
#     - border_states: frozenset → Only these states are eligible for flagging
#
# FUNCTION:
# ---------
# - percentile_threshold(values, fraction) -> int
#     Sorted ascending, value at index floor(fraction * n). No interpolation.
#
# ==============================================

import math
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable

from enrolment_monitor.config import RiskConfig
from enrolment_monitor.normalization.regions import BORDER_STATES


class RiskStatus(Enum):
    RED = "RED"
    GREEN = "GREEN"


class RiskType(Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"


@dataclass
class RiskEvent:
    """
    A day on which a watch-listed state enrolled more than both its own
    95th-percentile daily volume and the absolute floor.
    """

    state: str
    daily_total: int
    percentile_95: int  # Threshold the day was compared against
    date: str  # YYYY-MM-DD
    is_border: bool = True
    is_red_zone: bool = True
    type: RiskType = RiskType.DAILY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "daily_total": self.daily_total,
            "percentile_95": self.percentile_95,
            "is_border": self.is_border,
            "is_red_zone": self.is_red_zone,
            "date": self.date,
            "type": self.type.value,
        }


@dataclass
class RiskThresholds:
    """
    Static configuration of the anomaly rule.

    Defaults match RiskConfig; use from_config() to pick up environment
    overrides.
    """

    percentile: float = 0.95
    daily_floor: int = 50
    border_states: FrozenSet[str] = field(default_factory=lambda: BORDER_STATES)

    def __post_init__(self):
        if not 0.0 <= self.percentile <= 1.0:
            raise ValueError(f"percentile must be within [0, 1], got {self.percentile}")

    def is_watched(self, state: str) -> bool:
        return state in self.border_states

    @classmethod
    def from_config(cls, config: RiskConfig) -> "RiskThresholds":
        return cls(percentile=config.percentile, daily_floor=config.daily_floor)


def percentile_threshold(values: Iterable[int], fraction: float) -> int:
    ordered = sorted(values)
    if not ordered:
        return 0
    index = math.floor(len(ordered) * fraction)
    # Keep the index inside the list for fractions outside [0, 1)
    return ordered[max(0, min(index, len(ordered) - 1))]
