# ==============================================
# TOPIC 2: AGGREGATION & ANOMALY FLAGGING
# ==============================================
#
# This package turns one upload's normalized records into the
# structures the dashboard displays.
#
# Two-step process per state:
#   Step 1 (Accumulate): Walk records → StateStats per state
#   Step 2 (Assess):     Percentile threshold → risk events → StateSummary
#
# Modules:
# --------
# - state_stats.py → Accumulators for one state and its districts
# - summaries.py   → Output data classes (StateSummary, AnalysisResult, ...)
# - risk.py        → RiskEvent, RiskStatus, RiskThresholds, percentile rule
# - aggregator.py  → Aggregator.analyze(records) -> AnalysisResult
#
# ==============================================

from .risk import RiskEvent, RiskStatus, RiskThresholds, RiskType, percentile_threshold
from .summaries import (
    AgeDistribution,
    AnalysisResult,
    DistrictSummary,
    MonthlyTrend,
    StateSummary,
)
from .state_stats import DistrictStats, StateStats
from .aggregator import Aggregator

__all__ = [
    "Aggregator",
    "AgeDistribution",
    "AnalysisResult",
    "DistrictStats",
    "DistrictSummary",
    "MonthlyTrend",
    "RiskEvent",
    "RiskStatus",
    "RiskThresholds",
    "RiskType",
    "StateStats",
    "StateSummary",
    "percentile_threshold",
]
