# ==============================================
# Summaries (Data Classes)
# ==============================================
#
# PURPOSE:
#   Output structures of the aggregation engine, consumed by the
#   map colouring, ranked list, district drill-down, comparison chart,
#   month selector and insight panel.
#
# CLASSES:
# --------
# - AgeDistribution   → infants (0-5), students (5-17), adults (18+)
# - MonthlyTrend      → (month "YYYY-MM", total)
# - DistrictSummary   → totals, age split and pincode totals for one district
# - StateSummary      → totals, status, trend and districts for one state
# - AnalysisResult    → everything produced for one upload
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .risk import RiskEvent, RiskStatus


@dataclass
class AgeDistribution:
    infants: int = 0  # age 0-5
    students: int = 0  # age 5-17
    adults: int = 0  # age 18+

    def add(self, record) -> None:
        self.infants += record.age_0_5
        self.students += record.age_5_17
        self.adults += record.age_18_greater

    def to_dict(self) -> Dict[str, int]:
        return {"infants": self.infants, "students": self.students, "adults": self.adults}


@dataclass
class MonthlyTrend:
    month: str
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "total": self.total}


@dataclass
class DistrictSummary:
    district: str
    total_enrolments: int = 0
    risk_count: int = 0
    age_dist: AgeDistribution = field(default_factory=AgeDistribution)
    pincodes: Dict[str, int] = field(default_factory=dict)

    def ranked_pincodes(self) -> List[Tuple[str, int]]:
        """(pincode, total) pairs, largest first."""
        return sorted(self.pincodes.items(), key=lambda item: (-item[1], item[0]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "district": self.district,
            "total_enrolments": self.total_enrolments,
            "risk_count": self.risk_count,
            "age_dist": self.age_dist.to_dict(),
            "pincodes": dict(self.pincodes),
        }


@dataclass
class StateSummary:
    """
    Aggregate view of one state.

    ``status`` is RED exactly when ``risk_count`` > 0.
    """

    state: str
    total_enrolments: int
    risk_count: int
    status: RiskStatus
    age_dist: AgeDistribution
    monthly_trends: List[MonthlyTrend]
    districts: Dict[str, DistrictSummary]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "total_enrolments": self.total_enrolments,
            "risk_count": self.risk_count,
            "status": self.status.value,
            "age_dist": self.age_dist.to_dict(),
            "monthly_trends": [t.to_dict() for t in self.monthly_trends],
            "districts": {name: d.to_dict() for name, d in self.districts.items()},
        }


@dataclass
class AnalysisResult:
    """Everything the engine produces for one upload."""

    state_summaries: Dict[str, StateSummary] = field(default_factory=dict)
    risks: List[RiskEvent] = field(default_factory=list)
    monthly_state_data: Dict[str, Dict[str, int]] = field(default_factory=dict)
    months: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.state_summaries

    def ranked_states(self) -> List[StateSummary]:
        """Summaries ordered by total enrolments, largest first."""
        return sorted(
            self.state_summaries.values(),
            key=lambda s: (-s.total_enrolments, s.state)
        )

    def red_states(self) -> List[StateSummary]:
        return [s for s in self.ranked_states() if s.status is RiskStatus.RED]

    def month_snapshot(self, month: str) -> Dict[str, int]:
        """State totals for one month; empty for a month not in the data."""
        return dict(self.monthly_state_data.get(month, {}))

    def snapshot_total(self, month: str) -> int:
        return sum(self.monthly_state_data.get(month, {}).values())

    def ranked_districts(self, state: str, limit: Optional[int] = 10) -> List[DistrictSummary]:
        """
        Districts of one state ordered by total enrolments, largest first.

        Args:
            state: Canonical state name
            limit: Maximum number of districts returned (None for all)

        Returns:
            DistrictSummary list; empty for a state not in the data
        """
        summary = self.state_summaries.get(state)
        if summary is None:
            return []
        ranked = sorted(
            summary.districts.values(),
            key=lambda d: (-d.total_enrolments, d.district)
        )
        return ranked if limit is None else ranked[:limit]

    def comparison_series(self, states: List[str], limit: int = 5) -> List[Dict[str, Any]]:
        """
        Monthly totals of several states lined up on the union of their months.

        Only the last ``limit`` requested states are kept; states not in the
        data are skipped. A state with no records in a month gets 0.

        Returns:
            [{"month": "2024-01", "Assam": 100, "Punjab": 150}, ...]
        """
        requested = dict.fromkeys(states)
        selected = [self.state_summaries[s] for s in requested if s in self.state_summaries]
        if limit is not None:
            selected = selected[-limit:] if limit > 0 else []

        months = sorted({t.month for s in selected for t in s.monthly_trends})
        by_state = {s.state: {t.month: t.total for t in s.monthly_trends} for s in selected}

        series = []
        for month in months:
            entry: Dict[str, Any] = {"month": month}
            for summary in selected:
                entry[summary.state] = by_state[summary.state].get(month, 0)
            series.append(entry)
        return series

    def latest_month(self) -> Optional[str]:
        return self.months[-1] if self.months else None

    def risks_for(self, state: str) -> List[RiskEvent]:
        return [r for r in self.risks if r.state == state]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state_summaries": {name: s.to_dict() for name, s in self.state_summaries.items()},
            "risks": [r.to_dict() for r in self.risks],
            "monthly_state_data": {m: dict(v) for m, v in self.monthly_state_data.items()},
            "months": list(self.months),
        }
