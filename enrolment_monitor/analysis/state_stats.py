# ==============================================
# StateStats
# ==============================================
#
# PURPOSE:
#   Accumulators that hold everything observed for one state
#   (and its districts) while the aggregator walks the records.
#   This is the "evidence" the anomaly rule and the summary are
#   built from.
#
# CLASS: DistrictStats (dataclass)
# --------------------------------
#   - name: str
#   - total: int
#   - age_dist: AgeDistribution
#   - pincodes: dict[str, int]   → pincode → summed total
#   - dates: set[str]            → days on which the district had records
#
# CLASS: StateStats (dataclass)
# -----------------------------
#   Attributes:
#   -----------
#   - name: str
#   - total: int
#   - age_dist: AgeDistribution
#   - daily_totals: dict[str, int]    → date → summed total (first-seen order)
#   - monthly_totals: dict[str, int]  → month → summed total
#   - districts: dict[str, DistrictStats]
#
#   Methods:
#   --------
#   - update(record) -> None
#   - monthly_trends() -> list[MonthlyTrend]   (ascending by month)
#
# ==============================================

from dataclasses import dataclass, field
from typing import Dict, List, Set

from enrolment_monitor.normalization import EnrolmentRecord
from .summaries import AgeDistribution, MonthlyTrend


@dataclass
class DistrictStats:
    name: str
    total: int = 0
    age_dist: AgeDistribution = field(default_factory=AgeDistribution)
    pincodes: Dict[str, int] = field(default_factory=dict)
    dates: Set[str] = field(default_factory=set)

    def update(self, record: EnrolmentRecord) -> None:
        self.total += record.total
        self.age_dist.add(record)
        self.pincodes[record.pincode] = self.pincodes.get(record.pincode, 0) + record.total
        self.dates.add(record.date)


@dataclass
class StateStats:
    """
    Running totals for one state across one upload.
    """

    name: str
    total: int = 0
    age_dist: AgeDistribution = field(default_factory=AgeDistribution)
    daily_totals: Dict[str, int] = field(default_factory=dict)
    monthly_totals: Dict[str, int] = field(default_factory=dict)
    districts: Dict[str, DistrictStats] = field(default_factory=dict)

    def update(self, record: EnrolmentRecord) -> None:
        """
        Fold one record into the running totals.

        Args:
            record: A normalized record belonging to this state
        """
        self.total += record.total
        self.age_dist.add(record)

        self.daily_totals[record.date] = self.daily_totals.get(record.date, 0) + record.total

        month = record.month_key
        self.monthly_totals[month] = self.monthly_totals.get(month, 0) + record.total

        district = self.districts.get(record.district)
        if district is None:
            district = DistrictStats(name=record.district)
            self.districts[record.district] = district
        district.update(record)

    def monthly_trends(self) -> List[MonthlyTrend]:
        return [
            MonthlyTrend(month=month, total=total)
            for month, total in sorted(self.monthly_totals.items())
        ]
