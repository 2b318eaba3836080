# ==============================================
# Aggregator
# ==============================================
#
# PURPOSE:
#   Turn one upload's normalized records into per-state summaries,
#   a list of flagged risk days, and a month × state volume matrix.
#
# CLASS: Aggregator
# -----------------
#   Holds only the thresholds. Every call to analyze() builds its
#   own accumulators, so two uploads can be analyzed at the same
#   time without sharing state.
#
#   Methods:
#   --------
#   - analyze(records: list[EnrolmentRecord]) -> AnalysisResult
#       1. Group records by state (first-appearance order)
#       2. Per state: accumulate StateStats, compute the daily
#          percentile threshold, flag days, build the summary
#       3. Independently: sum totals into matrix[month][state]
#
#   - assess_state(stats: StateStats) -> (StateSummary, list[RiskEvent])
#       Threshold, flagging and summary for one state in one step.
#
# RULE:
# -----
#   A day is a risk event when the state is on the watch-list AND
#     daily_total > percentile_threshold(daily totals, 0.95)
#     AND daily_total > daily_floor (50)
#
# ==============================================

import logging
from typing import Dict, List, Optional, Tuple

from enrolment_monitor.normalization import EnrolmentRecord
from .risk import RiskEvent, RiskStatus, RiskThresholds, RiskType, percentile_threshold
from .state_stats import StateStats
from .summaries import AnalysisResult, DistrictSummary, StateSummary

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Stateless aggregation and anomaly flagging over one batch of records.
    """

    def __init__(self, thresholds: Optional[RiskThresholds] = None):
        """
        Args:
            thresholds: Anomaly rule configuration. Defaults to the
                        built-in watch-list, 0.95 percentile and floor of 50.
        """
        self.thresholds = thresholds or RiskThresholds()

    def analyze(self, records: List[EnrolmentRecord]) -> AnalysisResult:
        """
        Aggregate one upload.

        Args:
            records: Normalized records in upload order

        Returns:
            AnalysisResult; empty when ``records`` is empty
        """
        state_stats: Dict[str, StateStats] = {}
        for record in records:
            stats = state_stats.get(record.state)
            if stats is None:
                stats = StateStats(name=record.state)
                state_stats[record.state] = stats
            stats.update(record)

        summaries: Dict[str, StateSummary] = {}
        risks: List[RiskEvent] = []
        for name, stats in state_stats.items():
            summary, events = self.assess_state(stats)
            summaries[name] = summary
            risks.extend(events)

        monthly_state_data, months = self._build_month_matrix(records)

        if records:
            logger.info(
                "Aggregated %d records: %d states, %d risk events, %d months",
                len(records), len(summaries), len(risks), len(months)
            )

        return AnalysisResult(
            state_summaries=summaries,
            risks=risks,
            monthly_state_data=monthly_state_data,
            months=months,
        )

    def assess_state(self, stats: StateStats) -> Tuple[StateSummary, List[RiskEvent]]:
        threshold = percentile_threshold(stats.daily_totals.values(), self.thresholds.percentile)
        events = self._flag_days(stats, threshold)

        flagged_dates = {event.date for event in events}
        districts = {
            name: DistrictSummary(
                district=name,
                total_enrolments=district.total,
                risk_count=len(flagged_dates & district.dates),
                age_dist=district.age_dist,
                pincodes=dict(district.pincodes),
            )
            for name, district in stats.districts.items()
        }

        summary = StateSummary(
            state=stats.name,
            total_enrolments=stats.total,
            risk_count=len(events),
            status=RiskStatus.RED if events else RiskStatus.GREEN,
            age_dist=stats.age_dist,
            monthly_trends=stats.monthly_trends(),
            districts=districts,
        )
        return summary, events

    def _flag_days(self, stats: StateStats, threshold: int) -> List[RiskEvent]:
        if not self.thresholds.is_watched(stats.name):
            return []

        floor = self.thresholds.daily_floor
        events = [
            RiskEvent(
                state=stats.name,
                daily_total=total,
                percentile_95=threshold,
                date=date,
                is_border=True,
                is_red_zone=True,
                type=RiskType.DAILY,
            )
            for date, total in stats.daily_totals.items()
            if total > threshold and total > floor
        ]
        if events:
            logger.debug(
                "%s: %d days above threshold %d", stats.name, len(events), threshold
            )
        return events

    @staticmethod
    def _build_month_matrix(
        records: List[EnrolmentRecord]
    ) -> Tuple[Dict[str, Dict[str, int]], List[str]]:
        matrix: Dict[str, Dict[str, int]] = {}
        for record in records:
            row = matrix.setdefault(record.month_key, {})
            row[record.state] = row.get(record.state, 0) + record.total
        return matrix, sorted(matrix)
