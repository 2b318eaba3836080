# ==============================================
# EnrolmentDashboard — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the topics together into
#   one upload → analysis → insight flow. Outer surfaces (CLI,
#   UI) interact with this class only.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                   EnrolmentDashboard                     │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: NORMALIZATION                       │        │
#   │  │  DateParser + RegionNormalizer →             │        │
#   │  │  RecordNormalizer.parse_csv(text)            │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ list[EnrolmentRecord]                  │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: AGGREGATION                         │        │
#   │  │  Aggregator.analyze(records) → AnalysisResult│        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ first risk event of a state            │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: INSIGHT                             │        │
#   │  │  InsightClient.explain(event) → InsightData  │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
#   Each load replaces the previous result wholesale; nothing is
#   carried over between uploads.
#
# ==============================================

import logging
import random
from typing import Optional

from enrolment_monitor.analysis import Aggregator, AnalysisResult, RiskThresholds
from enrolment_monitor.config import AppConfig, get_config
from enrolment_monitor.demo import generate_mock_csv
from enrolment_monitor.errors import InvalidDatasetError
from enrolment_monitor.insight import InsightClient, InsightData
from enrolment_monitor.normalization import RecordNormalizer

logger = logging.getLogger(__name__)


class EnrolmentDashboard:
    """
    Holds the analysis of the most recent upload.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        normalizer: Optional[RecordNormalizer] = None,
        aggregator: Optional[Aggregator] = None,
        insight_client: Optional[InsightClient] = None
    ):
        """
        Initialize the dashboard.

        Args:
            config: Optional configuration. If None, loads from environment.
        """
        self._config = config or get_config()
        self._normalizer = normalizer or RecordNormalizer()
        self._aggregator = aggregator or Aggregator(RiskThresholds.from_config(self._config.risk))
        self._insight_client = insight_client or InsightClient(self._config.insight)

        self._result: Optional[AnalysisResult] = None
        self._record_count = 0

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def has_data(self) -> bool:
        return self._result is not None

    def load_csv(self, csv_text: str) -> AnalysisResult:
        """
        Parse and analyze one upload, replacing any previous result.

        Args:
            csv_text: Full text of the uploaded CSV

        Returns:
            The new AnalysisResult

        Raises:
            InvalidDatasetError: If the upload yields no records
        """
        records = self._normalizer.parse_csv(csv_text)
        if not records:
            raise InvalidDatasetError()

        self._result = self._aggregator.analyze(records)
        self._record_count = len(records)
        return self._result

    def load_demo(self, seed: Optional[int] = None) -> AnalysisResult:
        rng = random.Random(seed)
        return self.load_csv(generate_mock_csv(rng=rng))

    def reset(self) -> None:
        self._result = None
        self._record_count = 0

    def insight_for(self, state: str) -> Optional[InsightData]:
        """
        Explain the first risk event of a state.

        Returns:
            InsightData, or None when no data is loaded or the state has no risk events
        """
        if self._result is None:
            return None
        events = self._result.risks_for(state)
        if not events:
            return None
        return self._insight_client.explain(events[0])

    def get_status(self) -> dict:
        if self._result is None:
            return {"has_data": False, "records": 0, "states": 0, "red_states": 0, "risk_events": 0, "months": []}
        return {
            "has_data": True,
            "records": self._record_count,
            "states": len(self._result.state_summaries),
            "red_states": len(self._result.red_states()),
            "risk_events": len(self._result.risks),
            "months": list(self._result.months),
        }
