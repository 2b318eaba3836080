# ==============================================
# InsightClient
# ==============================================
#
# PURPOSE:
#   Ask a text-generation endpoint to explain one flagged risk day,
#   and fall back to a fixed explanation when it cannot.
#
# REQUEST:
#   POST {api_url}
#   {"model": ..., "state": ..., "daily_total": ..., "percentile_95": ..., "date": ...}
#
# RESPONSE (expected):
#   {"problem": str, "impact": str, "solution": [str, ...]}
#
# FAILURE POLICY:
#   No endpoint configured, transport error, non-2xx status, empty or
#   malformed body → fallback_insight(event). explain() never raises.
#
# ==============================================

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from enrolment_monitor.analysis import RiskEvent
from enrolment_monitor.config import InsightConfig, get_config

logger = logging.getLogger(__name__)


@dataclass
class InsightData:
    problem: str
    impact: str
    solution: List[str] = field(default_factory=list)
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"problem": self.problem, "impact": self.impact, "solution": list(self.solution)}

    @classmethod
    def from_dict(cls, data: Any) -> "InsightData":
        """
        Validate a decoded response body.

        Raises:
            ValueError: If a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("insight payload must be a JSON object")
        problem = data.get("problem")
        impact = data.get("impact")
        solution = data.get("solution")
        if not isinstance(problem, str) or not problem.strip():
            raise ValueError("insight payload has no 'problem'")
        if not isinstance(impact, str) or not impact.strip():
            raise ValueError("insight payload has no 'impact'")
        if not isinstance(solution, list) or not all(isinstance(s, str) for s in solution):
            raise ValueError("insight payload 'solution' must be a list of strings")
        return cls(problem=problem, impact=impact, solution=solution)


FALLBACK_SOLUTION = (
    "Enforce strict physical document verification for all applicants.",
    "Deploy multi-biometric cross-referencing audit.",
    "Conduct snap audits of enrolment centers in high-volume districts.",
    "Implement border-specific verification protocols for new adult enrolments.",
)


def fallback_insight(event: RiskEvent) -> InsightData:
    return InsightData(
        problem=f"Unusually high Aadhaar enrolment in border state {event.state} on {event.date}.",
        impact=(
            "Potential migration pressure or fraudulent verification activity "
            "near international borders."
        ),
        solution=list(FALLBACK_SOLUTION),
        is_fallback=True,
    )


class InsightClient:
    """
    Thin HTTP wrapper around the narrative text service.
    """

    def __init__(self, config: Optional[InsightConfig] = None, session: Optional[requests.Session] = None):
        self._config = config or get_config().insight
        self._session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_url)

    def explain(self, event: RiskEvent) -> InsightData:
        """
        Explain one risk event.

        Args:
            event: The flagged day to explain

        Returns:
            InsightData from the service, or the canned fallback
        """
        if not self.is_configured:
            return fallback_insight(event)

        try:
            response = self._session.post(
                self._config.api_url,
                json=self._build_payload(event),
                headers=self._build_headers(),
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
            text = response.text.strip()
            if not text:
                raise ValueError("empty response from insight service")
            return InsightData.from_dict(json.loads(text))
        except (requests.RequestException, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Insight request for %s on %s failed: %s", event.state, event.date, e)
            return fallback_insight(event)

    def _build_payload(self, event: RiskEvent) -> Dict[str, Any]:
        return {
            "model": self._config.model,
            "state": event.state,
            "daily_total": event.daily_total,
            "percentile_95": event.percentile_95,
            "date": event.date,
        }

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers
