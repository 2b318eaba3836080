# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - RiskConfig (dataclass)
#     percentile: float    (default 0.95)
#     daily_floor: int     (default 50)
#
# - InsightConfig (dataclass)
#     api_url: str | None  (default None → canned fallback only)
#     api_key: str | None  (default None)
#     model: str           (default "gemini-flash")
#     timeout_seconds: float (default 10.0)
#
# - AppConfig (dataclass)
#     risk: RiskConfig
#     insight: InsightConfig
#     log_level: str       (default "INFO")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the cached singleton (tests, env changes).
#
# USAGE:
# ------
#   from enrolment_monitor.config import get_config
#   config = get_config()
#   print(config.risk.percentile)
#   print(config.insight.api_url)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class RiskConfig:
    """Thresholds applied when flagging daily enrolment spikes."""
    percentile: float = 0.95
    daily_floor: int = 50


@dataclass
class InsightConfig:
    """Text-generation endpoint used for anomaly explanations."""
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gemini-flash"
    timeout_seconds: float = 10.0


@dataclass
class AppConfig:
    """Main application configuration."""
    risk: RiskConfig = field(default_factory=RiskConfig)
    insight: InsightConfig = field(default_factory=InsightConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    risk_config = RiskConfig(
        percentile=float(os.getenv("RISK_PERCENTILE", "0.95")),
        daily_floor=int(os.getenv("RISK_DAILY_FLOOR", "50"))
    )

    insight_config = InsightConfig(
        api_url=os.getenv("INSIGHT_API_URL") or None,
        api_key=os.getenv("INSIGHT_API_KEY") or None,
        model=os.getenv("INSIGHT_MODEL", "gemini-flash"),
        timeout_seconds=float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "10.0"))
    )

    _config_instance = AppConfig(
        risk=risk_config,
        insight=insight_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
