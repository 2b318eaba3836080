# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - fixed_today       → a stable "today" for the date fallback
# - record_normalizer → RecordNormalizer using fixed_today
# - sample_csv        → small upload with a border-state spike
# - make_record       → factory for EnrolmentRecord
# ==============================================

from datetime import date

import pytest

from enrolment_monitor.config import reset_config
from enrolment_monitor.normalization import DateParser, EnrolmentRecord, RecordNormalizer


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests away from a developer's .env and any real insight endpoint."""
    for name in ("INSIGHT_API_URL", "INSIGHT_API_KEY", "RISK_PERCENTILE", "RISK_DAILY_FLOOR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("enrolment_monitor.config.load_dotenv", lambda **kwargs: False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fixed_today():
    return date(2026, 1, 1)


@pytest.fixture
def record_normalizer(fixed_today):
    return RecordNormalizer(date_parser=DateParser(today=lambda: fixed_today))


@pytest.fixture
def sample_csv():
    rows = ["date,state,district,pincode,age_0_5,age_5_17,age_18_greater"]
    for day in range(1, 21):
        rows.append(f"2024-01-{day:02d},Punjab,Amritsar,143001,2,3,5")
    rows.append("2024-01-21,Punjab,Ludhiana,141001,1000,2000,2000")
    rows.append("15-02-2024,Kerala,Kochi,682001,10,20,30")
    rows.append("16-02-2024,kerala,Kochi,682002,1,1,1")
    return "\n".join(rows) + "\n"


@pytest.fixture
def make_record():
    def _make(date_str, state, total=0, district="D1", pincode="100001"):
        return EnrolmentRecord(
            date=date_str,
            state=state,
            district=district,
            pincode=pincode,
            age_18_greater=total,
        )
    return _make
