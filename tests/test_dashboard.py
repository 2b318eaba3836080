# ==============================================
# Tests for EnrolmentDashboard, Demo and CLI
# ==============================================

import json
import random
from datetime import date

import pytest

from enrolment_monitor import cli
from enrolment_monitor.analysis import RiskStatus
from enrolment_monitor.config import AppConfig, RiskConfig
from enrolment_monitor.dashboard import EnrolmentDashboard
from enrolment_monitor.demo import generate_mock_csv
from enrolment_monitor.errors import InvalidDatasetError
from enrolment_monitor.insight import InsightData
from enrolment_monitor.normalization import RecordNormalizer
from enrolment_monitor.normalization.regions import ALL_STATES, BORDER_STATES


class RecordingInsightClient:
    def __init__(self):
        self.events = []

    def explain(self, event):
        self.events.append(event)
        return InsightData(problem="p", impact="i", solution=["s"])


@pytest.fixture
def insight_client():
    return RecordingInsightClient()


@pytest.fixture
def dashboard(record_normalizer, insight_client):
    """Create a fresh dashboard instance."""
    return EnrolmentDashboard(AppConfig(), normalizer=record_normalizer, insight_client=insight_client)


class TestDashboard:
    """Tests for the upload → analysis → insight flow."""

    def test_starts_empty(self, dashboard):
        assert not dashboard.has_data
        assert dashboard.get_status()["has_data"] is False
        assert dashboard.insight_for("Punjab") is None

    @pytest.mark.parametrize("text", ["", "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n"])
    def test_invalid_dataset(self, dashboard, text):
        with pytest.raises(InvalidDatasetError):
            dashboard.load_csv(text)
        assert not dashboard.has_data

    def test_load_csv(self, dashboard, sample_csv):
        result = dashboard.load_csv(sample_csv)

        assert result.state_summaries["Punjab"].status is RiskStatus.RED
        assert result.state_summaries["Kerala"].total_enrolments == 63
        assert dashboard.get_status() == {
            "has_data": True,
            "records": 23,
            "states": 2,
            "red_states": 1,
            "risk_events": 1,
            "months": ["2024-01", "2024-02"],
        }

    def test_new_upload_replaces_previous(self, dashboard, sample_csv):
        dashboard.load_csv(sample_csv)
        dashboard.load_csv("date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n2024-05-01,Goa,X,1,1,1,1")
        assert list(dashboard.result.state_summaries) == ["Goa"]
        assert dashboard.result.risks == []

    def test_failed_upload_keeps_previous(self, dashboard, sample_csv):
        dashboard.load_csv(sample_csv)
        with pytest.raises(InvalidDatasetError):
            dashboard.load_csv("")
        assert "Punjab" in dashboard.result.state_summaries

    def test_insight_uses_first_event(self, dashboard, sample_csv, insight_client):
        dashboard.load_csv(sample_csv)
        insight = dashboard.insight_for("Punjab")

        assert insight.problem == "p"
        assert insight_client.events[0].date == "2024-01-21"
        assert insight_client.events[0].daily_total == 5000

    def test_insight_for_green_state(self, dashboard, sample_csv, insight_client):
        dashboard.load_csv(sample_csv)
        assert dashboard.insight_for("Kerala") is None
        assert insight_client.events == []

    def test_thresholds_from_config(self, record_normalizer, sample_csv, insight_client):
        config = AppConfig(risk=RiskConfig(daily_floor=10000))
        dashboard = EnrolmentDashboard(config, normalizer=record_normalizer, insight_client=insight_client)
        assert dashboard.load_csv(sample_csv).risks == []

    def test_reset(self, dashboard, sample_csv):
        dashboard.load_csv(sample_csv)
        dashboard.reset()
        assert not dashboard.has_data

    def test_load_demo(self, dashboard):
        result = dashboard.load_demo(seed=3)
        assert set(result.state_summaries) == set(ALL_STATES)
        assert len(result.months) == 6


class TestDemo:
    """Tests for the demo dataset generator."""

    def test_shape(self):
        text = generate_mock_csv(rng=random.Random(1), today=date(2024, 2, 15))
        lines = text.strip().split("\n")
        assert lines[0] == "date,state,district,pincode,age_0_5,age_5_17,age_18_greater"
        assert len(lines) == 1 + len(ALL_STATES) * 6 * 12

    def test_window_crosses_year(self):
        text = generate_mock_csv(rng=random.Random(1), today=date(2024, 2, 15))
        records = RecordNormalizer().parse_csv(text)
        months = sorted({r.month_key for r in records})
        assert months == ["2023-09", "2023-10", "2023-11", "2023-12", "2024-01", "2024-02"]

    def test_seed_is_repeatable(self):
        anchor = date(2024, 6, 1)
        assert generate_mock_csv(random.Random(5), anchor) == generate_mock_csv(random.Random(5), anchor)

    def test_only_border_states_flagged(self, dashboard):
        result = dashboard.load_demo(seed=11)
        assert {e.state for e in result.risks} <= BORDER_STATES


class TestCli:
    """Tests for the command line entry point."""

    def test_demo_to_file(self, tmp_path):
        target = tmp_path / "demo.csv"
        assert cli.main(["demo", "--seed", "2", "--output", str(target)]) == 0
        assert target.read_text(encoding="utf-8").startswith("date,state,")

    def test_analyze_text(self, tmp_path, sample_csv, capsys):
        upload = tmp_path / "upload.csv"
        upload.write_text(sample_csv, encoding="utf-8")

        assert cli.main(["analyze", str(upload), "--month", "2024-02"]) == 0
        out = capsys.readouterr().out
        assert "Punjab" in out
        assert "Snapshot for 2024-02" in out

    def test_analyze_json(self, tmp_path, sample_csv, capsys):
        upload = tmp_path / "upload.csv"
        upload.write_text(sample_csv, encoding="utf-8")

        assert cli.main(["analyze", str(upload), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["months"] == ["2024-01", "2024-02"]
        assert data["risks"][0]["state"] == "Punjab"

    def test_insight_without_endpoint_uses_fallback(self, tmp_path, sample_csv, capsys):
        upload = tmp_path / "upload.csv"
        upload.write_text(sample_csv, encoding="utf-8")

        assert cli.main(["insight", str(upload), "Punjab"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert "Punjab" in data["problem"]
        assert len(data["solution"]) == 4

    def test_analyze_byte_order_mark_upload(self, tmp_path, capsys):
        upload = tmp_path / "bom.csv"
        upload.write_text(
            "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n2024-01-15,Goa,X,403001,1,2,3\n",
            encoding="utf-8-sig",
        )

        assert cli.main(["analyze", str(upload), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["months"] == ["2024-01"]
        assert data["state_summaries"]["Goa"]["total_enrolments"] == 6

    def test_dashboard_rejects_bad_percentile(self, record_normalizer):
        with pytest.raises(ValueError):
            EnrolmentDashboard(AppConfig(risk=RiskConfig(percentile=-0.2)), normalizer=record_normalizer)

    def test_invalid_upload(self, tmp_path, capsys):
        upload = tmp_path / "empty.csv"
        upload.write_text("date,state\n", encoding="utf-8")
        assert cli.main(["analyze", str(upload)]) == 1
        assert "invalid dataset" in capsys.readouterr().err
