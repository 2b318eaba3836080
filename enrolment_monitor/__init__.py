# ==============================================
# Enrolment Monitor
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# enrolment_monitor/
# ├── normalization/    # Topic 1: Parse CSV text into typed enrolment records
# ├── analysis/         # Topic 2: Aggregate by state/month/day, flag anomalies
# ├── insight/          # Topic 3: Narrative explanation of a flagged anomaly
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── demo.py           # Demo dataset generator
# ├── dashboard.py      # Final orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
