# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package handles everything related to turning the raw
# text of an upload into typed enrolment records BEFORE they
# enter the aggregation engine.
#
# Modules:
# --------
# - date_parser.py       → Free-form date string → YYYY-MM-DD, month keys
# - regions.py           → Canonical states, aliases, border watch-list
# - region_normalizer.py → Free-text state name → canonical name
# - enrolment_record.py  → EnrolmentRecord data class
# - record_normalizer.py → CSV text → list[EnrolmentRecord]
#
# ==============================================

from .date_parser import DateParser
from .enrolment_record import EnrolmentRecord
from .region_normalizer import RegionNormalizer
from .record_normalizer import RecordNormalizer

__all__ = ["DateParser", "EnrolmentRecord", "RegionNormalizer", "RecordNormalizer"]
