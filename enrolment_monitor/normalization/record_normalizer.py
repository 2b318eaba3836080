import re
import logging
from typing import Any, Optional

from .date_parser import DateParser
from .enrolment_record import EnrolmentRecord, DEFAULT_DISTRICT, DEFAULT_PINCODE
from .region_normalizer import RegionNormalizer

logger = logging.getLogger(__name__)


class RecordNormalizer:
    """Turns the raw text of one CSV upload into typed enrolment records."""

    EXPECTED_COLUMNS = (
        "date", "state", "district", "pincode",
        "age_0_5", "age_5_17", "age_18_greater",
    )
    AGE_COLUMNS = ("age_0_5", "age_5_17", "age_18_greater")

    LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

    def __init__(
        self,
        region_normalizer: Optional[RegionNormalizer] = None,
        date_parser: Optional[DateParser] = None
    ):
        self.region_normalizer = region_normalizer or RegionNormalizer()
        self.date_parser = date_parser or DateParser()

    def parse_csv(self, csv_text: str) -> list[EnrolmentRecord]:
        """
        Parse a whole upload.

        Returns an empty list when the text has no header or no data rows.
        Malformed rows are coerced, never dropped.
        """
        # Editors on Windows prefix exports with a byte-order mark
        lines = (csv_text or "").lstrip("\ufeff").strip().split("\n")
        if len(lines) < 2:
            return []

        headers = [h.strip() for h in lines[0].lower().split(",")]
        missing = [c for c in self.EXPECTED_COLUMNS if c not in headers]
        if len(missing) == len(self.EXPECTED_COLUMNS):
            logger.warning("Upload header has none of the expected columns: %r", lines[0])
            return []
        if missing:
            logger.warning("Upload header is missing columns: %s", ", ".join(missing))

        self.region_normalizer.reset_mappings()
        rows = []
        for line in lines[1:]:
            values = [v.strip() for v in line.split(",")]
            row = {}
            for index, header in enumerate(headers):
                row[header] = values[index] if index < len(values) else None
            rows.append(row)

        records = self.normalize_batch(rows)
        logger.info("Parsed %d records from upload", len(records))
        return records

    def normalize(self, row: dict) -> EnrolmentRecord:
        age_0_5, age_5_17, age_18 = (self._coerce_count(row.get(c)) for c in self.AGE_COLUMNS)

        return EnrolmentRecord(
            date=self.date_parser.parse(row.get("date")),
            state=self.region_normalizer.normalize(row.get("state")),
            district=row.get("district") or DEFAULT_DISTRICT,
            pincode=row.get("pincode") or DEFAULT_PINCODE,
            age_0_5=age_0_5,
            age_5_17=age_5_17,
            age_18_greater=age_18,
        )

    def normalize_batch(self, rows: list[dict]) -> list[EnrolmentRecord]:
        return [self.normalize(row) for row in rows]

    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        # Leading-integer parse: "12abc" -> 12, "3.9" -> 3, "abc" -> 0.
        if value is None:
            return 0
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return max(value, 0)
        match = cls.LEADING_INT.match(str(value))
        if not match:
            return 0
        return max(int(match.group(1)), 0)
