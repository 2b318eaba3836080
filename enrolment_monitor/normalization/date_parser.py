import re
import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class DateParser:
    DATE_SEPARATORS = re.compile(r"[-/]")

    # Tried in order before the day/month heuristic. Slash dates without a
    # leading year are read month-first here, the same way a browser's
    # generic date constructor reads them.
    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%m/%d/%Y",
        "%d %B %Y",
        "%d %b %Y",
        "%B %d, %Y",
        "%b %d, %Y",
    ]

    UNKNOWN_MONTH = "UNKNOWN"

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self.today = today or date.today

    def parse(self, value: Any) -> str:
        """
        Convert a free-form date string to ``YYYY-MM-DD``.

        Unparseable input is replaced by today's date. The substitution
        is not reported to the caller.
        """
        if value is None:
            return self._fallback(value)

        value = str(value).strip()
        if not value:
            return self._fallback(value)

        parsed = self._parse_generic(value)
        if parsed:
            return parsed.strftime("%Y-%m-%d")

        parts = self._split(value)
        if parts:
            if len(parts[0]) == 4:
                year, month, day = parts
            else:
                day, month, year = parts
            return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

        return self._fallback(value)

    @classmethod
    def month_key(cls, date_str: str) -> str:
        """``YYYY-MM`` for a normalized or day-first date, else ``UNKNOWN``."""
        parts = cls.DATE_SEPARATORS.split(date_str or "")
        if len(parts) != 3:
            return cls.UNKNOWN_MONTH
        if len(parts[0]) == 4:
            return f"{parts[0]}-{parts[1].zfill(2)}"
        return f"{parts[2]}-{parts[1].zfill(2)}"

    @classmethod
    def _parse_generic(cls, value: str) -> Optional[datetime]:
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        # UTC offsets ("+05:30"); the calendar date is kept as written
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None

    @classmethod
    def _split(cls, value: str) -> Optional[list]:
        parts = [part.strip() for part in cls.DATE_SEPARATORS.split(value)]
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            return None
        return parts

    def _fallback(self, value: Any) -> str:
        fallback = self.today().strftime("%Y-%m-%d")
        logger.debug("Unparseable date %r replaced with %s", value, fallback)
        return fallback
