"""
Demo dataset generator.

Produces an upload-shaped CSV covering every state for the last six
months. Border states occasionally get a large single-day spike so the
dashboard has something to flag.
"""

import random
from datetime import date
from typing import Optional

from enrolment_monitor.normalization.record_normalizer import RecordNormalizer
from enrolment_monitor.normalization.regions import ALL_STATES, BORDER_STATES

MONTHS = 6
ROWS_PER_MONTH = 12
SPIKE_PROBABILITY = 0.06
SPIKE_COUNTS = (900, 1500, 2800)
NORMAL_MAXIMUMS = (60, 110, 160)
DISTRICT_SUFFIXES = ("Central", "North", "Frontier", "Hub")


def _shift_month(year: int, month: int, back: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) - back
    return index // 12, index % 12 + 1


def generate_mock_csv(rng: Optional[random.Random] = None, today: Optional[date] = None) -> str:
    """
    Build a demo CSV.

    Args:
        rng: Random source (pass a seeded Random for a repeatable dataset)
        today: Anchor for the six-month window (default: today)

    Returns:
        CSV text with the standard upload header
    """
    rng = rng or random.Random()
    today = today or date.today()

    lines = [",".join(RecordNormalizer.EXPECTED_COLUMNS)]
    for state in ALL_STATES:
        districts = [f"{state} {suffix}" for suffix in DISTRICT_SUFFIXES]
        is_border = state in BORDER_STATES
        for back in range(MONTHS):
            year, month = _shift_month(today.year, today.month, back)
            for _ in range(ROWS_PER_MONTH):
                day = rng.randint(1, 28)
                is_spike = is_border and rng.random() < SPIKE_PROBABILITY
                if is_spike:
                    counts = SPIKE_COUNTS
                else:
                    counts = tuple(rng.randrange(maximum) for maximum in NORMAL_MAXIMUMS)
                district = rng.choice(districts)
                pincode = rng.randint(100000, 899999)
                lines.append(
                    f"{year}-{month:02d}-{day:02d},{state},{district},{pincode},"
                    f"{counts[0]},{counts[1]},{counts[2]}"
                )

    return "\n".join(lines) + "\n"
