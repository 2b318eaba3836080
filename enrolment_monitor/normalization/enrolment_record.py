from dataclasses import dataclass, field
from typing import Any, Dict

from .date_parser import DateParser

DEFAULT_DISTRICT = "Default District"
DEFAULT_PINCODE = "000000"


@dataclass
class EnrolmentRecord:
    """
    One normalized upload row.

    ``total`` is derived from the three age brackets and is never read
    from input.
    """

    date: str  # YYYY-MM-DD
    state: str
    district: str = DEFAULT_DISTRICT
    pincode: str = DEFAULT_PINCODE
    age_0_5: int = 0
    age_5_17: int = 0
    age_18_greater: int = 0
    total: int = field(init=False)

    def __post_init__(self):
        self.total = self.age_0_5 + self.age_5_17 + self.age_18_greater

    @property
    def month_key(self) -> str:
        return DateParser.month_key(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "state": self.state,
            "district": self.district,
            "pincode": self.pincode,
            "age_0_5": self.age_0_5,
            "age_5_17": self.age_5_17,
            "age_18_greater": self.age_18_greater,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnrolmentRecord":
        """Rebuild a record; any stored ``total`` is ignored and recomputed."""
        return cls(
            date=data["date"],
            state=data["state"],
            district=data.get("district", DEFAULT_DISTRICT),
            pincode=data.get("pincode", DEFAULT_PINCODE),
            age_0_5=data.get("age_0_5", 0),
            age_5_17=data.get("age_5_17", 0),
            age_18_greater=data.get("age_18_greater", 0),
        )
