"""Employee model."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, Iterable, List, Tuple

from .calendar import Weekday, expand_weekdays


class Sex(str, Enum):
    """Employee sex, as recorded in the employee register."""
    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def from_string(cls, s: str) -> "Sex":
        key = str(s).strip().lower()
        for member in cls:
            if member.value.lower() == key or member.name.lower() == key:
                return member
        if key in ("m", "f"):
            return cls.MALE if key == "m" else cls.FEMALE
        raise ValueError(f"Invalid sex value: {s}")


def _as_weekday(value) -> Weekday:
    if isinstance(value, str):
        return Weekday.from_string(value)
    return Weekday(value)


@dataclass(frozen=True)
class Employee:
    """An employee and their office-day obligations for a month."""

    id: int
    name: str
    sex: Sex = Sex.MALE
    role: str = ""
    required_days: int = 0
    fixed_days: FrozenSet[date] = field(default_factory=frozenset)
    fixed_weekdays: FrozenSet[Weekday] = field(default_factory=frozenset)
    is_nsp: bool = False

    def __post_init__(self):
        # Accept any iterable for the day collections; store frozensets.
        object.__setattr__(self, "name", str(self.name).strip())
        object.__setattr__(self, "fixed_days", frozenset(self.fixed_days))
        object.__setattr__(
            self, "fixed_weekdays", frozenset(_as_weekday(d) for d in self.fixed_weekdays)
        )
        if isinstance(self.sex, str) and not isinstance(self.sex, Sex):
            object.__setattr__(self, "sex", Sex.from_string(self.sex))

    def fixed_dates(self, month: int, year: int) -> FrozenSet[date]:
        """Fixed dates for a month: explicit dates plus expanded weekdays."""
        expanded = expand_weekdays(self.fixed_weekdays, month, year)
        return self.fixed_days.union(expanded)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "sex": self.sex.value,
            "role": self.role,
            "required_days": self.required_days,
            "fixed_days": sorted(d.isoformat() for d in self.fixed_days)
                          + [w.label for w in sorted(self.fixed_weekdays)],
            "is_nsp": self.is_nsp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Employee":
        """Create from dictionary; ``fixed_days`` may mix ISO dates and weekday names."""
        days, weekdays = split_fixed_days(d.get("fixed_days", []))
        return cls(
            id=int(d.get("id", 0)),
            name=d.get("name", ""),
            sex=Sex.from_string(d.get("sex", "Male")),
            role=str(d.get("role", "")),
            required_days=d.get("required_days", 0),
            fixed_days=days,
            fixed_weekdays=weekdays,
            is_nsp=bool(d.get("is_nsp", False)),
        )


def split_fixed_days(values: Iterable) -> Tuple[List[date], List[Weekday]]:
    """Split raw fixed-day values into calendar dates and recurring weekdays."""
    days: List[date] = []
    weekdays: List[Weekday] = []
    for value in values:
        if isinstance(value, Weekday):
            weekdays.append(value)
        elif isinstance(value, date):
            days.append(value)
        else:
            text = str(value).strip()
            try:
                days.append(date.fromisoformat(text))
            except ValueError:
                weekdays.append(Weekday.from_string(text))
    return days, weekdays
