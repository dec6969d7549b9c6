"""Monthly schedule model."""
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence

import pandas as pd

from .calendar import Weekday
from .employee import Employee


@dataclass(frozen=True)
class MonthlySchedule:
    """
    Office presence for one calendar month.

    ``assignments`` maps each date to the ids of the employees in the office
    that day. The mapping is read-only and ordered by date.
    """

    month: int
    year: int
    assignments: Mapping[date, FrozenSet[int]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {d: frozenset(self.assignments[d]) for d in sorted(self.assignments)}
        object.__setattr__(self, "assignments", MappingProxyType(frozen))

    @property
    def dates(self) -> List[date]:
        return list(self.assignments)

    def employees_on(self, day: date) -> FrozenSet[int]:
        """Ids present on ``day`` (empty if the date is not scheduled)."""
        return self.assignments.get(day, frozenset())

    def days_for(self, employee_id: int) -> List[date]:
        """Dates on which an employee is in the office."""
        return [d for d, ids in self.assignments.items() if employee_id in ids]

    def count_for(self, employee_id: int) -> int:
        return sum(1 for ids in self.assignments.values() if employee_id in ids)

    def headcount(self) -> Dict[date, int]:
        return {d: len(ids) for d, ids in self.assignments.items()}

    def employee_ids(self) -> FrozenSet[int]:
        """Every employee appearing at least once."""
        return frozenset().union(*self.assignments.values())

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible form (dates as ISO strings, sorted ids)."""
        return {
            "month": self.month,
            "year": self.year,
            "assignments": {
                d.isoformat(): sorted(ids) for d, ids in self.assignments.items()
            },
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MonthlySchedule":
        """Create from the ``to_dict`` form."""
        return cls(
            month=int(d["month"]),
            year=int(d["year"]),
            assignments={
                date.fromisoformat(k): frozenset(int(i) for i in v)
                for k, v in d.get("assignments", {}).items()
            },
        )

    def to_dataframe(self, employees: Optional[Sequence[Employee]] = None) -> pd.DataFrame:
        """One row per (date, employee) assignment."""
        names = {e.id: e.name for e in employees} if employees else {}
        rows = [
            {
                "date": d,
                "weekday": Weekday.of(d).label,
                "employee_id": emp_id,
                "name": names.get(emp_id, str(emp_id)),
            }
            for d, ids in self.assignments.items()
            for emp_id in sorted(ids)
        ]
        if not rows:
            return pd.DataFrame(columns=["date", "weekday", "employee_id", "name"])
        return pd.DataFrame(rows)

    def to_matrix(self, employees: Sequence[Employee]) -> pd.DataFrame:
        """Employee × date matrix with "X" where the employee is present."""
        columns = self.dates
        index = [e.name for e in employees]
        mat = pd.DataFrame("", index=index, columns=columns)
        for e in employees:
            for d in self.days_for(e.id):
                mat.at[e.name, d] = "X"
        return mat

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        counts = list(self.headcount().values())
        return {
            "month": self.month,
            "year": self.year,
            "dates": len(counts),
            "employees": len(self.employee_ids()),
            "assignments": sum(counts),
            "max_headcount": max(counts, default=0),
            "min_headcount": min(counts, default=0),
        }
