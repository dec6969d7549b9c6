"""
Scheduling Errors and Warnings
==============================
Errors abort a run; warnings travel with a successful ScheduleResult.
"""
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional


class SchedulingError(Exception):
    """Base class for every failure reported by the scheduler."""


class InvalidInputError(SchedulingError):
    """Malformed employee data or target period, detected before scheduling."""

    def __init__(self, employee_id: Optional[int], reason: str):
        self.employee_id = employee_id
        self.reason = reason
        if employee_id is None:
            super().__init__(reason)
        else:
            super().__init__(f"employee {employee_id}: {reason}")


class InfeasibleError(SchedulingError):
    """Some employees cannot reach their required days in the month."""

    def __init__(self, shortfalls: Dict[int, int]):
        self.shortfalls = dict(sorted(shortfalls.items()))
        details = ", ".join(f"{emp_id} short {days}" for emp_id, days in self.shortfalls.items())
        super().__init__(f"cannot satisfy required days: {details}")


@dataclass(frozen=True)
class PartialSatisfaction:
    """Required days were capped to the dates available for assignment."""
    employee_id: int
    required_days: int
    assigned_days: int

    @property
    def shortfall(self) -> int:
        return self.required_days - self.assigned_days

    def __str__(self) -> str:
        return (
            f"employee {self.employee_id}: {self.assigned_days} of "
            f"{self.required_days} required days (capped to eligible dates)"
        )


@dataclass(frozen=True)
class RoleCoverageGap:
    """An eligible date stayed below a configured role minimum."""
    day: date
    role: str
    required: int
    actual: int

    def __str__(self) -> str:
        return f"{self.day.isoformat()}: {self.role} {self.actual}/{self.required}"
