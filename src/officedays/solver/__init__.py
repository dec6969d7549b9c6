# officedays/solver - Greedy office-day scheduler
from .background import ScheduleJob, submit_schedule
from .engine import ScheduleResult, generate
from .errors import (
    InfeasibleError,
    InvalidInputError,
    PartialSatisfaction,
    RoleCoverageGap,
    SchedulingError,
)
from .stats import EmployeeStats, ScheduleStatistics, calculate_statistics
from .validation import ValidationResult, Violation, validate_schedule

__all__ = [
    "generate",
    "ScheduleResult",
    "SchedulingError",
    "InvalidInputError",
    "InfeasibleError",
    "PartialSatisfaction",
    "RoleCoverageGap",
    "submit_schedule",
    "ScheduleJob",
    "calculate_statistics",
    "ScheduleStatistics",
    "EmployeeStats",
    "validate_schedule",
    "ValidationResult",
    "Violation",
]
