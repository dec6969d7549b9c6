"""
officedays
==========
Monthly in-office day scheduling: every employee gets their required office
days, fixed days are always honored, and daily headcount stays balanced.

Example usage:
    from officedays import Employee, SchedulerConfig, generate

    result = generate(employees, month=3, year=2025, config=SchedulerConfig(random_seed=1))
    result.schedule.headcount()
"""
from officedays.models import Employee, MonthlySchedule, SchedulerConfig, Sex, Weekday
from officedays.solver import (
    InfeasibleError,
    InvalidInputError,
    PartialSatisfaction,
    RoleCoverageGap,
    ScheduleResult,
    SchedulingError,
    generate,
)

__version__ = "0.1.0"

__all__ = [
    "Employee",
    "Sex",
    "Weekday",
    "MonthlySchedule",
    "SchedulerConfig",
    "generate",
    "ScheduleResult",
    "SchedulingError",
    "InvalidInputError",
    "InfeasibleError",
    "PartialSatisfaction",
    "RoleCoverageGap",
]
