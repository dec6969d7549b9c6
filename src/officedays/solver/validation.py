"""
Schedule Validation
===================
Re-check a MonthlySchedule against the employees it was built for.
Used by tests, the CLI, and for schedules edited by hand after generation.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from officedays.models.calendar import eligible_days, in_month
from officedays.models.config import SchedulerConfig
from officedays.models.employee import Employee
from officedays.models.schedule import MonthlySchedule
from officedays.utils.logging_setup import get_logger, log_constraint

logger = get_logger("officedays.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "outside_month", "missing_fixed_day", "quota_short", "quota_over", "unbalanced", "role_coverage"
    severity: str  # "critical", "warning"
    message: str
    employee_id: Optional[int] = None
    day: Optional[date] = None
    count: int = 1


@dataclass
class ValidationResult:
    """Validation metrics for a schedule."""
    dates_outside_month: int = 0
    missing_fixed_days: int = 0
    quota_shortfalls: int = 0
    quota_excess: int = 0
    headcount_spread: int = 0
    role_coverage_gaps: int = 0

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    def as_dict(self) -> Dict[str, int]:
        return {
            "dates_outside_month": self.dates_outside_month,
            "missing_fixed_days": self.missing_fixed_days,
            "quota_shortfalls": self.quota_shortfalls,
            "quota_excess": self.quota_excess,
            "headcount_spread": self.headcount_spread,
            "role_coverage_gaps": self.role_coverage_gaps,
        }

    @property
    def is_valid(self) -> bool:
        """No critical violation (warnings allowed)."""
        return not self.get_critical_violations()

    def get_critical_violations(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "critical"]

    def get_warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "warning"]


def validate_schedule(
    schedule: MonthlySchedule,
    employees: Sequence[Employee],
    config: Optional[SchedulerConfig] = None,
) -> ValidationResult:
    """
    Validate a schedule and count violations.

    Critical: dates outside the month, missing fixed days, employees below
    their required days. Warnings: employees above their required days
    without fixed days forcing it, eligible headcount spread above one,
    role minimums not met.
    """
    config = config or SchedulerConfig()
    month, year = schedule.month, schedule.year
    result = ValidationResult()

    for day in schedule.dates:
        if not in_month(day, month, year):
            result.dates_outside_month += 1
            result.add_violation(Violation(
                type="outside_month", severity="critical", day=day,
                message=f"{day.isoformat()} is outside {year}-{month:02d}",
            ))

    days = eligible_days(month, year, config.working_days_only)
    for emp in employees:
        fixed = emp.fixed_dates(month, year)
        for day in sorted(fixed):
            if emp.id not in schedule.employees_on(day):
                result.missing_fixed_days += 1
                result.add_violation(Violation(
                    type="missing_fixed_day", severity="critical",
                    employee_id=emp.id, day=day,
                    message=f"{emp.name} missing on fixed day {day.isoformat()}",
                ))

        count = schedule.count_for(emp.id)
        expected = max(emp.required_days, len(fixed))
        capacity = len(set(days) | fixed)
        if count < min(emp.required_days, capacity):
            result.quota_shortfalls += 1
            result.add_violation(Violation(
                type="quota_short", severity="critical", employee_id=emp.id,
                count=emp.required_days - count,
                message=f"{emp.name}: {count} of {emp.required_days} required days",
            ))
        elif count > expected:
            result.quota_excess += 1
            result.add_violation(Violation(
                type="quota_over", severity="warning", employee_id=emp.id,
                count=count - expected,
                message=f"{emp.name}: {count} days for {emp.required_days} required",
            ))

    loads = [len(schedule.employees_on(d)) for d in days]
    if loads:
        result.headcount_spread = max(loads) - min(loads)
    balanced = result.headcount_spread <= 1
    log_constraint(logger, "headcount balance", balanced, f"spread={result.headcount_spread}")
    if not balanced:
        result.add_violation(Violation(
            type="unbalanced", severity="warning", count=result.headcount_spread,
            message=f"daily headcount spread is {result.headcount_spread}",
        ))

    roles = {e.id: e.role for e in employees}
    for day in days:
        present = [roles.get(i) for i in schedule.employees_on(day)]
        for role, minimum in sorted(config.role_minimums.items()):
            actual = present.count(role)
            if actual < minimum:
                result.role_coverage_gaps += 1
                result.add_violation(Violation(
                    type="role_coverage", severity="warning", day=day,
                    count=minimum - actual,
                    message=f"{day.isoformat()}: {role} {actual}/{minimum}",
                ))

    log_constraint(
        logger, "schedule invariants", result.is_valid,
        f"{len(result.get_critical_violations())} critical, {len(result.get_warnings())} warnings",
    )
    return result
