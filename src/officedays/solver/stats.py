"""
Schedule Statistics
===================
Single source of truth for per-day and per-employee figures.
Used by the CLI summary and the Excel/CSV exports.
"""
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence

import pandas as pd

from officedays.models.calendar import Weekday
from officedays.models.employee import Employee
from officedays.models.schedule import MonthlySchedule
from officedays.utils.logging_setup import get_logger

logger = get_logger("officedays.solver.stats")


@dataclass
class EmployeeStats:
    """Statistics for a single employee."""
    employee_id: int
    name: str
    role: str
    required: int   # Required office days
    assigned: int   # Days in the schedule
    fixed: int      # Fixed days among them

    @property
    def delta(self) -> int:
        return self.assigned - self.required


@dataclass
class ScheduleStatistics:
    """Aggregate figures for a monthly schedule."""
    day_counts: Dict[date, int] = field(default_factory=dict)
    sex_distribution: Dict[date, Dict[str, int]] = field(default_factory=dict)
    role_distribution: Dict[date, Dict[str, int]] = field(default_factory=dict)
    weekday_average: Dict[Weekday, float] = field(default_factory=dict)
    employees: List[EmployeeStats] = field(default_factory=list)
    total_employees: int = 0
    average_daily_attendance: float = 0.0


def calculate_statistics(
    schedule: MonthlySchedule,
    employees: Sequence[Employee],
) -> ScheduleStatistics:
    """
    Calculate statistics for a schedule.

    Args:
        schedule: The generated (or edited) schedule
        employees: Employees referenced by the schedule

    Returns:
        ScheduleStatistics; unknown ids in the schedule are counted in
        headcounts but have no sex/role breakdown
    """
    by_id = {e.id: e for e in employees}
    stats = ScheduleStatistics(total_employees=len(employees))

    per_weekday: Dict[Weekday, List[int]] = defaultdict(list)
    for day, ids in schedule.assignments.items():
        stats.day_counts[day] = len(ids)
        per_weekday[Weekday.of(day)].append(len(ids))

        known = [by_id[i] for i in ids if i in by_id]
        stats.sex_distribution[day] = dict(Counter(e.sex.value for e in known))
        stats.role_distribution[day] = dict(Counter(e.role for e in known))

    stats.weekday_average = {
        wd: sum(counts) / len(counts) for wd, counts in sorted(per_weekday.items())
    }

    if stats.day_counts:
        stats.average_daily_attendance = sum(stats.day_counts.values()) / len(stats.day_counts)

    for emp in employees:
        stats.employees.append(EmployeeStats(
            employee_id=emp.id,
            name=emp.name,
            role=emp.role,
            required=emp.required_days,
            assigned=schedule.count_for(emp.id),
            fixed=len(emp.fixed_dates(schedule.month, schedule.year)),
        ))

    logger.debug(f"Calculated stats for {len(employees)} employees, {len(stats.day_counts)} dates")
    return stats


def employee_stats_dataframe(stats: ScheduleStatistics) -> pd.DataFrame:
    """Per-employee table for display or export."""
    columns = ["Name", "Role", "Required", "Assigned", "Fixed", "Δ"]
    rows = [
        {
            "Name": s.name,
            "Role": s.role,
            "Required": s.required,
            "Assigned": s.assigned,
            "Fixed": s.fixed,
            "Δ": s.delta,
        }
        for s in stats.employees
    ]
    return pd.DataFrame(rows, columns=columns)
