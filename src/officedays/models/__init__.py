# officedays/models - Data models for the scheduling system
from .calendar import WEEKDAYS, WEEKEND, Weekday
from .config import SchedulerConfig
from .employee import Employee, Sex
from .schedule import MonthlySchedule

__all__ = [
    "Employee", "Sex",
    "Weekday", "WEEKDAYS", "WEEKEND",
    "MonthlySchedule",
    "SchedulerConfig",
]
