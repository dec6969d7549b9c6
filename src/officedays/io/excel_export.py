"""Excel and CSV export for monthly schedules."""
import io
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from officedays.models.calendar import Weekday, month_name
from officedays.models.employee import Employee
from officedays.models.schedule import MonthlySchedule
from officedays.solver.stats import calculate_statistics, employee_stats_dataframe

HEADER_FILL = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
PRESENT_FILL = PatternFill(start_color="DDEEFF", end_color="DDEEFF", fill_type="solid")
WEEKEND_FILL = PatternFill(start_color="EEEEEE", end_color="EEEEEE", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)
CENTER = Alignment(horizontal="center", vertical="center")


def export_filename(month: int, year: int, ext: str = "xlsx") -> str:
    """Suggested file name, e.g. office_schedule_March_2025.xlsx."""
    return f"office_schedule_{month_name(month)}_{year}.{ext}"


def _ordered(employees: Sequence[Employee]) -> List[Employee]:
    return sorted(employees, key=lambda e: (e.name.lower(), e.id))


def build_grid(schedule: MonthlySchedule, employees: Sequence[Employee]) -> pd.DataFrame:
    """Name column plus one "X"/"" column per scheduled date."""
    ordered = _ordered(employees)
    rows = []
    for emp in ordered:
        row = {"Name": emp.name}
        for day in schedule.dates:
            row[day.isoformat()] = "X" if emp.id in schedule.employees_on(day) else ""
        rows.append(row)
    return pd.DataFrame(rows, columns=["Name"] + [d.isoformat() for d in schedule.dates])


def export_to_excel(
    schedule: MonthlySchedule,
    employees: Sequence[Employee],
    output: Union[str, Path, io.BytesIO],
) -> None:
    """
    Export schedule to an Excel workbook.

    Sheets:
        Schedule: weekday and date headers, one row per employee with "X"
                  marks, and a headcount row
        Summary: required vs assigned days per employee
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Schedule"

    dates = schedule.dates
    title = f"Office schedule, {month_name(schedule.month)} {schedule.year}"
    ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=13)

    # Header rows: weekday (row 2), date (row 3)
    for r, label in ((2, ""), (3, "Name")):
        cell = ws.cell(row=r, column=1, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for c, day in enumerate(dates, start=2):
        for r, value in ((2, Weekday.of(day).short), (3, day.day)):
            cell = ws.cell(row=r, column=c, value=value)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = CENTER

    ordered = _ordered(employees)
    for r, emp in enumerate(ordered, start=4):
        ws.cell(row=r, column=1, value=emp.name).border = BORDER_THIN
        for c, day in enumerate(dates, start=2):
            present = emp.id in schedule.employees_on(day)
            cell = ws.cell(row=r, column=c, value="X" if present else "")
            cell.alignment = CENTER
            cell.border = BORDER_THIN
            if present:
                cell.fill = PRESENT_FILL
            elif not Weekday.of(day).is_workday:
                cell.fill = WEEKEND_FILL

    total_row = len(ordered) + 4
    ws.cell(row=total_row, column=1, value="Headcount").font = Font(bold=True)
    for c, day in enumerate(dates, start=2):
        cell = ws.cell(row=total_row, column=c, value=len(schedule.employees_on(day)))
        cell.font = Font(bold=True)
        cell.alignment = CENTER
        cell.border = BORDER_THIN

    ws.column_dimensions["A"].width = 24
    for c in range(2, len(dates) + 2):
        ws.column_dimensions[get_column_letter(c)].width = 5
    ws.freeze_panes = "B4"

    # ========== Summary Sheet ==========
    ws_sum = wb.create_sheet("Summary")
    stats = calculate_statistics(schedule, employees)
    table = employee_stats_dataframe(stats)
    for j, col in enumerate(table.columns, start=1):
        ws_sum.cell(row=1, column=j, value=col).font = Font(bold=True)
    for i in range(len(table)):
        for j in range(len(table.columns)):
            value = table.iat[i, j]
            ws_sum.cell(row=2 + i, column=1 + j, value=value.item() if hasattr(value, "item") else value)
    footer = len(table) + 3
    ws_sum.cell(row=footer, column=1, value="Average daily attendance").font = Font(bold=True)
    ws_sum.cell(row=footer, column=2, value=round(stats.average_daily_attendance, 2))
    for i in range(1, len(table.columns) + 1):
        ws_sum.column_dimensions[get_column_letter(i)].width = 16
    ws_sum.freeze_panes = "A2"

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))


def export_to_csv(
    schedule: MonthlySchedule,
    employees: Sequence[Employee],
    output: Union[str, Path, io.StringIO],
) -> None:
    """Export the grid to CSV, with a headcount row under the header."""
    grid = build_grid(schedule, employees)
    counts = {"Name": ""}
    counts.update({d.isoformat(): len(schedule.employees_on(d)) for d in schedule.dates})
    df = pd.concat([pd.DataFrame([counts], columns=grid.columns), grid], ignore_index=True)
    if isinstance(output, io.StringIO):
        df.to_csv(output, index=False)
    else:
        df.to_csv(str(output), index=False)
