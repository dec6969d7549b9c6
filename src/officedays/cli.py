from __future__ import annotations

import argparse
import json
import logging
from typing import Dict, List

from pydantic import ValidationError

from officedays.io import export_filename, export_to_csv, export_to_excel, load_employees
from officedays.models.validated import ValidatedSchedulerConfig
from officedays.solver import (
    InfeasibleError,
    InvalidInputError,
    calculate_statistics,
    generate,
    validate_schedule,
)
from officedays.utils.logging_setup import setup_logging
from officedays.utils.structured_logging import (
    bind_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
)

EXIT_OK = 0
EXIT_INVALID = 2
EXIT_INFEASIBLE = 3


def _parse_role_minimums(values: List[str]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for item in values:
        role, sep, count = item.rpartition("=")
        if not sep or not role.strip():
            raise argparse.ArgumentTypeError(f"--role-min expects ROLE=N, got {item!r}")
        try:
            out[role.strip()] = int(count)
        except ValueError:
            raise argparse.ArgumentTypeError(f"--role-min expects ROLE=N, got {item!r}") from None
    return out


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="officedays", description="Generate a monthly office-day schedule")
    p.add_argument("--employees", required=True, help="Employee list (JSON array)")
    p.add_argument("--month", type=int, required=True, help="Target month (1-12)")
    p.add_argument("--year", type=int, required=True, help="Target year")
    p.add_argument("--all-days", dest="working_days_only", action="store_false",
                   help="Allow weekends for non-fixed days")
    p.add_argument("--seed", type=int, default=None, help="Random seed (reproducible schedule)")
    p.add_argument("--role-min", action="append", default=[], metavar="ROLE=N",
                   help="Minimum daily headcount for a role (repeatable)")
    p.add_argument("--xlsx", nargs="?", const="", default=None,
                   help="Write an Excel workbook (default name if no path given)")
    p.add_argument("--csv", default=None, help="Write the schedule grid as CSV")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON output")
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    level = {0: "WARNING", 1: "INFO", 2: "DEBUG"}.get(args.verbose, "TRACE")
    setup_logging(level=level, log_file=args.log_file)
    configure_structlog(json_output=args.json_out, level=logging.INFO if args.verbose else logging.WARNING)
    log = get_structured_logger("officedays.cli")
    bind_context(month=args.month, year=args.year)

    try:
        try:
            config = ValidatedSchedulerConfig(
                working_days_only=args.working_days_only,
                random_seed=args.seed,
                role_minimums=_parse_role_minimums(args.role_min),
            ).to_dataclass()
        except (ValidationError, argparse.ArgumentTypeError) as e:
            p.error(str(e))

        try:
            employees = load_employees(args.employees)
        except (OSError, ValueError) as e:
            log.error("employee_load_failed", path=args.employees, error=str(e))
            return EXIT_INVALID

        try:
            result = generate(employees, args.month, args.year, config)
        except InvalidInputError as e:
            log.error("invalid_input", employee_id=e.employee_id, reason=e.reason)
            return EXIT_INVALID
        except InfeasibleError as e:
            log.error("infeasible", shortfalls=e.shortfalls)
            if args.json_out:
                print(json.dumps({"error": "infeasible", "shortfalls": e.shortfalls}, indent=2))
            return EXIT_INFEASIBLE

        schedule = result.schedule
        for warning in result.warnings:
            log.warning("schedule_warning", detail=str(warning))
        log.info("schedule_generated", employees=len(employees), seed=result.seed,
                 rounds=result.rounds, rebalance_moves=result.rebalance_moves)

        validation = validate_schedule(schedule, employees, config)
        for violation in validation.get_critical_violations():
            log.error("validation_failed", type=violation.type, detail=violation.message)

        if args.xlsx is not None:
            path = args.xlsx or export_filename(args.month, args.year, "xlsx")
            export_to_excel(schedule, employees, path)
            log.info("excel_written", path=path)
        if args.csv:
            export_to_csv(schedule, employees, args.csv)
            log.info("csv_written", path=args.csv)

        if args.json_out:
            payload = {
                "summary": schedule.summary(),
                "seed": result.seed,
                "schedule": schedule.to_dict(),
                "warnings": [str(w) for w in result.warnings],
                "validation": validation.as_dict(),
            }
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        else:
            stats = calculate_statistics(schedule, employees)
            print("Summary:")
            for k, v in schedule.summary().items():
                print(f" - {k}: {v}")
            print(f" - seed: {result.seed}")
            print(f" - average_daily_attendance: {stats.average_daily_attendance:.2f}")
            print(f" - valid: {validation.is_valid}")
            for warning in result.warnings:
                print(f" ! {warning}")
        return EXIT_OK
    finally:
        clear_context()


if __name__ == "__main__":
    raise SystemExit(main())
