"""
Office-Day Scheduling Engine
============================
Greedy, balance-driven assignment of employees to office days for one month.

Steps:
    1. Eligible dates (working days only, unless configured otherwise)
    2. Pre-seed every employee's fixed days
    3. Rounds in shuffled order: each owed employee takes the least
       loaded eligible date they do not have yet (role minimums first)
    4. Post-pass rebalance of non-fixed assignments
    5. Capped quotas become warnings, impossible quotas an error
"""
import random
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple, Union

from officedays.models.calendar import days_in_month, eligible_days, in_month, validate_period
from officedays.models.config import SchedulerConfig
from officedays.models.employee import Employee
from officedays.models.schedule import MonthlySchedule
from officedays.solver.errors import (
    InfeasibleError,
    InvalidInputError,
    PartialSatisfaction,
    RoleCoverageGap,
)
from officedays.utils.logging_setup import SolverLogger, get_logger

logger = get_logger("officedays.solver.engine")

ScheduleWarning = Union[PartialSatisfaction, RoleCoverageGap]


@dataclass
class ScheduleResult:
    """A generated schedule with the warnings raised while building it."""
    schedule: MonthlySchedule
    warnings: List[ScheduleWarning] = field(default_factory=list)
    seed: Optional[int] = None  # None when an external rng was injected
    rounds: int = 0
    rebalance_moves: int = 0

    @property
    def partial(self) -> List[PartialSatisfaction]:
        return [w for w in self.warnings if isinstance(w, PartialSatisfaction)]

    @property
    def coverage_gaps(self) -> List[RoleCoverageGap]:
        return [w for w in self.warnings if isinstance(w, RoleCoverageGap)]


class _Board:
    """Working state of a single run: who is where, and day loads."""

    def __init__(self, days: Sequence[date]):
        self.days = list(days)
        self.on_day: Dict[date, Set[int]] = {d: set() for d in days}
        self.roles: Dict[date, Counter] = defaultdict(Counter)
        self.taken: Dict[int, Set[date]] = defaultdict(set)

    def headcount(self, day: date) -> int:
        return len(self.on_day[day])

    def add(self, emp: Employee, day: date) -> None:
        self.on_day.setdefault(day, set()).add(emp.id)
        self.roles[day][emp.role] += 1
        self.taken[emp.id].add(day)

    def move(self, emp: Employee, src: date, dst: date) -> None:
        self.on_day[src].discard(emp.id)
        self.roles[src][emp.role] -= 1
        self.taken[emp.id].discard(src)
        self.add(emp, dst)


def generate(
    employees: Sequence[Employee],
    month: int,
    year: int,
    config: Optional[SchedulerConfig] = None,
    rng: Optional[random.Random] = None,
) -> ScheduleResult:
    """
    Build the office schedule for ``month``/``year``.

    Args:
        employees: Employees to schedule (not modified)
        month: Target month, 1..12
        year: Target year
        config: Scheduler options (defaults: working days only, random seed)
        rng: Random source for tie-breaking; overrides ``config.random_seed``

    Returns:
        ScheduleResult with the schedule and any PartialSatisfaction or
        RoleCoverageGap warnings

    Raises:
        InvalidInputError: malformed employees or period
        InfeasibleError: required days exceed the days of the month
    """
    config = config or SchedulerConfig()
    team, fixed = _check_input(employees, month, year)

    seed = None
    if rng is None:
        seed = config.random_seed if config.random_seed is not None else random.randrange(2 ** 32)
        rng = random.Random(seed)

    slog = SolverLogger(logger.name)
    slog.phase(f"Schedule {year}-{month:02d}")
    days = eligible_days(month, year, config.working_days_only)
    slog.step(f"{len(team)} employees, {len(days)} eligible dates (working_days_only={config.working_days_only})")

    board = _Board(days)
    remaining = _seed_fixed_days(board, team, fixed, len(days), slog)

    rounds = _assign_rounds(board, team, remaining, config, rng, slog)
    moves = _rebalance(board, team, fixed, config, rng, slog)
    slog.step(f"{rounds} rounds, {moves} rebalance moves")

    warnings: List[ScheduleWarning] = []
    shortfalls: Dict[int, int] = {}
    month_length = days_in_month(month, year)
    for emp in team:
        realized = len(board.taken[emp.id])
        if realized >= emp.required_days:
            continue
        if emp.required_days > month_length:
            shortfalls[emp.id] = emp.required_days - realized
        else:
            warnings.append(PartialSatisfaction(emp.id, emp.required_days, realized))
    if shortfalls:
        raise InfeasibleError(shortfalls)

    warnings.extend(_coverage_gaps(board, config, slog))

    schedule = MonthlySchedule(
        month=month,
        year=year,
        assignments={d: frozenset(ids) for d, ids in board.on_day.items()},
    )
    return ScheduleResult(
        schedule=schedule,
        warnings=warnings,
        seed=seed,
        rounds=rounds,
        rebalance_moves=moves,
    )


def _check_input(
    employees: Sequence[Employee], month: int, year: int
) -> Tuple[Tuple[Employee, ...], Dict[int, FrozenSet[date]]]:
    """Validate the run inputs and resolve each employee's fixed dates."""
    try:
        validate_period(month, year)
    except ValueError as e:
        raise InvalidInputError(None, str(e)) from e

    team = tuple(employees)
    if not team:
        raise InvalidInputError(None, "no employees to schedule")

    fixed: Dict[int, FrozenSet[date]] = {}
    for emp in team:
        if emp.id in fixed:
            raise InvalidInputError(emp.id, "duplicate employee id")
        required = emp.required_days
        if isinstance(required, bool) or not isinstance(required, int):
            raise InvalidInputError(emp.id, f"required_days must be an integer, got {required!r}")
        if required < 0:
            raise InvalidInputError(emp.id, f"required_days cannot be negative ({required})")
        for day in emp.fixed_days:
            if not isinstance(day, date):
                raise InvalidInputError(emp.id, f"fixed day {day!r} is not a date")
            if not in_month(day, month, year):
                raise InvalidInputError(
                    emp.id, f"fixed day {day.isoformat()} is outside {year}-{month:02d}"
                )
        fixed[emp.id] = emp.fixed_dates(month, year)
    return team, fixed


def _seed_fixed_days(
    board: _Board,
    team: Sequence[Employee],
    fixed: Dict[int, FrozenSet[date]],
    eligible_count: int,
    slog: SolverLogger,
) -> Dict[int, int]:
    """Place fixed days and return the non-fixed days still owed per employee."""
    eligible = set(board.days)
    remaining = {}
    for emp in team:
        for day in sorted(fixed[emp.id]):
            board.add(emp, day)
        # Fixed days outside the eligible set still count as realized days
        outside = len(fixed[emp.id] - eligible)
        target = min(emp.required_days, eligible_count + outside)
        remaining[emp.id] = max(0, target - len(fixed[emp.id]))
        if len(fixed[emp.id]) > emp.required_days:
            slog.detail(f"employee {emp.id}", f"{len(fixed[emp.id])} fixed days exceed {emp.required_days} required")
    return remaining


def _assign_rounds(
    board: _Board,
    team: Sequence[Employee],
    remaining: Dict[int, int],
    config: SchedulerConfig,
    rng: random.Random,
    slog: SolverLogger,
) -> int:
    """One assignment per owed employee per round, until nobody is owed or stuck."""
    order = list(team)
    rounds = 0
    while any(remaining[e.id] > 0 for e in team):
        rounds += 1
        rng.shuffle(order)
        slog.enter(f"round {rounds}")
        progressed = False
        for emp in order:
            if remaining[emp.id] <= 0:
                continue
            day = _pick_day(board, emp, config, rng)
            if day is None:
                continue
            board.add(emp, day)
            remaining[emp.id] -= 1
            progressed = True
            slog.detail(f"employee {emp.id}", day.isoformat())
        slog.exit()
        if not progressed:
            break
    return rounds


def _pick_day(
    board: _Board, emp: Employee, config: SchedulerConfig, rng: random.Random
) -> Optional[date]:
    """Least loaded eligible date not yet taken by ``emp``; ties at random."""
    taken = board.taken[emp.id]
    candidates = [d for d in board.days if d not in taken]
    if not candidates:
        return None

    minimum = config.minimum_for(emp.role)
    if minimum:
        short = [d for d in candidates if board.roles[d][emp.role] < minimum]
        if short:
            candidates = short

    low = min(board.headcount(d) for d in candidates)
    return rng.choice([d for d in candidates if board.headcount(d) == low])


def _rebalance(
    board: _Board,
    team: Sequence[Employee],
    fixed: Dict[int, FrozenSet[date]],
    config: SchedulerConfig,
    rng: random.Random,
    slog: SolverLogger,
) -> int:
    """
    Move non-fixed assignments from the fullest to the emptiest dates while
    their headcounts differ by two or more. Each move lowers the sum of
    squared headcounts, so the loop terminates.
    """
    if not board.days:
        return 0
    by_id = {e.id: e for e in team}
    moves = 0
    while True:
        loads = {d: board.headcount(d) for d in board.days}
        high, low = max(loads.values()), min(loads.values())
        if high - low <= 1:
            return moves
        move = _find_move(board, by_id, fixed, config, loads, high, low, rng)
        if move is None:
            return moves
        emp, src, dst = move
        board.move(emp, src, dst)
        moves += 1
        slog.detail("rebalance", f"employee {emp.id}: {src.isoformat()} -> {dst.isoformat()}")


def _find_move(board, by_id, fixed, config, loads, high, low, rng):
    for src in [d for d in board.days if loads[d] == high]:
        for dst in [d for d in board.days if loads[d] == low]:
            movable = []
            for emp_id in sorted(board.on_day[src]):
                emp = by_id[emp_id]
                if src in fixed[emp_id] or dst in board.taken[emp_id]:
                    continue
                minimum = config.minimum_for(emp.role)
                if minimum and board.roles[src][emp.role] <= minimum:
                    continue
                movable.append(emp)
            if movable:
                return rng.choice(movable), src, dst
    return None


def _coverage_gaps(board: _Board, config: SchedulerConfig, slog: SolverLogger) -> List[RoleCoverageGap]:
    gaps = []
    for day in board.days:
        for role, minimum in sorted(config.role_minimums.items()):
            actual = board.roles[day][role]
            if actual < minimum:
                gaps.append(RoleCoverageGap(day=day, role=role, required=minimum, actual=actual))
    if gaps:
        slog.step(f"{len(gaps)} role coverage gaps")
    return gaps
