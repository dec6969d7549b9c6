"""
Property-Based Tests with Hypothesis
====================================
Engine invariants for arbitrary valid teams and months.
"""
from datetime import date

import pytest
from hypothesis import given, settings, strategies as st

from officedays.models.calendar import days_in_month, eligible_days, in_month
from officedays.models.config import SchedulerConfig
from officedays.models.employee import Employee
from officedays.solver.engine import generate
from officedays.solver.errors import InfeasibleError
from officedays.solver.validation import validate_schedule

months = st.tuples(st.integers(min_value=1, max_value=12), st.integers(min_value=1990, max_value=2040))


@st.composite
def teams(draw, fixed=True):
    """Employees whose quotas fit the month's weekdays."""
    month, year = draw(months)
    weekdays = eligible_days(month, year, working_days_only=True)
    size = draw(st.integers(min_value=1, max_value=12))
    team = []
    for i in range(size):
        fixed_days = set()
        if fixed:
            fixed_days = set(draw(st.lists(st.sampled_from(weekdays), max_size=3)))
        required = draw(st.integers(min_value=len(fixed_days), max_value=len(weekdays)))
        team.append(Employee(id=i, name=f"E{i}", required_days=required, fixed_days=fixed_days))
    return month, year, team


class TestEngineProperties:
    """Invariants that hold for every feasible run."""

    @settings(max_examples=60, deadline=None)
    @given(data=teams(), seed=st.integers(min_value=0, max_value=2 ** 32 - 1))
    def test_fixed_days_and_quotas(self, data, seed):
        month, year, team = data
        result = generate(team, month, year, SchedulerConfig(random_seed=seed))
        schedule = result.schedule

        assert result.warnings == []
        for emp in team:
            for day in emp.fixed_days:
                assert emp.id in schedule.employees_on(day)
            assert schedule.count_for(emp.id) == emp.required_days
        assert all(in_month(d, month, year) for d in schedule.dates)
        assert validate_schedule(schedule, team).is_valid

    @settings(max_examples=60, deadline=None)
    @given(data=teams(fixed=False), seed=st.integers(min_value=0, max_value=2 ** 32 - 1))
    def test_balance_bound_without_fixed_days(self, data, seed):
        month, year, team = data
        schedule = generate(team, month, year, SchedulerConfig(random_seed=seed)).schedule
        loads = [len(schedule.employees_on(d)) for d in eligible_days(month, year)]
        assert max(loads) - min(loads) <= 1

    @settings(max_examples=30, deadline=None)
    @given(data=teams(), seed=st.integers(min_value=0, max_value=1000))
    def test_determinism_under_seed(self, data, seed):
        month, year, team = data
        a = generate(team, month, year, SchedulerConfig(random_seed=seed))
        b = generate(team, month, year, SchedulerConfig(random_seed=seed))
        assert a.schedule.to_dict() == b.schedule.to_dict()

    @settings(max_examples=30, deadline=None)
    @given(month_year=months, extra=st.integers(min_value=1, max_value=40))
    def test_over_month_length_is_infeasible(self, month_year, extra):
        month, year = month_year
        length = days_in_month(month, year)
        team = [Employee(id=1, name="A", required_days=length + extra)]
        with pytest.raises(InfeasibleError) as exc_info:
            generate(team, month, year, SchedulerConfig(working_days_only=False, random_seed=0))
        assert exc_info.value.shortfalls == {1: extra}


def test_month_boundaries_sanity():
    assert date(2024, 2, 29) in eligible_days(2, 2024, working_days_only=False)
