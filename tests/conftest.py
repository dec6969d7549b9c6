"""Pytest configuration and fixtures."""
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from officedays.models.config import SchedulerConfig
from officedays.models.employee import Employee, Sex


# June 2023: 30 days, starts on a Thursday, 22 weekdays
JUNE_2023 = (6, 2023)
# February 2023: 28 days, starts on a Wednesday, 20 weekdays
FEB_2023 = (2, 2023)


@pytest.fixture
def sample_employees():
    """A small team with mixed roles and obligations."""
    return [
        Employee(id=1, name="Alice", sex=Sex.FEMALE, role="Backend Engineer", required_days=8),
        Employee(id=2, name="Bob", sex=Sex.MALE, role="Frontend Engineer", required_days=8),
        Employee(id=3, name="Chloe", sex=Sex.FEMALE, role="Project Manager", required_days=12,
                 fixed_days={date(2023, 6, 5), date(2023, 6, 12)}),
        Employee(id=4, name="Dan", sex=Sex.MALE, role="Data Analyst", required_days=4),
        Employee(id=5, name="Erin", sex=Sex.FEMALE, role="HR", required_days=0),
    ]


@pytest.fixture
def seeded_config():
    """Deterministic configuration."""
    return SchedulerConfig(random_seed=42)


@pytest.fixture
def employees_json(tmp_path):
    """Path to an employee JSON file in the import format."""
    path = tmp_path / "employees.json"
    path.write_text(
        """[
  {"name": "Alice", "sex": "Female", "role": "Backend Engineer", "required_days": 8,
   "fixed_days": ["2023-06-05"], "is_nsp": false},
  {"name": "Bob", "sex": "male", "role": "QA Engineer", "required_days": 6,
   "fixed_days": ["Friday"], "is_nsp": true},
  {"name": "Chloe", "sex": "Female", "role": "Project Manager", "required_days": 10,
   "fixed_days": []}
]""",
        encoding="utf-8",
    )
    return path
