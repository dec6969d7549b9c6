"""
Pydantic Validated Models
=========================
Strict validation layer for configuration coming from outside the process
(CLI flags, JSON settings files).

Usage:
    from officedays.models.validated import ValidatedSchedulerConfig

    config = ValidatedSchedulerConfig(working_days_only=False, random_seed=7)
    solver_config = config.to_dataclass()

Note: the engine itself takes the plain dataclass SchedulerConfig.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from officedays.models.config import SchedulerConfig


class ValidatedSchedulerConfig(BaseModel):
    """Pydantic-validated scheduler configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    working_days_only: bool = Field(default=True, description="Only Mon-Fri for non-fixed days")
    random_seed: Optional[int] = Field(default=None, ge=0, description="Tie-breaking seed")
    role_minimums: Dict[str, int] = Field(default_factory=dict)

    @field_validator("role_minimums")
    @classmethod
    def validate_role_minimums(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Role names must be non-empty and minimums non-negative."""
        cleaned = {}
        for role, minimum in v.items():
            role = role.strip()
            if not role:
                raise ValueError("role name cannot be empty")
            if minimum < 0:
                raise ValueError(f"minimum for role '{role}' cannot be negative")
            cleaned[role] = minimum
        return cleaned

    def to_dataclass(self) -> SchedulerConfig:
        """Convert to the dataclass used by the engine."""
        return SchedulerConfig(
            working_days_only=self.working_days_only,
            random_seed=self.random_seed,
            role_minimums=dict(self.role_minimums),
        )

    @classmethod
    def from_dataclass(cls, config: SchedulerConfig) -> "ValidatedSchedulerConfig":
        return cls(
            working_days_only=config.working_days_only,
            random_seed=config.random_seed,
            role_minimums=dict(config.role_minimums),
        )
