"""Scheduler configuration."""
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class SchedulerConfig:
    """Configuration for the office-day scheduler."""

    # Only Mon-Fri are eligible for non-fixed assignment
    working_days_only: bool = True

    # Seed for tie-breaking; None = fresh randomness every call
    random_seed: Optional[int] = None

    # Minimum daily headcount per role over eligible dates
    role_minimums: Dict[str, int] = field(default_factory=dict)

    def minimum_for(self, role: str) -> int:
        return self.role_minimums.get(role, 0)

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "working_days_only": self.working_days_only,
            "random_seed": self.random_seed,
            "role_minimums": dict(self.role_minimums),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "SchedulerConfig":
        """Create from dictionary, ignoring unknown keys."""
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key):
                if key == "role_minimums":
                    value = {str(k): int(v) for k, v in (value or {}).items()}
                setattr(cfg, key, value)
        return cfg
