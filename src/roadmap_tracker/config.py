"""Scheduling constants for the roadmap planner and the revision queue."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from roadmap_tracker.models import Confidence

DEFAULT_DB_PATH = os.getenv(
    "ROADMAP_TRACKER_DB", str(Path.home() / ".roadmap_tracker" / "tracker.db")
)


def _default_intervals() -> MappingProxyType:
    return MappingProxyType({Confidence.WEAK: 1, Confidence.MEDIUM: 3, Confidence.STRONG: 7})


@dataclass(frozen=True)
class SchedulingConfig:
    # Buffer rule: short (28-day) months and heavy months get a single buffer day
    short_month_days: int = 28
    short_month_buffer: int = 1
    default_buffer: int = 2
    high_load_threshold: int = 100
    high_load_buffer: int = 1

    # Phase allocation
    phase2_fixed_days: int = 4
    phase3_fixed_days: int = 2
    min_phase_days: int = 1

    # Daily capacity
    weekday_factor: float = 0.9
    weekend_factor: float = 1.4

    # Spaced review
    interval_map: MappingProxyType = field(default_factory=_default_intervals)
    default_interval: int = 1
    weak_bonus: int = 100

    # Presentation limits
    forecast_limit: int = 3
    dashboard_limit: int = 5
    mastery_threshold: float = 80.0

    def __post_init__(self):
        # freeze maps handed in by callers too
        if not isinstance(self.interval_map, MappingProxyType):
            object.__setattr__(self, "interval_map", MappingProxyType(dict(self.interval_map)))

    def interval_for(self, confidence: Confidence) -> int:
        """Review interval in days for a confidence rating."""
        return self.interval_map.get(confidence, self.default_interval)


DEFAULT_CONFIG = SchedulingConfig()
