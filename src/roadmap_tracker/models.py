"""Data classes for the tracker domain model."""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Status(Enum):
    NOT_STARTED = "Not Started"
    ATTEMPTED = "Attempted"
    SOLVED = "Solved"


class Confidence(Enum):
    NONE = "None"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Priority(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    MUST_DO = "Must Do"


@dataclass(frozen=True)
class StudyItem:
    id: str
    month_id: str
    name: str = ""
    pattern: str = "General"
    difficulty: Difficulty = Difficulty.EASY
    priority: Priority = Priority.NORMAL
    status: Status = Status.NOT_STARTED
    confidence: Confidence = Confidence.NONE
    last_reviewed_at: Optional[datetime] = None
    scheduled_date: Optional[date] = None
    attempts: int = 0
    revision_count: int = 0
    notes: str = ""


@dataclass(frozen=True)
class MonthModule:
    id: str  # YYYY-MM
    name: str


@dataclass(frozen=True)
class PhaseConfig:
    id: int
    name: str
    start_date: date
    end_date: date  # inclusive
    duration: int
    focus: str
    goal: str

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class DailyCapacity:
    weekday: int
    weekend: int


@dataclass(frozen=True)
class RoadmapPlan:
    month_id: str
    total_days: int
    buffer_days: int
    working_days: int
    phases: tuple
    daily_capacity: DailyCapacity


@dataclass(frozen=True)
class DueEntry:
    item: StudyItem
    elapsed_days: int


@dataclass(frozen=True)
class ForecastEntry:
    item: StudyItem
    days_until_due: int


@dataclass(frozen=True)
class ReviewSchedule:
    due: list
    upcoming: list
