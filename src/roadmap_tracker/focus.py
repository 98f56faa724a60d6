"""Phase-aware "today's focus" selection for the dashboard."""
import random
from dataclasses import dataclass
from datetime import date, datetime

from roadmap_tracker.config import DEFAULT_CONFIG, SchedulingConfig
from roadmap_tracker.models import Confidence, RoadmapPlan, Status
from roadmap_tracker.revision import elapsed_days
from roadmap_tracker.roadmap import current_phase


@dataclass(frozen=True)
class Focus:
    phase: int
    title: str
    subtitle: str
    items: list


def _solve_queue(items: list, now: date) -> list:
    today = now.date() if isinstance(now, datetime) else now
    return [i for i in items if i.scheduled_date == today and i.status is not Status.SOLVED]


def _revision_queue(items: list, limit: int) -> list:
    shaky = [
        i for i in items
        if i.status is Status.SOLVED and i.confidence in (Confidence.WEAK, Confidence.MEDIUM)
    ]
    shaky.sort(key=lambda i: i.confidence is not Confidence.WEAK)
    return shaky[:limit]


def _polish_set(items: list, now: datetime, limit: int, config: SchedulingConfig, seed: int | None) -> list:
    solved = [i for i in items if i.status is Status.SOLVED]
    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(solved)
        return solved[:limit]

    def score(item):
        bonus = config.weak_bonus if item.confidence is Confidence.WEAK else 0
        age = elapsed_days(item.last_reviewed_at, now) if item.last_reviewed_at else 0
        return bonus + age

    return sorted(solved, key=score, reverse=True)[:limit]


def todays_focus(
    items: list,
    plan: RoadmapPlan,
    now: datetime,
    config: SchedulingConfig = DEFAULT_CONFIG,
    seed: int | None = None,
) -> Focus:
    phase = current_phase(plan, now)
    if phase == 1:
        return Focus(1, "Phase 1: Solve Queue", "First pass solving. Don't overthink.",
                     _solve_queue(items, now))
    if phase == 2:
        return Focus(2, "Phase 2: Pattern Revision", "Focus on Weak/Medium problems. No peeking.",
                     _revision_queue(items, config.dashboard_limit))
    return Focus(3, "Phase 3: Final Polish", "Mixed set. Timer on.",
                 _polish_set(items, now, config.dashboard_limit, config, seed))
