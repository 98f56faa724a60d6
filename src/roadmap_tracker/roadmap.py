"""Monthly roadmap: three study phases plus buffer days."""
import math
from datetime import date, datetime, timedelta

from loguru import logger

from roadmap_tracker.config import DEFAULT_CONFIG, SchedulingConfig
from roadmap_tracker.models import DailyCapacity, PhaseConfig, RoadmapPlan
from roadmap_tracker.months import days_in_month, parse_month_id

PHASE_TEXT = {
    1: ("First Pass (Solving)", "Solve all questions. Don't overthink.", "Attempt 100% of questions."),
    2: ("Pattern Revision", "Revise Weak/Medium by pattern.", "Convert Weak -> Medium/Strong."),
    3: ("Final Polish", "Mixed sets & Mock interviews.", "Speed & Confidence Lock-in."),
}


def buffer_days_for(total_days: int, item_count: int, config: SchedulingConfig = DEFAULT_CONFIG) -> int:
    if item_count > config.high_load_threshold:
        return config.high_load_buffer
    if total_days == config.short_month_days:
        return config.short_month_buffer
    return config.default_buffer


def allocate_phases(working_days: int, config: SchedulingConfig = DEFAULT_CONFIG) -> tuple[int, int, int]:
    """Split working days into (phase1, phase2, phase3) lengths.

    Revision and polish get their fixed lengths unless the month is too short to
    hold them, in which case both drop to the minimum. Callers guarantee
    working_days >= 3 * min_phase_days, so phase 1 is never empty.
    """
    p2 = config.phase2_fixed_days
    p3 = config.phase3_fixed_days
    if working_days <= p2 + p3:
        logger.warning("Only {} working days, shrinking revision and polish", working_days)
        p2 = p3 = config.min_phase_days
    return working_days - p2 - p3, p2, p3


def compute_plan(month_id: str, item_count: int, config: SchedulingConfig = DEFAULT_CONFIG) -> RoadmapPlan:
    """Build the roadmap for a month holding item_count problems.

    Deterministic: the same arguments always produce an equal plan.
    """
    year, month = parse_month_id(month_id)
    total_days = days_in_month(year, month)
    count = max(item_count, 1)

    buffer_days = buffer_days_for(total_days, count, config)
    working_days = total_days - buffer_days
    min_working = 3 * config.min_phase_days
    if working_days < min_working:
        logger.warning(
            "Degenerate allocation for {}: {} working days, borrowing from buffer", month_id, working_days
        )
        buffer_days = max(0, total_days - min_working)
        working_days = total_days - buffer_days

    durations = allocate_phases(working_days, config)

    phases = []
    start = date(year, month, 1)
    last_day = date(year, month, total_days)
    for phase_id, duration in enumerate(durations, start=1):
        end = start + timedelta(days=duration - 1)
        if phase_id == 3:
            end = last_day  # polish absorbs the buffer
        name, focus, goal = PHASE_TEXT[phase_id]
        phases.append(PhaseConfig(
            id=phase_id, name=name, start_date=start, end_date=end,
            duration=duration, focus=focus, goal=goal,
        ))
        start = end + timedelta(days=1)

    base_rate = math.ceil(count / durations[0])
    weekday = max(1, math.floor(base_rate * config.weekday_factor))
    weekend = math.ceil(weekday * config.weekend_factor)

    logger.debug(
        "Plan {}: {} days, buffer {}, phases {}, capacity {}/{}",
        month_id, total_days, buffer_days, durations, weekday, weekend,
    )
    return RoadmapPlan(
        month_id=month_id,
        total_days=total_days,
        buffer_days=buffer_days,
        working_days=working_days,
        phases=tuple(phases),
        daily_capacity=DailyCapacity(weekday=weekday, weekend=weekend),
    )


def current_phase(plan: RoadmapPlan, now: date) -> int:
    """Phase id (1-3) active on `now`; clamps to 1 before the cycle and 3 after it."""
    today = now.date() if isinstance(now, datetime) else now
    for phase in plan.phases:
        if phase.contains(today):
            return phase.id
    if today > plan.phases[-1].end_date:
        return 3
    return 1
