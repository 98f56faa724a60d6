"""Spaced-review queue: due detection, ranking and review submission."""
from dataclasses import replace
from datetime import date, datetime, time, timedelta

from loguru import logger

from roadmap_tracker.config import DEFAULT_CONFIG, SchedulingConfig
from roadmap_tracker.models import (
    Confidence, DueEntry, ForecastEntry, ReviewSchedule, Status, StudyItem,
)

ONE_DAY = timedelta(days=1)


def as_datetime(moment: date) -> datetime:
    """Plain dates count from midnight."""
    if isinstance(moment, datetime):
        return moment
    return datetime.combine(moment, time())


def elapsed_days(last_reviewed_at: date, now: date) -> int:
    """Whole days since the last review, by raw time subtraction (floored)."""
    return (as_datetime(now) - as_datetime(last_reviewed_at)) // ONE_DAY


def schedule(items: list, now: datetime, config: SchedulingConfig = DEFAULT_CONFIG) -> ReviewSchedule:
    """Split solved, dated items into due entries and upcoming forecast entries.

    Unsolved items and items never reviewed are left out of both lists.
    Neither list is ordered here.
    """
    due, upcoming = [], []
    for item in items:
        if item.status is not Status.SOLVED or item.last_reviewed_at is None:
            continue
        elapsed = elapsed_days(item.last_reviewed_at, now)
        interval = config.interval_for(item.confidence)
        if elapsed >= interval:
            due.append(DueEntry(item=item, elapsed_days=elapsed))
        else:
            upcoming.append(ForecastEntry(item=item, days_until_due=max(1, interval - elapsed)))
    return ReviewSchedule(due=due, upcoming=upcoming)


def priority_score(entry: DueEntry, config: SchedulingConfig = DEFAULT_CONFIG) -> int:
    bonus = config.weak_bonus if entry.item.confidence is Confidence.WEAK else 0
    return bonus + entry.elapsed_days


def rank_due(entries: list, config: SchedulingConfig = DEFAULT_CONFIG) -> list:
    # sorted() is stable with reverse=True, ties keep collection order
    return sorted(entries, key=lambda e: priority_score(e, config), reverse=True)


def rank_forecast(entries: list) -> list:
    return sorted(entries, key=lambda e: e.days_until_due)


def due_items(items: list, now: datetime, config: SchedulingConfig = DEFAULT_CONFIG) -> list[StudyItem]:
    """Items due for review now, most urgent first."""
    ranked = rank_due(schedule(items, now, config).due, config)
    return [entry.item for entry in ranked]


def forecast(
    items: list,
    now: datetime,
    limit: int | None = None,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> list[ForecastEntry]:
    """Upcoming reviews, soonest first, truncated to `limit` (config.forecast_limit by default)."""
    if limit is None:
        limit = config.forecast_limit
    return rank_forecast(schedule(items, now, config).upcoming)[:limit]


def submit_review(item: StudyItem, new_confidence: Confidence, now: datetime) -> StudyItem:
    """Record a review: new rating, bumped counters and a reset review clock."""
    return replace(
        item,
        confidence=new_confidence,
        attempts=item.attempts + 1,
        revision_count=item.revision_count + 1,
        last_reviewed_at=as_datetime(now),
    )


def apply_review(items: list, item_id: str, new_confidence: Confidence, now: datetime) -> list[StudyItem]:
    """Return a copy of `items` with one item reviewed. Raises KeyError for an unknown id."""
    if not any(item.id == item_id for item in items):
        raise KeyError(item_id)
    logger.debug("Review {} -> {}", item_id, new_confidence.value)
    return [
        submit_review(item, new_confidence, now) if item.id == item_id else item
        for item in items
    ]


def mark_status(item: StudyItem, status: Status, now: datetime) -> StudyItem:
    """Change an item's status; solving it starts the review clock at Medium confidence."""
    if status is Status.SOLVED:
        return replace(item, status=status, last_reviewed_at=as_datetime(now), confidence=Confidence.MEDIUM)
    return replace(item, status=status)
