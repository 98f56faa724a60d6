# tests/test_integration.py
"""End-to-end test of a month: plan, solve, review, forecast."""
from datetime import date, datetime, timedelta

from roadmap_tracker.db import add_item, get_current_month_id, init_db, load_items, save_item
from roadmap_tracker.focus import todays_focus
from roadmap_tracker.models import Confidence, Status
from roadmap_tracker.revision import apply_review, due_items, forecast, mark_status
from roadmap_tracker.roadmap import compute_plan, current_phase


def test_month_workflow(tmp_db):
    init_db(tmp_db)
    start = datetime(2024, 2, 1, 20, 0)
    month_id = get_current_month_id(tmp_db, start.date())
    assert month_id == "2024-02"

    for n in range(50):
        add_item(tmp_db, month_id, f"Problem {n}", scheduled_date=date(2024, 2, 1 + n % 21))
    items = load_items(tmp_db, month_id)

    plan = compute_plan(month_id, len(items))
    assert current_phase(plan, start) == 1
    focus = todays_focus(items, plan, start)
    assert len(focus.items) == 3  # problems 0, 21, 42

    # Solve today's queue
    for item in focus.items:
        save_item(tmp_db, mark_status(item, Status.SOLVED, start))
    items = load_items(tmp_db, month_id)

    # Medium confidence: nothing due for three days
    assert due_items(items, start + timedelta(days=2)) == []
    upcoming = forecast(items, start + timedelta(days=2))
    assert [e.days_until_due for e in upcoming] == [1, 1, 1]

    later = start + timedelta(days=3)
    due = due_items(items, later)
    assert len(due) == 3

    # Rate one weak, one strong; the weak one comes back first
    items = apply_review(items, due[0].id, Confidence.WEAK, later)
    items = apply_review(items, due[1].id, Confidence.STRONG, later)
    for item in items:
        save_item(tmp_db, item)

    items = load_items(tmp_db, month_id)
    next_day = later + timedelta(days=1)
    # weak (score 101) ahead of the untouched medium (score 4)
    assert [i.id for i in due_items(items, next_day)] == [due[0].id, due[2].id]

    # In revision phase the weak problem heads the dashboard
    revision_day = datetime(2024, 2, 23, 9, 0)
    assert current_phase(plan, revision_day) == 2
    assert todays_focus(items, plan, revision_day).items[0].id == due[0].id
