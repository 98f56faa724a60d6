from datetime import datetime, timedelta

import pytest

from roadmap_tracker.models import Confidence, Status, StudyItem


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tracker.db")
    return db_path


@pytest.fixture
def now():
    return datetime(2024, 3, 15, 9, 0)


@pytest.fixture
def make_item():
    """Factory for solved items reviewed a given number of days before a reference time."""
    def _make(item_id, confidence=Confidence.MEDIUM, days_ago=None, ref=None,
              status=Status.SOLVED, **fields):
        ref = ref or datetime(2024, 3, 15, 9, 0)
        last = ref - timedelta(days=days_ago) if days_ago is not None else None
        return StudyItem(
            id=item_id, month_id="2024-03", name=f"Problem {item_id}",
            status=status, confidence=confidence, last_reviewed_at=last, **fields,
        )
    return _make
