# tests/test_dashboard.py
from roadmap_tracker.dashboard import (
    get_readiness_color, get_readiness_label, pattern_mastery, progress_stats,
)
from roadmap_tracker.models import Confidence, Status, StudyItem


def _item(item_id, pattern="Arrays", status=Status.SOLVED, confidence=Confidence.STRONG, revisions=0):
    return StudyItem(id=item_id, month_id="2024-03", pattern=pattern, status=status,
                     confidence=confidence, revision_count=revisions)


def test_progress_stats_empty():
    stats = progress_stats([])
    assert stats["total"] == 0
    assert stats["solved_pct"] == 0
    assert stats["strong_pct"] == 0


def test_progress_stats_counts():
    items = [
        _item("1", revisions=2),
        _item("2", confidence=Confidence.WEAK, revisions=1),
        _item("3", status=Status.ATTEMPTED, confidence=Confidence.NONE),
        _item("4", status=Status.NOT_STARTED, confidence=Confidence.NONE),
    ]
    stats = progress_stats(items)
    assert stats["solved"] == 2
    assert stats["attempted"] == 1
    assert stats["strong_pct"] == 25
    assert stats["weak_pct"] == 25
    assert stats["solved_pct"] == 50
    assert stats["revisions"] == 3


def test_readiness_label():
    assert get_readiness_label(70, 0) == "ON TRACK"
    assert get_readiness_label(70, 20) == "CLOSE"
    assert get_readiness_label(40, 20) == "NEEDS WORK"
    assert get_readiness_label(10, 30) == "BEHIND"


def test_readiness_color():
    assert get_readiness_color(85) == "green"
    assert get_readiness_color(70) == "yellow"
    assert get_readiness_color(55) == "dark_orange"
    assert get_readiness_color(10) == "red"


def test_pattern_mastery():
    items = [_item(str(n)) for n in range(4)]
    items.append(_item("4", confidence=Confidence.MEDIUM))
    items += [_item("g1", pattern="Graphs"), _item("g2", pattern="Graphs", confidence=Confidence.WEAK)]
    rows = pattern_mastery(items)
    assert [r["pattern"] for r in rows] == ["Arrays", "Graphs"]
    arrays, graphs = rows
    assert arrays["strong_pct"] == 80.0
    assert arrays["mastered"] is True
    assert graphs["strong_pct"] == 50.0
    assert graphs["mastered"] is False
