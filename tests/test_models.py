"""Tests for data model classes."""
import dataclasses
from datetime import date

import pytest

from roadmap_tracker.models import (
    Confidence, Difficulty, PhaseConfig, Priority, Status, StudyItem,
)


def test_study_item_defaults():
    item = StudyItem(id="abc", month_id="2024-03")
    assert item.status is Status.NOT_STARTED
    assert item.confidence is Confidence.NONE
    assert item.difficulty is Difficulty.EASY
    assert item.priority is Priority.NORMAL
    assert item.pattern == "General"
    assert item.last_reviewed_at is None
    assert item.attempts == 0
    assert item.revision_count == 0


def test_study_item_is_immutable():
    item = StudyItem(id="abc", month_id="2024-03")
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.confidence = Confidence.STRONG


def test_enum_values_match_stored_labels():
    assert Status("Solved") is Status.SOLVED
    assert Confidence("Weak") is Confidence.WEAK
    assert Priority("Must Do") is Priority.MUST_DO
    with pytest.raises(ValueError):
        Confidence("Shaky")


def test_phase_contains_is_inclusive():
    phase = PhaseConfig(id=2, name="Pattern Revision", start_date=date(2024, 2, 22),
                        end_date=date(2024, 2, 25), duration=4, focus="", goal="")
    assert phase.contains(date(2024, 2, 22))
    assert phase.contains(date(2024, 2, 25))
    assert not phase.contains(date(2024, 2, 26))
