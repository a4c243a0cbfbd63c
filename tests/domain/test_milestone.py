"""Unit tests for the Milestone entity."""
import pytest

from companion.domain.milestone import Milestone
from tests.conftest import make_milestone


class TestMilestone:
    def test_progress_clamped_on_creation(self):
        assert make_milestone(progress=140).progress == 100
        assert make_milestone(progress=-10).progress == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Milestone(name=" ")

    def test_advance_default_step(self):
        m = make_milestone(progress=55)
        assert m.advance() == 60

    def test_advance_caps_at_100(self):
        m = make_milestone(progress=98)
        m.advance()
        assert m.progress == 100
        assert m.is_complete

    def test_update_ignores_non_numeric_progress(self):
        m = make_milestone(progress=30)
        m.apply_update({"progress": "half"})
        assert m.progress == 30

    def test_update_fields(self):
        m = make_milestone()
        m.apply_update({"description": "All crypts", "target_date": "2024-12-01", "progress": 45})
        assert m.description == "All crypts"
        assert m.target_date == "2024-12-01"
        assert m.progress == 45

    def test_round_trip(self):
        m = make_milestone(description="d", target_date="2024-08-30", progress=55, milestone_id="goal-1")
        assert Milestone.from_dict(m.to_dict()).to_dict() == m.to_dict()
