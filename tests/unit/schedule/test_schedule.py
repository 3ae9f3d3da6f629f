"""Tests for the shooting schedule and production stats."""

from scriptboard.board.models import EDIT, SCHEDULED, SHOT, UNSCHEDULED
from scriptboard.schedule import ProductionStats, compute_stats, is_done, project, upcoming


class TestProject:
    """Test grouping scenes by shoot date."""

    def test_groups_ordered_by_date(self, make_scene):
        """Test dates ascend and scenes within a date follow scene number."""
        scenes = [
            make_scene(scene_number="10", shoot_date="2025-06-02"),
            make_scene(scene_number="3", shoot_date="2025-06-01"),
            make_scene(scene_number="2", shoot_date="2025-06-02"),
            make_scene(scene_number="1", shoot_date=None),
        ]

        schedule = project(scenes)

        assert list(schedule) == ["2025-06-01", "2025-06-02"]
        assert [s.scene_number for s in schedule["2025-06-02"]] == ["2", "10"]

    def test_undated_scenes_excluded(self, make_scene):
        """Test scenes without a date are left out."""
        scenes = [make_scene(shoot_date=None), make_scene(shoot_date="  ")]

        assert project(scenes) == {}

    def test_unparsable_dates_last(self, make_scene):
        """Test malformed dates are grouped after real ones."""
        scenes = [make_scene(shoot_date="TBD"), make_scene(shoot_date="2025-01-01")]

        assert list(project(scenes)) == ["2025-01-01", "TBD"]

    def test_input_not_modified(self, make_scene):
        """Test the projection leaves its input alone."""
        scenes = [
            make_scene(scene_number="2", shoot_date="2025-06-01"),
            make_scene(scene_number="1", shoot_date="2025-06-01"),
        ]
        original = list(scenes)

        project(scenes)

        assert scenes == original


class TestStats:
    """Test production progress figures."""

    def test_counts(self, make_scene):
        """Test done, scheduled and waiting scenes are counted."""
        scenes = [
            make_scene(status=SHOT),
            make_scene(status=EDIT),
            make_scene(status=UNSCHEDULED, completed=True),
            make_scene(status=SCHEDULED),
            make_scene(status=UNSCHEDULED),
            make_scene(status="reshoot"),
        ]

        stats = compute_stats(scenes)

        assert stats == ProductionStats(total=6, completed=3, in_progress=1, waiting=2)
        assert stats.progress == 50

    def test_empty_project(self):
        """Test an empty project has zero progress."""
        stats = compute_stats([])

        assert stats.total == 0
        assert stats.progress == 0

    def test_progress_rounds(self):
        """Test progress is a rounded percentage."""
        assert ProductionStats(total=3, completed=1, in_progress=0, waiting=2).progress == 33

    def test_is_done(self, make_scene):
        """Test shot, edit and completed scenes are done."""
        assert is_done(make_scene(status=SHOT))
        assert is_done(make_scene(status=SCHEDULED, completed=True))
        assert not is_done(make_scene(status=SCHEDULED))


class TestUpcoming:
    """Test the upcoming shoots list."""

    def test_scheduled_dated_soonest_first(self, make_scene):
        """Test only scheduled scenes with dates, in date order."""
        later = make_scene(status=SCHEDULED, shoot_date="2025-07-01")
        sooner = make_scene(status=SCHEDULED, shoot_date="2025-06-01")
        make_scene(status=SHOT, shoot_date="2025-05-01")
        undated = make_scene(status=SCHEDULED)

        result = upcoming([later, sooner, undated])

        assert result == [sooner, later]

    def test_limit(self, make_scene):
        """Test the list can be capped."""
        scenes = [
            make_scene(status=SCHEDULED, shoot_date=f"2025-06-0{day}") for day in range(1, 6)
        ]

        assert [s.shoot_date for s in upcoming(scenes, limit=2)] == ["2025-06-01", "2025-06-02"]
