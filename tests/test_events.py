"""Tests for run events and statistics."""

from pagedistill.models.events import ConvertEvent, ConvertStats, EventType


class TestConvertEvent:
    """Tests for ConvertEvent."""

    def test_progress_percent(self):
        """Test progress for a page event."""
        event = ConvertEvent(type=EventType.PAGE_STARTED, current=1, total=4)

        assert event.progress_percent == 25.0

    def test_progress_unknown_without_total(self):
        """Test events that carry no position."""
        assert ConvertEvent(type=EventType.STARTED).progress_percent is None
        assert ConvertEvent(type=EventType.PAGE_STARTED, current=1, total=0).progress_percent is None

    def test_timestamp_is_utc(self):
        """Test that timestamps are timezone-aware."""
        assert ConvertEvent(type=EventType.COMPLETED).timestamp.utcoffset().total_seconds() == 0


class TestConvertStats:
    """Tests for ConvertStats."""

    def test_to_dict(self):
        """Test the dictionary form."""
        stats = ConvertStats(files_discovered=3, files_converted=2, files_failed=1)

        data = stats.to_dict()

        assert data["files_discovered"] == 3
        assert data["files_converted"] == 2
        assert data["files_failed"] == 1
