"""Event types for the streaming conversion API."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional


class PageState(str, Enum):
    """Lifecycle of one input file moving through the pipeline."""

    DISCOVERED = "discovered"
    READ = "read"
    PARSED = "parsed"
    EXTRACTED = "extracted"
    ASSEMBLED = "assembled"
    CONVERTED = "converted"
    POST_PROCESSED = "post_processed"
    WRITTEN = "written"
    DONE = "done"
    FAILED = "failed"


class EventType(str, Enum):
    """Types of events emitted during a conversion run."""

    # Lifecycle events
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"

    # Discovery phase
    DISCOVERY_COMPLETE = "discovery_complete"

    # Per-page events
    PAGE_STARTED = "page_started"
    PAGE_EXTRACTED = "page_extracted"
    PAGE_CONVERTED = "page_converted"
    PAGE_SAVED = "page_saved"
    PAGE_FAILED = "page_failed"
    PAGE_SKIPPED = "page_skipped"

    # Post-run
    CLEANUP_COMPLETE = "cleanup_complete"


@dataclass
class ConvertEvent:
    """
    Event emitted during a conversion run.

    Example:
        async for event in converter.run():
            if event.type == EventType.PAGE_STARTED:
                print(f"{event.current}/{event.total}: {event.path}")
            elif event.type == EventType.PAGE_FAILED:
                print(f"Error: {event.path} - {event.error}")
    """

    type: EventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    path: Optional[Path] = None
    output_path: Optional[Path] = None
    message: Optional[str] = None
    error: Optional[str] = None

    # Progress tracking
    current: Optional[int] = None
    total: Optional[int] = None

    fragments: Optional[int] = None

    @property
    def progress_percent(self) -> Optional[float]:
        """Calculate progress percentage if current and total are set."""
        if self.current is not None and self.total and self.total > 0:
            return (self.current / self.total) * 100
        return None


@dataclass
class ConvertStats:
    """Cumulative statistics for a conversion run."""

    files_discovered: int = 0
    files_converted: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    fragments_extracted: int = 0
    intermediates_removed: int = 0
    duration_seconds: float = 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as a percentage."""
        total = self.files_converted + self.files_failed
        if total == 0:
            return 0.0
        return (self.files_converted / total) * 100

    def to_dict(self) -> dict:
        """Convert stats to dictionary for serialization."""
        return {
            "files_discovered": self.files_discovered,
            "files_converted": self.files_converted,
            "files_failed": self.files_failed,
            "files_skipped": self.files_skipped,
            "fragments_extracted": self.fragments_extracted,
            "intermediates_removed": self.intermediates_removed,
            "duration_seconds": round(self.duration_seconds, 2),
            "success_rate": round(self.success_rate, 1),
        }
