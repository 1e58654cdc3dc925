"""Main Distiller class with streaming event API."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from types import TracebackType
from typing import Callable

from ..conversion.converters import build_converter
from ..conversion.extractor import FragmentExtractor
from ..conversion.frontmatter import FrontmatterBuilder
from ..conversion.protocols import DocumentConverter
from ..models.config import PagedistillConfig
from ..models.events import ConvertEvent, ConvertStats, EventType
from ..pipeline.base import ConvertPipeline
from ..pipeline.steps import ConvertStep, ExtractStep, PostProcessStep, ReadStep, SaveStep
from .files import (
    discover_html_files,
    intermediate_path_for,
    output_path_for,
    prepare_output_dir,
    remove_intermediates,
)

logger = logging.getLogger(__name__)


class Distiller:
    """
    Primary API for pagedistill - streaming events.

    Files are processed strictly one after another. A failing file is
    reported with a PAGE_FAILED event and the run moves on; directory and
    cleanup failures abort the run.

    Example:
        config = PagedistillConfig(
            input_dir=Path("./legacy-site"),
            output_dir=Path("./content"),
            category="Travel",
            tag="Tokyo",
        )

        async with Distiller(config) as distiller:
            async for event in distiller.run():
                if event.type == EventType.PAGE_FAILED:
                    print(f"Error: {event.path} - {event.error}")

        print(f"Stats: {distiller.stats.to_dict()}")
    """

    def __init__(
        self,
        config: PagedistillConfig,
        converter: DocumentConverter | None = None,
        today: Callable[[], date] | None = None,
    ):
        """
        Initialize the Distiller.

        Args:
            config: Configuration for the run
            converter: Converter backend (built from config.converter if None)
            today: Clock for the front matter date (defaults to ``date.today``)
        """
        self.config = config
        self._converter = converter or build_converter(config.converter)
        self._today = today
        self._stats = ConvertStats()
        self._start_time: float | None = None
        self._pipeline: ConvertPipeline | None = None

    @property
    def stats(self) -> ConvertStats:
        """Get current run statistics."""
        return self._stats

    async def __aenter__(self) -> Distiller:
        """Enter async context: prepare the output directory and build the pipeline."""
        output_dir = self.config.output_dir

        if not self.config.dry_run:
            prepare_output_dir(output_dir)

        self._pipeline = ConvertPipeline(
            steps=[
                ReadStep(),
                ExtractStep(FragmentExtractor()),
                ConvertStep(self._converter),
                PostProcessStep(
                    category=self.config.category,
                    tag=self.config.tag,
                    frontmatter_builder=FrontmatterBuilder(today=self._today),
                ),
                SaveStep(base_output_dir=output_dir),
            ]
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._pipeline = None

    def discover(self) -> list[Path]:
        """
        List the input files this run will process.

        Raises:
            DirectoryWalkError: If the input tree cannot be enumerated
        """
        files = discover_html_files(self.config.input_dir)
        self._stats.files_discovered = len(files)
        return files

    async def run(self) -> AsyncIterator[ConvertEvent]:
        """
        Execute the conversion run, yielding events.

        Yields:
            ConvertEvent objects for each significant operation
        """
        if self._pipeline is None:
            raise RuntimeError("Distiller not initialized. Use 'async with' context manager.")

        self._start_time = time.monotonic()

        yield ConvertEvent(
            type=EventType.STARTED,
            message=f"Converting HTML files under {self.config.input_dir}",
        )

        try:
            files = self.discover()

            yield ConvertEvent(
                type=EventType.DISCOVERY_COMPLETE,
                total=len(files),
                message=f"Found {len(files)} HTML files",
            )

            collected_events: list[ConvertEvent] = []

            for i, input_path in enumerate(files):
                output_path = output_path_for(input_path, self.config.output_dir)

                yield ConvertEvent(
                    type=EventType.PAGE_STARTED,
                    path=input_path,
                    current=i + 1,
                    total=len(files),
                    message=f"Processing {i + 1}/{len(files)}: {input_path}",
                )

                if self.config.dry_run:
                    yield ConvertEvent(
                        type=EventType.PAGE_SKIPPED,
                        path=input_path,
                        output_path=output_path,
                        message=f"[dry-run] Would convert to {output_path}",
                    )
                    self._stats.files_skipped += 1
                    continue

                collected_events.clear()
                ctx = await self._pipeline.execute(
                    input_path,
                    output_path,
                    intermediate_path_for(input_path),
                    emit=collected_events.append,
                )

                for event in collected_events:
                    yield event

                if ctx.error:
                    self._stats.files_failed += 1
                elif ctx.should_skip:
                    self._stats.files_skipped += 1
                else:
                    self._stats.files_converted += 1
                    self._stats.fragments_extracted += len(ctx.fragments)

            if self.config.cleanup and not self.config.dry_run:
                logger.info("Deleting processed files...")
                removed = await asyncio.to_thread(remove_intermediates, self.config.input_dir)
                self._stats.intermediates_removed = removed
                yield ConvertEvent(
                    type=EventType.CLEANUP_COMPLETE,
                    message=f"Removed {removed} intermediate files",
                )

            self._stats.duration_seconds = time.monotonic() - self._start_time

            yield ConvertEvent(
                type=EventType.COMPLETED,
                message=(
                    f"Conversion completed: {self._stats.files_converted} converted, "
                    f"{self._stats.files_skipped} skipped, "
                    f"{self._stats.files_failed} failed"
                ),
            )

        except Exception as e:
            self._stats.duration_seconds = time.monotonic() - self._start_time
            yield ConvertEvent(
                type=EventType.FAILED,
                error=str(e),
                message=f"Conversion failed: {e}",
            )
            raise


def distill_blocking(
    input_dir: Path,
    output_dir: Path,
    category: str,
    tag: str,
    on_event: Callable[[ConvertEvent], None] | None = None,
    **kwargs: object,
) -> ConvertStats:
    """
    Blocking conversion run with optional event callback.

    Convenience wrapper for sync code. Do not call from within a running
    event loop; use the async Distiller API there instead.

    Args:
        input_dir: Root directory searched for .html files
        output_dir: Directory receiving the Markdown files
        category: Category label for every page
        tag: Tag label for every page
        on_event: Optional callback for events (for progress tracking)
        **kwargs: Additional config options passed to PagedistillConfig

    Returns:
        Statistics of the finished run
    """
    try:
        asyncio.get_running_loop()
        raise RuntimeError("distill_blocking() called from async context. Use 'async with Distiller()' instead.")
    except RuntimeError as e:
        if "no running event loop" not in str(e).lower():
            raise

    config = PagedistillConfig(
        input_dir=input_dir,
        output_dir=output_dir,
        category=category,
        tag=tag,
        **kwargs,  # type: ignore[arg-type]
    )

    async def _run() -> ConvertStats:
        async with Distiller(config) as distiller:
            async for event in distiller.run():
                if on_event:
                    on_event(event)
            return distiller.stats

    return asyncio.run(_run())
