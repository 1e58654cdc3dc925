"""Base classes for the per-file conversion pipeline."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol, runtime_checkable

from ..errors import PageError
from ..models.events import ConvertEvent, EventType, PageState

logger = logging.getLogger(__name__)

# Type alias for event emitter function
EventEmitter = Callable[[ConvertEvent], None]


@dataclass
class PageContext:
    """
    Context object passed through pipeline steps.

    Contains all state for processing a single input file, accumulated
    as it moves through the pipeline.

    Attributes:
        input_path: The HTML file being converted
        output_path: Final Markdown location (``<output>/<basename>.md``)
        intermediate_path: Assembled shell written beside the input
        html: Raw HTML bytes
        fragments: Serialized kept elements, in document order
        shell_html: Fragments wrapped in the minimal document
        converted: Raw converter output
        markdown: Front matter plus cleaned body
        state: Furthest state reached
        error: Error message if a step failed
    """

    input_path: Path
    output_path: Path
    intermediate_path: Path

    # Content (accumulated through pipeline)
    html: Optional[bytes] = None
    fragments: list[str] = field(default_factory=list)
    shell_html: Optional[str] = None
    converted: Optional[str] = None
    markdown: Optional[str] = None

    # Status
    state: PageState = PageState.DISCOVERED
    should_skip: bool = False
    skip_reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def base_name(self) -> str:
        """Input file name without its extension."""
        return self.input_path.stem


@runtime_checkable
class PipelineStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives a PageContext, processes it, and returns
    the (possibly modified) context.

    Error Handling Contract:
    - For expected skips: set ctx.should_skip = True and ctx.skip_reason
    - For failures: raise a PageError subclass naming what went wrong
    - The pipeline catches exceptions, sets ctx.error and marks the page FAILED
    """

    name: str

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The page context with accumulated state
            emit: Optional callback to emit events

        Returns:
            The (possibly modified) page context
        """
        ...


@dataclass
class ConvertPipeline:
    """
    Pipeline for carrying a single input file through every step.

    Steps are executed in order. If a step sets ctx.should_skip = True,
    remaining steps are skipped. If a step raises, the error is captured in
    ctx.error, the page is marked FAILED and processing of that file stops.

    Example:
        pipeline = ConvertPipeline(steps=[
            ReadStep(),
            ExtractStep(extractor),
            ConvertStep(converter),
            PostProcessStep(category, tag),
            SaveStep(),
        ])

        ctx = await pipeline.execute(input_path, output_path, intermediate_path)
        if ctx.error:
            logger.error(f"Failed: {ctx.error}")
    """

    steps: list[PipelineStep]

    async def execute(
        self,
        input_path: Path,
        output_path: Path,
        intermediate_path: Path,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute the pipeline for one input file.

        Args:
            input_path: The HTML file to convert
            output_path: Where the final Markdown goes
            intermediate_path: Where the assembled shell goes
            emit: Optional callback for emitting events

        Returns:
            PageContext with final state (check error/should_skip for status)
        """
        ctx = PageContext(
            input_path=input_path,
            output_path=output_path,
            intermediate_path=intermediate_path,
        )

        for step in self.steps:
            if ctx.should_skip:
                break

            try:
                ctx = await step.execute(ctx, emit)
            except PageError as e:
                self._fail(ctx, step, str(e), emit)
                break
            except Exception as e:
                logger.debug(f"Unexpected failure in {step.name}", exc_info=True)
                self._fail(ctx, step, str(e), emit)
                break

        if not ctx.error and not ctx.should_skip:
            ctx.state = PageState.DONE

        return ctx

    def _fail(
        self,
        ctx: PageContext,
        step: PipelineStep,
        reason: str,
        emit: Optional[EventEmitter],
    ) -> None:
        ctx.error = f"{step.name}: {reason}"
        ctx.state = PageState.FAILED
        ctx.should_skip = True

        logger.error(f"Error processing {ctx.input_path}: {ctx.error}")

        if emit:
            emit(
                ConvertEvent(
                    type=EventType.PAGE_FAILED,
                    path=ctx.input_path,
                    error=ctx.error,
                )
            )
