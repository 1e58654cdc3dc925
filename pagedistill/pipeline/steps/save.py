"""SaveStep - final document writing pipeline step."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ...errors import PostProcessWriteError
from ...models.events import ConvertEvent, EventType, PageState
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class SaveStep:
    """
    Pipeline step that writes ctx.markdown to ctx.output_path.

    Overwrites whatever the converter left at that path.

    Example:
        save_step = SaveStep(base_output_dir=Path("./content"))

        ctx = await save_step.execute(ctx)
    """

    name = "save"

    def __init__(
        self,
        base_output_dir: Optional[Path] = None,
    ) -> None:
        """
        Initialize the save step.

        Args:
            base_output_dir: Optional base directory for output path validation.
                            If set, output paths must be within this directory.
        """
        self._base_output_dir = base_output_dir

    def _validate_output_path(self, ctx: PageContext) -> Path:
        """
        Resolve the output path and check it stays inside the base directory.

        Raises:
            PostProcessWriteError: If path is outside base directory (if configured)
        """
        resolved = ctx.output_path.resolve()

        if self._base_output_dir is not None:
            base_resolved = self._base_output_dir.resolve()
            try:
                resolved.relative_to(base_resolved)
            except ValueError as err:
                raise PostProcessWriteError(
                    f"Output path {resolved} is outside base directory {base_resolved}",
                    ctx.input_path,
                ) from err

        return resolved

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.should_skip or ctx.error:
            return ctx

        validated_path = self._validate_output_path(ctx)

        try:
            await asyncio.to_thread(
                validated_path.write_text,
                ctx.markdown or "",
                encoding="utf-8",
            )
        except OSError as e:
            raise PostProcessWriteError(f"error writing filtered markdown: {e}", ctx.input_path) from e

        ctx.state = PageState.WRITTEN
        logger.info(f"Successfully processed: {ctx.input_path}")

        if emit:
            emit(
                ConvertEvent(
                    type=EventType.PAGE_SAVED,
                    path=ctx.input_path,
                    output_path=validated_path,
                    message=f"Saved to {validated_path}",
                )
            )

        return ctx
