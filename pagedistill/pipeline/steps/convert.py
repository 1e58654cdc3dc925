"""Pipeline step for HTML to Markdown conversion."""

import asyncio
import logging
from typing import Optional

from ...conversion.converters import PandocConverter
from ...conversion.protocols import DocumentConverter
from ...errors import ReadError
from ...models.events import ConvertEvent, EventType, PageState
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class ConvertStep:
    """
    Pipeline step that hands the assembled shell to the document converter.

    The converter writes straight to ctx.output_path; its output is then read
    back into ctx.converted for post-processing.

    Example:
        step = ConvertStep(PandocConverter(timeout=60))
        ctx = await step.execute(ctx, emit=callback)
    """

    name = "convert"

    def __init__(self, converter: Optional[DocumentConverter] = None):
        """
        Args:
            converter: Converter backend (pandoc if None)
        """
        self._converter = converter or PandocConverter()

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.should_skip or ctx.error:
            return ctx

        await self._converter.convert(ctx.intermediate_path, ctx.output_path)
        logger.info(f"Successfully converted to markdown: {ctx.output_path}")

        try:
            ctx.converted = await asyncio.to_thread(ctx.output_path.read_text, encoding="utf-8")
        except OSError as e:
            raise ReadError(f"error reading markdown file: {e}", ctx.input_path) from e

        ctx.state = PageState.CONVERTED

        if emit:
            emit(
                ConvertEvent(
                    type=EventType.PAGE_CONVERTED,
                    path=ctx.input_path,
                    output_path=ctx.output_path,
                    message=f"Converted with {self._converter.name}",
                )
            )

        return ctx
