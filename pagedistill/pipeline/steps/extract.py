"""Pipeline step that distills a page to its content fragments."""

import asyncio
import logging
from typing import Optional

from ...conversion.extractor import FragmentExtractor, assemble_shell
from ...errors import WriteError
from ...models.events import ConvertEvent, EventType, PageState
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class ExtractStep:
    """
    Pipeline step that parses the page, keeps the whitelisted elements and
    writes the assembled shell next to the input file.

    Reads ctx.html, writes ctx.fragments, ctx.shell_html and the file at
    ctx.intermediate_path.
    """

    name = "extract"

    def __init__(self, extractor: Optional[FragmentExtractor] = None):
        """
        Args:
            extractor: Fragment extractor (uses default if None)
        """
        self._extractor = extractor or FragmentExtractor()

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.should_skip or ctx.error:
            return ctx

        document = self._extractor.parse(ctx.html or b"")
        ctx.state = PageState.PARSED

        ctx.fragments = self._extractor.extract(document)
        ctx.state = PageState.EXTRACTED

        if not ctx.fragments:
            logger.debug(f"No content elements matched in {ctx.input_path}")

        ctx.shell_html = assemble_shell(ctx.fragments)
        ctx.state = PageState.ASSEMBLED

        try:
            await asyncio.to_thread(
                ctx.intermediate_path.write_text,
                ctx.shell_html,
                encoding="utf-8",
            )
        except OSError as e:
            raise WriteError(f"error writing output file: {e}", ctx.input_path) from e

        logger.info(f"Successfully extracted content to {ctx.intermediate_path}")

        if emit:
            emit(
                ConvertEvent(
                    type=EventType.PAGE_EXTRACTED,
                    path=ctx.input_path,
                    output_path=ctx.intermediate_path,
                    fragments=len(ctx.fragments),
                    message=f"Extracted {len(ctx.fragments)} fragments",
                )
            )

        return ctx
