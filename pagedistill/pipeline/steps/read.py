"""Pipeline step that loads the input HTML."""

import asyncio
import logging
from typing import Optional

from ...errors import ReadError
from ...models.events import PageState
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class ReadStep:
    """Reads ctx.input_path into ctx.html."""

    name = "read"

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        try:
            ctx.html = await asyncio.to_thread(ctx.input_path.read_bytes)
        except OSError as e:
            raise ReadError(f"error reading file: {e}", ctx.input_path) from e

        ctx.state = PageState.READ
        logger.debug(f"Read {len(ctx.html)} bytes from {ctx.input_path}")
        return ctx
