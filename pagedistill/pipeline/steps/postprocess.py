"""Pipeline step that cleans converter output and adds front matter."""

import logging
from typing import Optional

from ...conversion.frontmatter import FrontmatterBuilder
from ...conversion.postprocess import MarkdownPostProcessor
from ...models.events import PageState
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class PostProcessStep:
    """
    Pipeline step producing the final document text.

    Reads ctx.converted, writes ctx.markdown as front matter followed by the
    cleaned body.
    """

    name = "postprocess"

    def __init__(
        self,
        category: str,
        tag: str,
        frontmatter_builder: Optional[FrontmatterBuilder] = None,
        post_processor: Optional[MarkdownPostProcessor] = None,
    ):
        """
        Args:
            category: Category label for the front matter
            tag: Tag label for the front matter
            frontmatter_builder: Front matter builder (uses default if None)
            post_processor: Text clean-up passes (uses default if None)
        """
        self._category = category
        self._tag = tag
        self._frontmatter_builder = frontmatter_builder or FrontmatterBuilder()
        self._post_processor = post_processor or MarkdownPostProcessor()

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.should_skip or ctx.error:
            return ctx

        header = self._frontmatter_builder.build(ctx.base_name, self._category, self._tag)
        body = self._post_processor.process(ctx.converted or "")

        ctx.markdown = header + body
        ctx.state = PageState.POST_PROCESSED

        logger.debug(f"Post-processed {ctx.input_path}: {len(body)} characters of body")
        return ctx
