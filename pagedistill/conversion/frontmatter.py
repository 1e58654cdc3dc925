"""Front matter generation for converted pages."""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional


def format_title(base_name: str) -> str:
    """
    Turn a hyphenated file name into a title.

    Only the first character of each segment is upper-cased; the rest is left
    alone, so ``tokyo-cITY`` becomes ``Tokyo CITY``. Empty segments survive
    as extra spaces.
    """
    words = base_name.split("-")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '\\"') + '"'


@dataclass(frozen=True)
class FrontMatter:
    """The fixed metadata block written at the top of every page."""

    title: str
    description: str
    meta_title: str
    date: date
    category: str
    tag: str
    author: str = ""
    image: str = ""
    draft: bool = False

    def render(self) -> str:
        """Render the block with ``---`` delimiters and a trailing blank line."""
        lines = [
            "---",
            f"title: {_quote(self.title)}",
            f"description: {_quote(self.description)}",
            f"meta_title: {_quote(self.meta_title)}",
            f"author: {_quote(self.author)}",
            f"date: {self.date.strftime('%Y-%m-%d')}",
            f"categories: [{_quote(self.category)}]",
            f"image: {_quote(self.image)}",
            f"tags: [{_quote(self.tag)}]",
            f"draft: {'true' if self.draft else 'false'}",
            "---",
        ]
        return "\n".join(lines) + "\n\n"


class FrontmatterBuilder:
    """
    Builds front matter for a page from its file name.

    Example:
        builder = FrontmatterBuilder()
        header = builder.build("tokyo-city-guide", category="Travel", tag="Tokyo")
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        """
        Args:
            today: Clock returning the processing date (defaults to ``date.today``)
        """
        self._today = today or date.today

    def create(self, base_name: str, category: str, tag: str) -> FrontMatter:
        title = format_title(base_name)
        return FrontMatter(
            title=title,
            description=title,
            meta_title=title,
            date=self._today(),
            category=category,
            tag=tag,
        )

    def build(self, base_name: str, category: str, tag: str) -> str:
        """
        Build the rendered front matter string.

        Args:
            base_name: Input file name without its extension
            category: Category label for every page of the run
            tag: Tag label for every page of the run

        Returns:
            Front matter string (with --- delimiters and a blank line after)
        """
        return self.create(base_name, category, tag).render()
