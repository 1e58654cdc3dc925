"""Protocol definitions for content conversion."""

from pathlib import Path
from typing import Protocol


class DocumentConverter(Protocol):
    """
    Protocol for turning an HTML file into a Markdown file.

    Implementations read ``source`` and write ``target``. Anything that
    prevents ``target`` from being produced is reported as ConversionError.
    """

    name: str

    async def convert(self, source: Path, target: Path) -> None:
        """
        Convert one file.

        Args:
            source: Path to the assembled HTML shell
            target: Path the Markdown output is written to

        Raises:
            ConversionError: If the conversion fails
        """
        ...
