"""HTML to Markdown converter backends."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import html2text

from ..errors import ConversionError
from ..models.config import ConverterBackend, ConverterConfig
from .protocols import DocumentConverter

logger = logging.getLogger(__name__)

# Keep error messages readable when pandoc dumps a lot on stderr
_STDERR_LIMIT = 500


class PandocConverter:
    """
    Converts files by running the pandoc executable.

    Runs ``pandoc -f html -t markdown <source> -o <target>`` and waits for it
    to exit. The process is killed if it outlives ``timeout``.

    Example:
        converter = PandocConverter(timeout=60)
        await converter.convert(Path("page_processed.html"), Path("out/page.md"))
    """

    name = "pandoc"

    def __init__(
        self,
        executable: str = "pandoc",
        source_format: str = "html",
        target_format: str = "markdown",
        timeout: float | None = 120.0,
        extra_args: list[str] | None = None,
    ):
        """
        Initialize the pandoc adapter.

        Args:
            executable: Name or path of the pandoc binary
            source_format: Value for ``-f``
            target_format: Value for ``-t``
            timeout: Seconds before the process is killed (None = no limit)
            extra_args: Additional arguments placed before the input path
        """
        self._executable = executable
        self._source_format = source_format
        self._target_format = target_format
        self._timeout = timeout
        self._extra_args = list(extra_args or [])

    def build_command(self, source: Path, target: Path) -> list[str]:
        """Build the argument vector for one conversion."""
        return [
            self._executable,
            "-f",
            self._source_format,
            "-t",
            self._target_format,
            *self._extra_args,
            str(source),
            "-o",
            str(target),
        ]

    async def convert(self, source: Path, target: Path) -> None:
        command = self.build_command(source, target)
        logger.debug(f"Running: {' '.join(command)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ConversionError(f"converter executable not found: {self._executable}", source) from e
        except PermissionError as e:
            raise ConversionError(f"converter executable not runnable: {self._executable}", source) from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ConversionError(f"{self.name} timed out after {self._timeout}s", source) from e

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()[:_STDERR_LIMIT]
            message = f"{self.name} exited with status {process.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise ConversionError(message, source)


class Html2TextConverter:
    """
    In-process converter built on html2text.

    Fulfils the same file-to-file contract as PandocConverter for hosts
    without pandoc installed.
    """

    name = "html2text"

    def __init__(
        self,
        body_width: int = 0,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        escape_snob: bool = True,
        mark_code: bool = True,
    ):
        """
        Args:
            body_width: Max line width (0 = no wrapping)
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            escape_snob: Escape special Markdown chars
            mark_code: Mark code blocks with backticks
        """
        self._settings = {
            "body_width": body_width,
            "inline_links": True,
            "wrap_links": False,
            "protect_links": True,
            "ignore_images": ignore_images,
            "ignore_tables": ignore_tables,
            "unicode_snob": unicode_snob,
            "escape_snob": escape_snob,
            "mark_code": mark_code,
            "default_image_alt": "",
            "single_line_break": False,
        }

    def _new_handler(self) -> html2text.HTML2Text:
        # HTML2Text keeps parser state, so every file gets a fresh instance
        handler = html2text.HTML2Text()
        for key, value in self._settings.items():
            setattr(handler, key, value)
        return handler

    def convert_text(self, html: str) -> str:
        """Convert an HTML string to Markdown."""
        return self._new_handler().handle(html)

    def _convert_file(self, source: Path, target: Path) -> None:
        html = source.read_text(encoding="utf-8", errors="replace")
        target.write_text(self.convert_text(html), encoding="utf-8")

    async def convert(self, source: Path, target: Path) -> None:
        try:
            await asyncio.to_thread(self._convert_file, source, target)
        except OSError as e:
            raise ConversionError(f"{self.name} conversion failed: {e}", source) from e


def build_converter(config: ConverterConfig | None = None) -> DocumentConverter:
    """
    Create the converter selected by configuration.

    Args:
        config: Converter settings (defaults to pandoc with default settings)

    Returns:
        A DocumentConverter implementation
    """
    config = config or ConverterConfig()

    if config.backend == ConverterBackend.HTML2TEXT:
        return Html2TextConverter()

    return PandocConverter(
        executable=config.pandoc_path,
        source_format=config.source_format,
        target_format=config.target_format,
        timeout=config.timeout,
        extra_args=config.extra_args,
    )
