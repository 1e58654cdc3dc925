"""Exception hierarchy for pagedistill.

Run-level errors abort the whole run. Page-level errors (``PageError``
subclasses) are caught by the pipeline, recorded on the page context and
logged; the run continues with the next file.
"""

from pathlib import Path
from typing import Optional


class PagedistillError(Exception):
    """Base class for all pagedistill errors."""


class ArgumentError(PagedistillError):
    """Wrong number or shape of command-line parameters."""


class DirectoryError(PagedistillError):
    """Output directory cannot be created or inspected."""


class DirectoryWalkError(PagedistillError):
    """Input tree cannot be enumerated."""


class CleanupError(PagedistillError):
    """Removing intermediate artifacts after the run failed."""


class PageError(PagedistillError):
    """
    Failure while carrying a single input file through the pipeline.

    Attributes:
        path: The input file being processed (if known)
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ReadError(PageError):
    """Input HTML or converter output could not be read."""


class ParseError(PageError):
    """Input HTML could not be parsed."""


class WriteError(PageError):
    """Intermediate shell document could not be written."""


class ConversionError(PageError):
    """External converter missing, failed, or timed out."""


class PostProcessWriteError(PageError):
    """Final Markdown document could not be written."""
