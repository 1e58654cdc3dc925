"""
pagedistill - Distill legacy HTML pages into Markdown with front matter.

Usage:
    from pagedistill import Distiller, PagedistillConfig

    config = PagedistillConfig(
        input_dir="./legacy-site",
        output_dir="./content/posts",
        category="Travel",
        tag="Tokyo",
    )

    async with Distiller(config) as distiller:
        async for event in distiller.run():
            print(event)
"""

__version__ = "1.0.0"

from .core import Distiller, distill_blocking
from .errors import (
    ArgumentError,
    CleanupError,
    ConversionError,
    DirectoryError,
    DirectoryWalkError,
    PageError,
    PagedistillError,
    ParseError,
    PostProcessWriteError,
    ReadError,
    WriteError,
)
from .models.config import ConverterBackend, ConverterConfig, PagedistillConfig
from .models.events import ConvertEvent, ConvertStats, EventType, PageState

__all__ = [
    "__version__",
    # Core
    "Distiller",
    "distill_blocking",
    # Config
    "PagedistillConfig",
    "ConverterConfig",
    "ConverterBackend",
    # Events
    "EventType",
    "ConvertEvent",
    "ConvertStats",
    "PageState",
    # Errors
    "PagedistillError",
    "ArgumentError",
    "DirectoryError",
    "DirectoryWalkError",
    "CleanupError",
    "PageError",
    "ReadError",
    "ParseError",
    "WriteError",
    "ConversionError",
    "PostProcessWriteError",
]
