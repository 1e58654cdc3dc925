"""Run driver for pagedistill."""

from .distiller import Distiller, distill_blocking
from .files import (
    discover_html_files,
    intermediate_path_for,
    output_path_for,
    prepare_output_dir,
    remove_intermediates,
)

__all__ = [
    "Distiller",
    "distill_blocking",
    "discover_html_files",
    "intermediate_path_for",
    "output_path_for",
    "prepare_output_dir",
    "remove_intermediates",
]
