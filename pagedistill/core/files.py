"""File-system helpers for a conversion run."""

import logging
import os
from pathlib import Path

from ..errors import CleanupError, DirectoryError, DirectoryWalkError

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"
INTERMEDIATE_SUFFIX = "_processed.html"
INTERMEDIATE_MARKER = "processed"


def output_path_for(input_path: Path, output_dir: Path) -> Path:
    """``<output_dir>/<basename>.md`` for an input file."""
    return output_dir / f"{input_path.stem}.md"


def intermediate_path_for(input_path: Path) -> Path:
    """Shell document path beside the input: ``page.html`` -> ``page_processed.html``."""
    return input_path.with_name(f"{input_path.stem}{INTERMEDIATE_SUFFIX}")


def prepare_output_dir(output_dir: Path) -> bool:
    """
    Make sure the output directory exists.

    Creates it (with parents) when missing. An existing directory that already
    has entries only triggers a warning.

    Returns:
        True if the directory already contained entries

    Raises:
        DirectoryError: If the directory cannot be created or listed
    """
    if not output_dir.exists():
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryError(f"failed to create output directory: {e}") from e
        return False

    if not output_dir.is_dir():
        raise DirectoryError(f"output path is not a directory: {output_dir}")

    try:
        non_empty = any(output_dir.iterdir())
    except OSError as e:
        raise DirectoryError(f"failed to read output directory: {e}") from e

    if non_empty:
        logger.warning(f"Output directory {output_dir} is not empty")
    return non_empty


def _raise_walk_error(error: OSError) -> None:
    raise DirectoryWalkError(f"error walking directory: {error}") from error


def discover_html_files(input_dir: Path) -> list[Path]:
    """
    List every regular file under ``input_dir`` ending in ``.html`` (any case).

    The whole tree is listed before any file is processed, so shells written
    during the run are never picked up. Paths come back in lexical walk order.

    Raises:
        DirectoryWalkError: If the tree cannot be enumerated
    """
    if not input_dir.is_dir():
        raise DirectoryWalkError(f"input directory does not exist: {input_dir}")

    found: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(input_dir, onerror=_raise_walk_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if filename.lower().endswith(HTML_SUFFIX) and path.is_file():
                found.append(path)

    return sorted(found, key=lambda p: p.parts)


def remove_intermediates(input_dir: Path) -> int:
    """
    Delete every regular file under ``input_dir`` whose name contains ``processed``.

    Returns:
        Number of files removed

    Raises:
        CleanupError: If listing or deleting fails
    """
    removed = 0
    try:
        for path in sorted(input_dir.rglob(f"*{INTERMEDIATE_MARKER}*")):
            if path.is_file():
                path.unlink()
                removed += 1
                logger.debug(f"Removed {path}")
    except OSError as e:
        raise CleanupError(f"error deleting processed files: {e}") from e

    return removed
