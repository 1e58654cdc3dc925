"""Command-line interface for pagedistill."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .core.distiller import Distiller
from .errors import ArgumentError, CleanupError, PagedistillError
from .logging_config import setup_logging
from .models.config import ConverterConfig, PagedistillConfig
from .models.events import EventType

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CLEANUP_FAILED = 2

POSITIONALS = ("input_dir", "output_dir", "category", "tag")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting, so usage errors map to EXIT_FATAL."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = _ArgumentParser(
        prog="pagedistill",
        description="Distill a directory of legacy HTML pages into Markdown with front matter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert every .html file under ./site into ./content/posts
  pagedistill ./site ./content/posts Travel Tokyo

  # Use the in-process converter when pandoc is not installed
  pagedistill ./site ./content/posts Travel Tokyo --converter html2text

  # Read defaults from a YAML file
  pagedistill ./site ./content/posts Travel Tokyo --config pagedistill.yaml
        """,
    )

    parser.add_argument("input_dir", nargs="?", type=Path, help="Directory searched for .html files")
    parser.add_argument("output_dir", nargs="?", type=Path, help="Directory receiving <basename>.md files")
    parser.add_argument("category", nargs="?", help="Category written into every front matter block")
    parser.add_argument("tag", nargs="?", help="Tag written into every front matter block")

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="YAML config file (positionals override its values)",
    )

    converter_group = parser.add_argument_group("converter settings")
    converter_group.add_argument(
        "--converter",
        choices=["pandoc", "html2text"],
        default=None,
        help="Converter backend (default: pandoc)",
    )
    converter_group.add_argument(
        "--pandoc",
        dest="pandoc_path",
        metavar="PATH",
        default=None,
        help="pandoc executable (default: pandoc on PATH)",
    )
    converter_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Kill a conversion that runs longer than this (default: 120)",
    )

    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--no-cleanup",
        action="store_true",
        help="Keep *_processed.html intermediate files",
    )
    output_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be converted without writing anything",
    )
    output_group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    return parser


def build_config(args: argparse.Namespace) -> PagedistillConfig:
    """
    Build the run configuration from parsed arguments.

    Raises:
        ArgumentError: If positionals are missing and no config file fills them
        ValidationError: If the resulting configuration is invalid
    """
    positionals = {name: getattr(args, name) for name in POSITIONALS}

    if not args.config and any(value is None for value in positionals.values()):
        raise ArgumentError("expected exactly four arguments: INPUT_DIR OUTPUT_DIR CATEGORY TAG")

    overrides: dict = dict(positionals)
    if args.no_cleanup:
        overrides["cleanup"] = False
    if args.dry_run:
        overrides["dry_run"] = True
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"

    if args.config:
        config = PagedistillConfig.from_yaml_file(args.config, **overrides)
    else:
        config = PagedistillConfig(**{key: value for key, value in overrides.items() if value is not None})

    converter_kwargs: dict = {}
    if args.converter:
        converter_kwargs["backend"] = args.converter
    if args.pandoc_path:
        converter_kwargs["pandoc_path"] = args.pandoc_path
    if args.timeout is not None:
        converter_kwargs["timeout"] = args.timeout
    if converter_kwargs:
        converter = ConverterConfig.model_validate({**config.converter.model_dump(), **converter_kwargs})
        config = config.model_copy(update={"converter": converter})

    return config


def run_distiller(config: PagedistillConfig, console: Console, quiet: bool = False) -> int:
    """Run a conversion with progress output and return the exit code."""
    setup_logging(level=config.log_level, log_file=config.log_file, force=True)

    async def run() -> int:
        if not quiet:
            console.print(f"[bold blue]pagedistill[/bold blue] v{__version__}")
            console.print(f"Input: {escape(str(config.input_dir))}")
            console.print(f"Output: {escape(str(config.output_dir))}")
            console.print(f"Converter: {config.converter.backend.value}")
            console.print()

        async with Distiller(config) as distiller:
            if quiet:
                async for _ in distiller.run():
                    pass
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    task = progress.add_task("Starting...", total=None)

                    async for event in distiller.run():
                        if event.type == EventType.DISCOVERY_COMPLETE:
                            progress.update(task, description=f"[green]Found {event.total} HTML files")
                        elif event.type == EventType.PAGE_STARTED:
                            progress.update(
                                task,
                                description=f"[cyan]Converting {event.current}/{event.total} "
                                f"({event.progress_percent or 0:.0f}%): "
                                f"{escape(str(event.path))}",
                            )
                        elif event.type == EventType.PAGE_SKIPPED:
                            console.print(escape(event.message or ""))
                        elif event.type == EventType.PAGE_FAILED:
                            console.print(
                                f"[red]Failed:[/red] {escape(str(event.path))} - {escape(event.error or '')}"
                            )
                        elif event.type == EventType.COMPLETED:
                            progress.update(task, description=f"[green]{event.message}")

            stats = distiller.stats
            if not quiet:
                console.print()
                console.print("[bold]Results:[/bold]")
                console.print(f"  Files discovered: {stats.files_discovered}")
                console.print(f"  Files converted: {stats.files_converted}")
                console.print(f"  Files skipped: {stats.files_skipped}")
                console.print(f"  Files failed: {stats.files_failed}")
                console.print(f"  Intermediates removed: {stats.intermediates_removed}")
                console.print(f"  Duration: {stats.duration_seconds:.1f}s")

        # Per-file failures were already reported; they do not fail the run
        return EXIT_OK

    try:
        return asyncio.run(run())
    except CleanupError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_CLEANUP_FAILED
    except PagedistillError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FATAL


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    console = Console()
    parser = create_parser()

    try:
        args = parser.parse_args(argv)
        if args.doctor:
            from .doctor import run_doctor

            return run_doctor(output_dir=args.output_dir, pandoc_path=args.pandoc_path or "pandoc")
        config = build_config(args)
    except ArgumentError as e:
        console.print(escape(parser.format_usage().strip()), highlight=False)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FATAL
    except (ValidationError, ValueError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return EXIT_FATAL

    return run_distiller(config, console, quiet=args.quiet)


if __name__ == "__main__":
    sys.exit(main())
