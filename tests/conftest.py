"""Shared fixtures."""

import logging
from pathlib import Path

import pytest
from pagedistill.errors import ConversionError
from pagedistill.logging_config import LOGGER_NAME


class FakeConverter:
    """Converter double that writes canned Markdown instead of running pandoc."""

    name = "fake"

    def __init__(self, output="", fail_for=()):
        self.output = output
        self.fail_for = set(fail_for)
        self.calls = []

    async def convert(self, source: Path, target: Path) -> None:
        self.calls.append((source, target))
        if target.stem in self.fail_for:
            raise ConversionError("pandoc exited with status 1", source)
        target.write_text(self.output, encoding="utf-8")


@pytest.fixture
def fake_converter():
    """Converter producing typical pandoc-style output."""
    return FakeConverter(
        output=(
            "::: photogimg\n"
            "![](img/a.jpg){width=\"300\"}\n"
            ":::\n"
            "\n"
            "# Title {#title}\n"
            "\n"
            "See **::**[Shibuya](../shibuya/index.html)\n"
        )
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging so tests stay independent."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def make_converter():
    """Factory for converter doubles with custom output or failures."""
    return FakeConverter
