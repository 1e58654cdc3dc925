"""Content conversion for pagedistill (extraction, Markdown, front matter)."""

from .classifier import TargetTag, flattened_text, is_target_element
from .converters import Html2TextConverter, PandocConverter, build_converter
from .extractor import FragmentExtractor, assemble_shell
from .frontmatter import FrontMatter, FrontmatterBuilder, format_title
from .postprocess import (
    MarkdownPostProcessor,
    filter_directive_lines,
    remove_markers,
    strip_brace_spans,
)
from .protocols import DocumentConverter

__all__ = [
    # Protocols
    "DocumentConverter",
    # Classification and extraction
    "TargetTag",
    "flattened_text",
    "is_target_element",
    "FragmentExtractor",
    "assemble_shell",
    # Converters
    "PandocConverter",
    "Html2TextConverter",
    "build_converter",
    # Post-processing
    "MarkdownPostProcessor",
    "remove_markers",
    "filter_directive_lines",
    "strip_brace_spans",
    # Front matter
    "FrontMatter",
    "FrontmatterBuilder",
    "format_title",
]
