"""Clean-up passes applied to converter output."""

MARKER_TOKEN = "**::**"
DIRECTIVE_PREFIX = ":::"

LINK_REWRITES = (
    ("(../", "("),
    ("/index.html)", ")"),
)


def remove_markers(text: str) -> str:
    """Delete every literal ``**::**`` token."""
    return text.replace(MARKER_TOKEN, "")


def filter_directive_lines(text: str) -> str:
    """
    Drop fenced-div directive lines and rewrite relative links.

    A line is a directive when, after stripping surrounding whitespace, it
    starts with ``:::``. Surviving lines have ``(../`` turned into ``(`` and
    ``/index.html)`` into ``)``, and keep their original order.
    """
    kept = []
    for line in text.split("\n"):
        if line.strip().startswith(DIRECTIVE_PREFIX):
            continue
        for old, new in LINK_REWRITES:
            line = line.replace(old, new)
        kept.append(line)
    return "\n".join(kept)


def strip_brace_spans(text: str) -> str:
    """
    Remove ``{...}`` attribute spans.

    The first ``}`` after a ``{`` closes the span, so braces do not nest:
    ``a{b{c}d}e`` becomes ``ad}e``. A ``{`` that is never closed drops
    everything up to the end of the text.
    """
    out = []
    in_span = False

    for char in text:
        if in_span:
            if char == "}":
                in_span = False
            continue
        if char == "{":
            in_span = True
            continue
        out.append(char)

    return "".join(out)


class MarkdownPostProcessor:
    """
    Runs the clean-up passes over converted Markdown in their fixed order.

    Example:
        processor = MarkdownPostProcessor()
        body = processor.process(pandoc_output)
    """

    passes = (remove_markers, filter_directive_lines, strip_brace_spans)

    def process(self, text: str) -> str:
        for step in self.passes:
            text = step(text)
        return text
