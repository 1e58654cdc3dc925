"""Fragment extraction from legacy HTML pages."""

import logging
import re
from typing import Callable, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from ..errors import ParseError
from .classifier import is_target_element

logger = logging.getLogger(__name__)

# HTML5 tree construction, as browsers build it
HTML_PARSER = "html5lib"

SHELL_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body>
{body}
</body>
</html>"""


def assemble_shell(fragments: list[str]) -> str:
    """
    Wrap extracted fragments in a minimal HTML document.

    Args:
        fragments: Serialized fragments in document order

    Returns:
        Complete HTML document; an empty body when there are no fragments
    """
    return SHELL_TEMPLATE.format(body="\n".join(fragments))


class FragmentExtractor:
    """
    Collects the serialized HTML of every node the classifier keeps.

    The walk is depth-first pre-order. Once a node is kept its subtree is
    emitted whole and never searched again, so fragments never nest.

    Example:
        extractor = FragmentExtractor()
        document = extractor.parse(html_bytes)
        fragments = extractor.extract(document)
    """

    def __init__(self, predicate: Optional[Callable[[PageElement], bool]] = None):
        """
        Initialize the extractor.

        Args:
            predicate: Keep/drop decision (defaults to ``is_target_element``)
        """
        self._predicate = predicate or is_target_element

    def _detect_encoding(self, html: bytes) -> str:
        """Detect character encoding from a meta charset declaration."""
        head = html[:2048].decode("latin-1", errors="ignore")
        charset_match = re.search(r'charset=["\']?([^"\'\s>/;]+)', head, re.IGNORECASE)
        if charset_match:
            return charset_match.group(1).strip()
        return "utf-8"

    def parse(self, html: Union[bytes, str]) -> BeautifulSoup:
        """
        Parse an HTML document with HTML5 tree construction.

        Unclosed elements are closed the way browsers close them, so
        ``<p>a<p>b`` yields two sibling paragraphs rather than nested ones.
        Attribute values are kept exactly as written (``class`` is not split
        into a list) so serialization reproduces the original attributes.

        Raises:
            ParseError: If the parser rejects the document
        """
        if isinstance(html, bytes):
            encoding = self._detect_encoding(html)
            try:
                text = html.decode(encoding, errors="replace")
            except LookupError:
                text = html.decode("utf-8", errors="replace")
        else:
            text = html

        try:
            return BeautifulSoup(text, HTML_PARSER, multi_valued_attributes=None)
        except Exception as e:
            raise ParseError(f"error parsing HTML: {e}") from e

    def extract(self, document: PageElement) -> list[str]:
        """
        Walk ``document`` and serialize every kept node.

        Args:
            document: Parsed document (or any subtree of one)

        Returns:
            Fragments in document order; empty when nothing matches
        """
        fragments: list[str] = []
        stack: list[PageElement] = [document]

        while stack:
            node = stack.pop()
            if self._predicate(node):
                fragments.append(str(node))
                continue
            if isinstance(node, Tag):
                # Reversed so the first child is popped first
                stack.extend(reversed(list(node.children)))

        logger.debug(f"Extracted {len(fragments)} fragments")
        return fragments
