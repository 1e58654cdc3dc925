"""Keep/drop rules for the content elements of a legacy page."""

from enum import Enum
from typing import Optional

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

# Paragraphs mentioning this are page footers
COPYRIGHT_MARKER = "Copyright"

# h3 captions above the embedded district map image
DISTRICT_MAP_MARKER = "District Map"

PHOTO_CONTAINER_CLASS = "photogimg"


class TargetTag(str, Enum):
    """Tags that can ever be kept. Everything else is opened up."""

    UL = "ul"
    P = "p"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    DIV = "div"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional["TargetTag"]:
        """Return the member for a tag name, or None for unrecognized tags."""
        try:
            return cls(name)
        except ValueError:
            return None


def has_none_of(node: Tag, keys: tuple[str, ...]) -> bool:
    """True if the node's own attribute list contains none of ``keys``.

    Only the key is examined; an excluded key rejects under any value.
    """
    return not any(key in node.attrs for key in keys)


def flattened_text(node: PageElement) -> str:
    """Concatenate all text-node data under ``node`` and strip both ends.

    Comments, doctypes, CDATA and processing instructions are not text.
    """
    if isinstance(node, NavigableString):
        if isinstance(node, PreformattedString):
            return ""
        return str(node).strip()

    if not isinstance(node, Tag):
        return ""

    parts = [
        str(descendant)
        for descendant in node.descendants
        if isinstance(descendant, NavigableString) and not isinstance(descendant, PreformattedString)
    ]
    return "".join(parts).strip()


def _is_photo_container(node: Tag) -> bool:
    value = node.attrs.get("class")
    # Multi-valued class parsing yields a list; only a lone exact value matches
    if isinstance(value, list):
        return value == [PHOTO_CONTAINER_CLASS]
    return value == PHOTO_CONTAINER_CLASS


def is_target_element(node: PageElement) -> bool:
    """
    Decide whether a node is kept verbatim (with its subtree) as one fragment.

    False means the node itself is discarded but its children are still
    eligible. Text and other non-element nodes are never kept.

    Args:
        node: Any node of a parsed document

    Returns:
        True to keep the node and stop descending
    """
    if not isinstance(node, Tag):
        return False

    tag = TargetTag.lookup(node.name)

    if tag is TargetTag.UL:
        return has_none_of(node, ("id", "style"))

    if tag is TargetTag.P:
        if not has_none_of(node, ("class", "style")):
            return False
        return COPYRIGHT_MARKER not in flattened_text(node)

    if tag is TargetTag.H3:
        if not has_none_of(node, ("class", "id")):
            return False
        return DISTRICT_MAP_MARKER not in flattened_text(node)

    if tag in (TargetTag.H1, TargetTag.H2):
        return has_none_of(node, ("class", "id"))

    if tag is TargetTag.DIV:
        return _is_photo_container(node)

    return False
