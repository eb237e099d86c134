"""Helpers over raw annotation elements (xml.etree.ElementTree.Element)."""

import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

WORD_TAG = "word"
SYNTHETIC_ATTRIBUTE = "insertion_id"
UNKNOWN_ID = -1


def element_children(element: ET.Element) -> List[ET.Element]:
    """Word children of an element, in document order."""
    return element.findall(WORD_TAG)


def iter_tree(element: ET.Element) -> Iterator[ET.Element]:
    """
    The element and everything reachable from it through word children,
    pre-order in document order. Words nested under other tags are not part
    of the tree.
    """
    stack = [element]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(element_children(current)))


def word_descendants(element: ET.Element) -> List[ET.Element]:
    """All tree nodes below an element (the element itself excluded)."""
    return list(iter_tree(element))[1:]


def is_synthetic_element(element: ET.Element) -> bool:
    return SYNTHETIC_ATTRIBUTE in element.attrib


def parse_raw_id(value: Optional[str]) -> Optional[int]:
    """Parse a raw sequence id; None when absent or not an integer."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
