"""
Structural statistics over the subtree rooted at a node.

All functions walk the underlying elements level by level or with an
explicit stack, so very deep trees do not hit the recursion limit.
"""

from typing import TYPE_CHECKING, Dict

from .elements import element_children, is_synthetic_element, word_descendants

if TYPE_CHECKING:
    from .node import TreebankNode


def get_height(node: "TreebankNode") -> int:
    """Number of generations below the node: 0 for a leaf."""
    height = 0
    level = element_children(node.element)
    while level:
        height += 1
        level = [child for e in level for child in element_children(e)]
    return height


def get_width(node: "TreebankNode") -> int:
    """
    Largest number of nodes that belong to the same generation below the
    node, i.e. the max of node.get_num_of_children(g) for g in 0..height.
    """
    width = 0
    level = element_children(node.element)
    while level:
        width = max(width, len(level))
        level = [child for e in level for child in element_children(e)]
    return width


def get_max_family_width(node: "TreebankNode") -> int:
    """Largest number of children a single node of the subtree has."""
    max_width = 0
    stack = [node.element]
    while stack:
        element = stack.pop()
        children = element_children(element)
        if len(children) > max_width:
            max_width = len(children)
        stack.extend(children)
    return max_width


def get_num_of_nodes(node: "TreebankNode") -> int:
    """Word descendants plus the node itself. Cached on the node."""
    if node._num_of_nodes is None:
        node._num_of_nodes = len(word_descendants(node.element)) + 1
    return node._num_of_nodes


def get_num_of_words(node: "TreebankNode") -> int:
    """Like get_num_of_nodes, but synthetic (inserted) nodes do not count."""
    count = 0 if is_synthetic_element(node.element) else 1
    count += sum(
        1 for e in word_descendants(node.element) if not is_synthetic_element(e)
    )
    return count


def get_num_of_leaves(node: "TreebankNode") -> int:
    leaves = 0
    stack = [node.element]
    while stack:
        children = element_children(stack.pop())
        if children:
            stack.extend(children)
        else:
            leaves += 1
    return leaves


def tree_profile(node: "TreebankNode") -> Dict[str, int]:
    """All structural statistics of the subtree in one dict."""
    return {
        "num_of_nodes": get_num_of_nodes(node),
        "num_of_words": get_num_of_words(node),
        "num_of_leaves": get_num_of_leaves(node),
        "height": get_height(node),
        "width": get_width(node),
        "max_family_width": get_max_family_width(node),
    }
